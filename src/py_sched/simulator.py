"""The simulation engine — three loops, seven policies.

Every simulator is a pure function of its input: it validates the
caller's processes, works on private copies, and returns a fresh
``SimulationResult``.  Same input, same output: there is no randomness
and no wall clock anywhere in here.

The seven policies share three loop skeletons:

**Non-preemptive** (FCFS, SJF, LJF, Priority)::

    SELECT → RUN-TO-COMPLETION → ADVANCE

The policy picks among arrived processes; the winner runs its whole
burst as one block.  A better process arriving meanwhile must wait.

**Round Robin**::

    ADMIT ARRIVALS → POP HEAD → RUN ONE SLICE → ADMIT ARRIVALS → REQUEUE

Arrivals that happened during a slice join the queue *ahead of* the
process that was just preempted.  Every slice is its own block, even
when the same process gets two slices in a row.

**Event-driven preemptive** (SRTF, LRTF)::

    SELECT → RUN UNTIL NEXT EVENT → MERGE BLOCK

The clock jumps straight to the next event (the running process's
completion or the next arrival, whichever is sooner) rather than
ticking one unit at a time.  Consecutive intervals of the same process
are merged into one block.

Whenever nothing is ready, all loops jump the clock to the next arrival
and cover the gap with an idle block.  The clock starts at the earliest
arrival, so a timeline always covers ``[first arrival, last completion]``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from py_sched.config import DEFAULT_QUANTUM, IDLE_COLOR
from py_sched.logging import LogLevel
from py_sched.metrics import aggregate, empty_result
from py_sched.policies import (
    FCFSPolicy,
    LJFPolicy,
    LRTFPolicy,
    PriorityPolicy,
    RoundRobinPolicy,
    SJFPolicy,
    SRTFPolicy,
)
from py_sched.process import ProcessState
from py_sched.ready_queue import ReadyQueue
from py_sched.timeline import Running, Timeline
from py_sched.validation import validate_processes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.logging import Logger
    from py_sched.metrics import SimulationResult
    from py_sched.policies import PreemptivePolicy, SelectionPolicy
    from py_sched.process import Process


# -- Shared helpers -----------------------------------------------------------


def _prepare(processes: Sequence[Process]) -> list[Process]:
    """Validate the caller's processes and return private copies."""
    validate_processes(processes)
    return [p.copy() for p in processes]


def _log(logger: Logger | None, level: LogLevel, message: str, *, source: str, time: int) -> None:
    """Record an event if a logger was supplied."""
    if logger is not None:
        logger.log(level, message, source=source, time=time)


def _admit_arrivals(store: Sequence[Process], clock: int) -> None:
    """Admit every NEW process that has arrived by *clock*, in input order."""
    for process in store:
        if process.state is ProcessState.NEW and process.arrival_time <= clock:
            process.admit()


def _next_arrival(store: Sequence[Process]) -> int:
    """Return the earliest arrival among processes not yet admitted."""
    return min(p.arrival_time for p in store if p.state is ProcessState.NEW)


def _idle_gap(timeline: Timeline, store: Sequence[Process], clock: int, *, source: str, logger: Logger | None) -> int:
    """Cover the gap up to the next arrival with idle time; return the new clock."""
    target = _next_arrival(store)
    timeline.idle_until(clock, target, IDLE_COLOR)
    _log(logger, LogLevel.DEBUG, f"CPU idle until {target}", source=source, time=clock)
    return target


def _finish(process: Process, clock: int, *, source: str, logger: Logger | None) -> None:
    """Terminate *process* at *clock* and log it."""
    process.finish(at=clock)
    _log(
        logger,
        LogLevel.INFO,
        f"{process.process_id} completed (turnaround={process.turnaround_time}, waiting={process.waiting_time})",
        source=source,
        time=clock,
    )


# -- Loop skeletons -------------------------------------------------------------


def run_non_preemptive(
    processes: Sequence[Process],
    policy: SelectionPolicy,
    *,
    logger: Logger | None = None,
) -> SimulationResult:
    """Simulate a run-to-completion policy.

    Args:
        processes: The caller's processes (not modified).
        policy: Chooses among arrived processes by its ordering key.
        logger: Optional event log.

    Returns:
        The simulation result.

    Raises:
        ConfigurationError: If the input is invalid.

    """
    store = _prepare(processes)
    if not store:
        return empty_result(policy.name)

    timeline = Timeline()
    clock = min(p.arrival_time for p in store)
    remaining = len(store)
    while remaining:
        _admit_arrivals(store, clock)
        ready = [p for p in store if p.state is ProcessState.READY]
        chosen = policy.select(ready)
        if chosen is None:
            clock = _idle_gap(timeline, store, clock, source=policy.name, logger=logger)
            continue

        chosen.dispatch(at=clock)
        _log(logger, LogLevel.INFO, f"dispatch {chosen.process_id}", source=policy.name, time=clock)
        chosen.run(chosen.remaining_time)
        end = clock + chosen.burst_time
        timeline.append(Running(chosen.process_id), clock, end, chosen.color)
        clock = end
        _finish(chosen, clock, source=policy.name, logger=logger)
        remaining -= 1

    return aggregate(policy.name, timeline, store)


def run_time_sliced(
    processes: Sequence[Process],
    policy: RoundRobinPolicy,
    *,
    logger: Logger | None = None,
) -> SimulationResult:
    """Simulate Round Robin with the policy's time quantum.

    Processes join the ready queue in arrival order (input order breaks
    ties).  One block is emitted per slice; consecutive slices of the
    same process are deliberately left unmerged.

    Raises:
        ConfigurationError: If the input is invalid.

    """
    store = _prepare(processes)
    if not store:
        return empty_result(policy.name)

    # Indices sorted by arrival; sorted() is stable, so input order breaks ties.
    by_arrival = sorted(range(len(store)), key=lambda i: store[i].arrival_time)
    queue = ReadyQueue(store)
    cursor = 0

    def admit_until(clock: int) -> None:
        nonlocal cursor
        while cursor < len(by_arrival) and store[by_arrival[cursor]].arrival_time <= clock:
            index = by_arrival[cursor]
            store[index].admit()
            queue.push(index)
            cursor += 1

    timeline = Timeline()
    clock = store[by_arrival[0]].arrival_time
    remaining = len(store)
    admit_until(clock)
    while remaining:
        if not queue:
            clock = _idle_gap(timeline, store, clock, source=policy.name, logger=logger)
            admit_until(clock)
            continue

        index = queue.pop()
        process = store[index]
        process.dispatch(at=clock)
        span = policy.slice_for(process)
        process.run(span)
        timeline.append(Running(process.process_id), clock, clock + span, process.color)
        _log(
            logger,
            LogLevel.INFO,
            f"dispatch {process.process_id} for {span}",
            source=policy.name,
            time=clock,
        )
        clock += span

        # Arrivals during the slice go ahead of the preempted process.
        admit_until(clock)
        if process.remaining_time == 0:
            _finish(process, clock, source=policy.name, logger=logger)
            remaining -= 1
        else:
            process.preempt()
            queue.push(index)
            _log(
                logger,
                LogLevel.DEBUG,
                f"quantum expired for {process.process_id} ({process.remaining_time} remaining)",
                source=policy.name,
                time=clock,
            )

    return aggregate(policy.name, timeline, store)


def run_preemptive(
    processes: Sequence[Process],
    policy: PreemptivePolicy,
    *,
    logger: Logger | None = None,
) -> SimulationResult:
    """Simulate an event-driven preemptive remaining-time policy.

    At every event the policy re-selects among ready processes; the
    running process keeps the CPU on ties.

    Raises:
        ConfigurationError: If the input is invalid.

    """
    store = _prepare(processes)
    if not store:
        return empty_result(policy.name)

    timeline = Timeline()
    clock = min(p.arrival_time for p in store)
    remaining = len(store)
    incumbent: Process | None = None
    _admit_arrivals(store, clock)
    while remaining:
        ready = [p for p in store if p.state in {ProcessState.READY, ProcessState.RUNNING}]
        chosen = policy.select(ready, incumbent=incumbent)
        if chosen is None:
            clock = _idle_gap(timeline, store, clock, source=policy.name, logger=logger)
            _admit_arrivals(store, clock)
            continue

        if chosen is not incumbent:
            if incumbent is not None:
                incumbent.preempt()
                _log(
                    logger,
                    LogLevel.DEBUG,
                    f"{chosen.process_id} preempts {incumbent.process_id}",
                    source=policy.name,
                    time=clock,
                )
            chosen.dispatch(at=clock)
            _log(logger, LogLevel.INFO, f"dispatch {chosen.process_id}", source=policy.name, time=clock)

        # Next event: this process completes, or someone else arrives first.
        event = clock + chosen.remaining_time
        if any(p.state is ProcessState.NEW for p in store):
            event = min(event, _next_arrival(store))

        chosen.run(event - clock)
        timeline.extend_or_append(Running(chosen.process_id), clock, event, chosen.color)
        clock = event
        _admit_arrivals(store, clock)
        if chosen.remaining_time == 0:
            _finish(chosen, clock, source=policy.name, logger=logger)
            remaining -= 1
            incumbent = None
        else:
            incumbent = chosen

    return aggregate(policy.name, timeline, store)


# -- The seven simulators -------------------------------------------------------


def run_fcfs(processes: Sequence[Process], *, logger: Logger | None = None) -> SimulationResult:
    """Simulate First Come, First Served."""
    return run_non_preemptive(processes, FCFSPolicy(), logger=logger)


def run_sjf(processes: Sequence[Process], *, logger: Logger | None = None) -> SimulationResult:
    """Simulate non-preemptive Shortest Job First."""
    return run_non_preemptive(processes, SJFPolicy(), logger=logger)


def run_ljf(processes: Sequence[Process], *, logger: Logger | None = None) -> SimulationResult:
    """Simulate non-preemptive Longest Job First."""
    return run_non_preemptive(processes, LJFPolicy(), logger=logger)


def run_priority(processes: Sequence[Process], *, logger: Logger | None = None) -> SimulationResult:
    """Simulate non-preemptive Priority scheduling (lower number first)."""
    return run_non_preemptive(processes, PriorityPolicy(), logger=logger)


def run_round_robin(
    processes: Sequence[Process],
    *,
    quantum: int = DEFAULT_QUANTUM,
    logger: Logger | None = None,
) -> SimulationResult:
    """Simulate Round Robin with the given quantum."""
    return run_time_sliced(processes, RoundRobinPolicy(quantum=quantum), logger=logger)


def run_srtf(processes: Sequence[Process], *, logger: Logger | None = None) -> SimulationResult:
    """Simulate Shortest Remaining Time First."""
    return run_preemptive(processes, SRTFPolicy(), logger=logger)


def run_lrtf(processes: Sequence[Process], *, logger: Logger | None = None) -> SimulationResult:
    """Simulate Longest Remaining Time First."""
    return run_preemptive(processes, LRTFPolicy(), logger=logger)
