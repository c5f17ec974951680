"""Scheduling policies — *who* gets the CPU next.

The simulator owns the clock and the timeline; a policy only answers
"which of these ready processes should run?".  Seven policies ship, in
three families that match the three simulation loops:

Non-preemptive (``SelectionPolicy``):
    - **FCFSPolicy** (First Come, First Served): earliest arrival.
    - **SJFPolicy** (Shortest Job First): smallest burst time.
    - **LJFPolicy** (Longest Job First): largest burst time.
    - **PriorityPolicy**: smallest priority value (lower = more urgent).

    Each is just an *ordering key*.  Ties are broken by input order: the
    candidates arrive in the order the caller listed them and ``min`` is
    stable, so the first one listed wins.

Time-sliced:
    - **RoundRobinPolicy**: FIFO with a fixed time quantum.  The queue
      discipline lives in the simulator; the policy carries the quantum.

Preemptive (``PreemptivePolicy``):
    - **SRTFPolicy** (Shortest Remaining Time First).
    - **LRTFPolicy** (Longest Remaining Time First).

    Each is a strict comparator on remaining time.  The process already
    on the CPU is considered first, so on a tie it keeps running.

Design: Strategy pattern
    Adding an algorithm means writing one small class; the loops in
    ``py_sched.simulator`` are never touched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Protocol

from py_sched.validation import validate_quantum

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from py_sched.process import Process


class SelectionPolicy(Protocol):
    """Interface for non-preemptive policies."""

    name: ClassVar[str]

    def key(self, process: Process) -> int:
        """Return the ordering key; the smallest key is selected."""
        ...  # pragma: no cover

    def select(self, candidates: Sequence[Process]) -> Process | None:
        """Return the process to run next, or None if there are none."""
        ...  # pragma: no cover


class PreemptivePolicy(Protocol):
    """Interface for preemptive remaining-time policies."""

    name: ClassVar[str]

    def prefers(self, candidate: Process, current: Process) -> bool:
        """Return True if *candidate* should displace *current*."""
        ...  # pragma: no cover

    def select(self, candidates: Sequence[Process], *, incumbent: Process | None) -> Process | None:
        """Return the process to run next, or None if there are none."""
        ...  # pragma: no cover


def _smallest_key(candidates: Sequence[Process], key: Callable[[Process], int]) -> Process | None:
    """Return the candidate with the smallest key (first listed on ties)."""
    if not candidates:
        return None
    return min(candidates, key=key)


class FCFSPolicy:
    """First Come, First Served — the earliest arrival runs first.

    Suffers from the convoy effect: one long job at the front makes
    every short job behind it wait.
    """

    name: ClassVar[str] = "fcfs"

    def key(self, process: Process) -> int:
        """Order by arrival time."""
        return process.arrival_time

    def select(self, candidates: Sequence[Process]) -> Process | None:
        """Return the candidate with the smallest key."""
        return _smallest_key(candidates, self.key)


class SJFPolicy:
    """Shortest Job First — minimises average waiting time.

    Non-preemptive: a short job arriving while a long one runs must
    still wait for it to finish.
    """

    name: ClassVar[str] = "sjf"

    def key(self, process: Process) -> int:
        """Order by burst time, shortest first."""
        return process.burst_time

    def select(self, candidates: Sequence[Process]) -> Process | None:
        """Return the candidate with the smallest key."""
        return _smallest_key(candidates, self.key)


class LJFPolicy:
    """Longest Job First — the mirror image of SJF."""

    name: ClassVar[str] = "ljf"

    def key(self, process: Process) -> int:
        """Order by burst time, longest first."""
        return -process.burst_time

    def select(self, candidates: Sequence[Process]) -> Process | None:
        """Return the candidate with the smallest key."""
        return _smallest_key(candidates, self.key)


class PriorityPolicy:
    """Priority scheduling — the lowest priority number runs first.

    Non-preemptive, so an urgent arrival cannot displace a running
    process.  Low-priority work can starve while urgent work keeps
    arriving.
    """

    name: ClassVar[str] = "priority"

    def key(self, process: Process) -> int:
        """Order by priority value."""
        return process.priority

    def select(self, candidates: Sequence[Process]) -> Process | None:
        """Return the candidate with the smallest key."""
        return _smallest_key(candidates, self.key)


class RoundRobinPolicy:
    """Round Robin — each turn is at most one time quantum long."""

    name: ClassVar[str] = "rr"

    def __init__(self, *, quantum: int) -> None:
        """Create a Round Robin policy.

        Args:
            quantum: Maximum slice length granted per turn.

        Raises:
            ConfigurationError: If the quantum is not a positive integer.

        """
        self._quantum = validate_quantum(quantum)

    @property
    def quantum(self) -> int:
        """Return the time quantum."""
        return self._quantum

    def slice_for(self, process: Process) -> int:
        """Return how long *process* runs this turn."""
        return min(self._quantum, process.remaining_time)


def _preferred(
    candidates: Sequence[Process],
    incumbent: Process | None,
    prefers: Callable[[Process, Process], bool],
) -> Process | None:
    """Pick the best candidate, letting the incumbent win ties.

    Args:
        candidates: Ready processes in input order.
        incumbent: The process that held the CPU until now, if any.
        prefers: Strict comparator, True if the first beats the second.

    """
    best = incumbent if incumbent is not None and incumbent in candidates else None
    for process in candidates:
        if best is None or prefers(process, best):
            best = process
    return best


class SRTFPolicy:
    """Shortest Remaining Time First — preemptive SJF.

    A newly arrived process with less work left than the running one
    takes the CPU immediately.
    """

    name: ClassVar[str] = "srtf"

    def prefers(self, candidate: Process, current: Process) -> bool:
        """Prefer strictly less remaining time."""
        return candidate.remaining_time < current.remaining_time

    def select(self, candidates: Sequence[Process], *, incumbent: Process | None) -> Process | None:
        """Pick the best candidate; the incumbent wins ties."""
        return _preferred(candidates, incumbent, self.prefers)


class LRTFPolicy:
    """Longest Remaining Time First — preemptive LJF."""

    name: ClassVar[str] = "lrtf"

    def prefers(self, candidate: Process, current: Process) -> bool:
        """Prefer strictly more remaining time."""
        return candidate.remaining_time > current.remaining_time

    def select(self, candidates: Sequence[Process], *, incumbent: Process | None) -> Process | None:
        """Pick the best candidate; the incumbent wins ties."""
        return _preferred(candidates, incumbent, self.prefers)
