"""Process records — the schedulable units of a simulation.

A caller describes each process with four facts: an identifier, when it
arrives, how much CPU time it needs (its *burst*), and a priority.
Everything else on the record (start, completion, waiting, turnaround
and response times) is *derived* by the simulator.

Derived fields start as ``None`` ("not yet computed") rather than a magic
``-1``, so an unset value can never leak into arithmetic unnoticed.

Processes follow a strict state machine: each transition method
enforces that the process is in the correct source state before moving
it.  The first dispatch records the start time; later dispatches (after
a preemption) never touch it again.

State machine::

    NEW → READY ⇄ RUNNING → TERMINATED

Simulators never mutate the caller's records.  They work on ``copy()``
results, which start over in the NEW state.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from py_sched.validation import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Mapping


class ProcessState(StrEnum):
    """Lifecycle states of a simulated process.

    - NEW: submitted by the caller, not yet admitted by a simulator.
    - READY: admitted and waiting for the CPU.
    - RUNNING: currently occupying the CPU.
    - TERMINATED: all of its burst has been serviced.
    """

    NEW = "new"
    READY = "ready"
    RUNNING = "running"
    TERMINATED = "terminated"


class Process:
    """A process to be scheduled, plus the timings derived for it.

    Priority follows the classroom convention: a *lower* number is more
    urgent.  It only matters to the Priority policy.
    """

    def __init__(
        self,
        *,
        process_id: str,
        arrival_time: int,
        burst_time: int,
        priority: int = 0,
        color: str | None = None,
    ) -> None:
        """Create a process in the NEW state.

        Args:
            process_id: Unique label (e.g. "P1").
            arrival_time: Clock time at which the process becomes ready.
            burst_time: Total CPU time the process needs.
            priority: Scheduling priority (lower = more urgent).
            color: Display colour, carried through untouched.

        """
        self._process_id = process_id
        self._arrival_time = arrival_time
        self._burst_time = burst_time
        self._priority = priority
        self._color = color
        self._state = ProcessState.NEW
        self._remaining_time = burst_time
        self._start_time: int | None = None
        self._completion_time: int | None = None

    # -- Caller-supplied fields ----------------------------------------------

    @property
    def process_id(self) -> str:
        """Return the process identifier."""
        return self._process_id

    @property
    def arrival_time(self) -> int:
        """Return the arrival time."""
        return self._arrival_time

    @property
    def burst_time(self) -> int:
        """Return the total CPU time required."""
        return self._burst_time

    @property
    def priority(self) -> int:
        """Return the priority (lower = more urgent)."""
        return self._priority

    @property
    def color(self) -> str | None:
        """Return the display colour, if any."""
        return self._color

    # -- Derived fields ------------------------------------------------------

    @property
    def state(self) -> ProcessState:
        """Return the current lifecycle state."""
        return self._state

    @property
    def remaining_time(self) -> int:
        """Return the CPU time still owed to this process."""
        return self._remaining_time

    @property
    def start_time(self) -> int | None:
        """Return the time of the first dispatch, or None."""
        return self._start_time

    @property
    def completion_time(self) -> int | None:
        """Return the time the last slice ended, or None."""
        return self._completion_time

    @property
    def turnaround_time(self) -> int | None:
        """Return completion minus arrival, or None while unfinished."""
        if self._completion_time is None:
            return None
        return self._completion_time - self._arrival_time

    @property
    def waiting_time(self) -> int | None:
        """Return turnaround minus burst, or None while unfinished."""
        turnaround = self.turnaround_time
        if turnaround is None:
            return None
        return turnaround - self._burst_time

    @property
    def response_time(self) -> int | None:
        """Return first start minus arrival, or None before first dispatch."""
        if self._start_time is None:
            return None
        return self._start_time - self._arrival_time

    # -- State transitions ---------------------------------------------------

    def _transition(self, action: str, expected: ProcessState, target: ProcessState) -> None:
        """Enforce a state transition.

        Raises:
            RuntimeError: If the process is not in the expected state.

        """
        if self._state is not expected:
            msg = f"Cannot {action}: process {self._process_id} is {self._state}, expected {expected}"
            raise RuntimeError(msg)
        self._state = target

    def admit(self) -> None:
        """Transition NEW → READY."""
        self._transition("admit", ProcessState.NEW, ProcessState.READY)

    def dispatch(self, *, at: int) -> None:
        """Transition READY → RUNNING at clock time *at*.

        The first dispatch fixes the start time; it is never updated
        afterwards, however many times the process is resumed.
        """
        self._transition("dispatch", ProcessState.READY, ProcessState.RUNNING)
        if self._start_time is None:
            self._start_time = at

    def run(self, duration: int) -> None:
        """Consume *duration* units of the remaining burst.

        Raises:
            RuntimeError: If the process is not running.
            ValueError: If *duration* is not in ``1..remaining_time``.

        """
        if self._state is not ProcessState.RUNNING:
            msg = f"Cannot run: process {self._process_id} is {self._state}, expected running"
            raise RuntimeError(msg)
        if not 0 < duration <= self._remaining_time:
            msg = (
                f"Cannot run process {self._process_id} for {duration}: "
                f"{self._remaining_time} remaining"
            )
            raise ValueError(msg)
        self._remaining_time -= duration

    def preempt(self) -> None:
        """Transition RUNNING → READY."""
        self._transition("preempt", ProcessState.RUNNING, ProcessState.READY)

    def finish(self, *, at: int) -> None:
        """Transition RUNNING → TERMINATED, completing at clock time *at*.

        Raises:
            RuntimeError: If the process is not running or has work left.

        """
        if self._remaining_time != 0:
            msg = f"Cannot finish: process {self._process_id} has {self._remaining_time} remaining"
            raise RuntimeError(msg)
        self._transition("finish", ProcessState.RUNNING, ProcessState.TERMINATED)
        self._completion_time = at

    # -- Copying and serialisation -------------------------------------------

    def copy(self) -> Process:
        """Return a fresh NEW-state process with the same caller fields."""
        return Process(
            process_id=self._process_id,
            arrival_time=self._arrival_time,
            burst_time=self._burst_time,
            priority=self._priority,
            color=self._color,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Process:
        """Build a process from a JSON-like mapping.

        Accepts ``id`` or ``process_id`` for the identifier; ``priority``
        defaults to 0 and ``color`` to None.

        Raises:
            ConfigurationError: If a required key is missing.

        """
        process_id = data.get("process_id", data.get("id"))
        if process_id is None:
            msg = f"Process entry is missing an 'id': {dict(data)!r}"
            raise ConfigurationError(msg)
        for key in ("arrival_time", "burst_time"):
            if key not in data:
                msg = f"Process {process_id!r} is missing '{key}'"
                raise ConfigurationError(msg)
        return cls(
            process_id=process_id,
            arrival_time=data["arrival_time"],
            burst_time=data["burst_time"],
            priority=data.get("priority", 0),
            color=data.get("color"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return every field as a JSON-friendly dict."""
        return {
            "id": self._process_id,
            "arrival_time": self._arrival_time,
            "burst_time": self._burst_time,
            "priority": self._priority,
            "color": self._color,
            "remaining_time": self._remaining_time,
            "start_time": self._start_time,
            "completion_time": self._completion_time,
            "waiting_time": self.waiting_time,
            "turnaround_time": self.turnaround_time,
            "response_time": self.response_time,
        }

    def __repr__(self) -> str:
        """Return a debug-friendly representation."""
        return (
            f"Process(id={self._process_id!r}, arrival={self._arrival_time}, "
            f"burst={self._burst_time}, state={self._state})"
        )
