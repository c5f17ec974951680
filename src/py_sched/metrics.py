"""Simulation results and the metrics derived from them.

Once every process has finished, five numbers summarise the run:

- **average waiting time** — mean of (turnaround − burst);
- **average turnaround time** — mean of (completion − arrival);
- **average response time** — mean of (first start − arrival);
- **CPU utilisation** — ``100 × total burst / end of last block``;
- **throughput** — ``process count / end of last block``.

Both ratios divide by the end time of the final timeline block, so an
empty input (no blocks) is defined to give zero for every metric
instead of dividing by zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.process import Process
    from py_sched.timeline import Timeline, TimelineBlock


class Metric(StrEnum):
    """Names of the five aggregate metrics."""

    AVERAGE_WAITING_TIME = "average_waiting_time"
    AVERAGE_TURNAROUND_TIME = "average_turnaround_time"
    AVERAGE_RESPONSE_TIME = "average_response_time"
    CPU_UTILIZATION = "cpu_utilization"
    THROUGHPUT = "throughput"

    @property
    def higher_is_better(self) -> bool:
        """Return True for utilisation and throughput."""
        return self in {Metric.CPU_UTILIZATION, Metric.THROUGHPUT}


@dataclass(frozen=True)
class SimulationResult:
    """Everything one simulation produced.

    The result owns fresh process copies; nothing in it is shared with
    the caller's input.

    Attributes:
        policy: Identifier of the policy that produced it.
        timeline: Gantt blocks in time order.
        processes: Finished process copies, in input order.

    """

    policy: str
    timeline: tuple[TimelineBlock, ...] = ()
    processes: tuple[Process, ...] = ()
    average_waiting_time: float = 0.0
    average_turnaround_time: float = 0.0
    average_response_time: float = 0.0
    cpu_utilization: float = 0.0
    throughput: float = 0.0
    _by_id: dict[str, Process] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Index processes by id for ``process()`` lookups."""
        self._by_id.update({p.process_id: p for p in self.processes})

    @property
    def end_time(self) -> int:
        """Return the end of the last block, or 0 when empty."""
        return self.timeline[-1].end if self.timeline else 0

    def metric(self, name: Metric | str) -> float:
        """Return one of the five metrics by name."""
        return float(getattr(self, Metric(name).value))

    def process(self, process_id: str) -> Process:
        """Return the finished copy of *process_id*.

        Raises:
            KeyError: If no such process took part.

        """
        return self._by_id[process_id]

    def block_at(self, time: int) -> TimelineBlock | None:
        """Return the block whose ``[start, end)`` interval contains *time*.

        This is the lookup a renderer's time cursor uses.  A time on a
        boundary belongs to the block that starts there; a time before
        the first block or at/after the end gives None.
        """
        for block in self.timeline:
            if block.start <= time < block.end:
                return block
        return None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly dict of the whole result."""
        data: dict[str, Any] = {
            "policy": self.policy,
            "timeline": [b.to_dict() for b in self.timeline],
            "processes": [p.to_dict() for p in self.processes],
        }
        data.update({m.value: self.metric(m) for m in Metric})
        return data


def _mean(values: Sequence[int]) -> float:
    """Return the arithmetic mean of *values* (0.0 when empty)."""
    return sum(values) / len(values) if values else 0.0


def empty_result(policy: str) -> SimulationResult:
    """Return the all-zero result for an empty process set."""
    return SimulationResult(policy=policy)


def aggregate(policy: str, timeline: Timeline, processes: Sequence[Process]) -> SimulationResult:
    """Build the result for a completed simulation.

    Args:
        policy: Identifier of the policy that ran.
        timeline: The finished timeline.
        processes: The finished process copies, in input order.

    Raises:
        RuntimeError: If any process has not finished.

    """
    if not processes:
        return empty_result(policy)

    waiting: list[int] = []
    turnaround: list[int] = []
    response: list[int] = []
    for process in processes:
        if process.waiting_time is None or process.turnaround_time is None or process.response_time is None:
            msg = f"Cannot aggregate: process {process.process_id} has not finished"
            raise RuntimeError(msg)
        waiting.append(process.waiting_time)
        turnaround.append(process.turnaround_time)
        response.append(process.response_time)

    total_time = timeline.end_time
    total_burst = sum(p.burst_time for p in processes)
    return SimulationResult(
        policy=policy,
        timeline=timeline.blocks,
        processes=tuple(processes),
        average_waiting_time=_mean(waiting),
        average_turnaround_time=_mean(turnaround),
        average_response_time=_mean(response),
        cpu_utilization=100 * total_burst / total_time,
        throughput=len(processes) / total_time,
    )
