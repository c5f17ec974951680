"""Compare — run every policy on the same workload.

Side-by-side numbers are the quickest way to see the trade-offs: SJF
minimises average waiting time, Round Robin bounds response time, FCFS
suffers the convoy effect, and so on.

``compare`` runs all seven policies over one process set and returns a
``Comparison`` that can rank them by any of the five metrics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from py_sched.dispatch import PolicyName, parse_policy, simulate
from py_sched.metrics import Metric
from py_sched.validation import validate_processes

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.logging import Logger
    from py_sched.metrics import SimulationResult
    from py_sched.process import Process


@dataclass(frozen=True)
class Comparison:
    """Results of every policy over one workload, in ``PolicyName`` order."""

    results: tuple[tuple[PolicyName, SimulationResult], ...]

    def result(self, policy: PolicyName | str) -> SimulationResult:
        """Return the result for *policy*.

        The name is parsed the way ``simulate`` parses it, so case and
        surrounding whitespace do not matter.

        Raises:
            ConfigurationError: If *policy* names no known policy.
            KeyError: If the policy is known but was not part of the comparison.

        """
        wanted = parse_policy(policy)
        for name, result in self.results:
            if name is wanted:
                return result
        raise KeyError(wanted)

    def ranking(self, metric: Metric | str) -> list[PolicyName]:
        """Return policies from best to worst on *metric*.

        Lower is better for the three averages, higher is better for
        utilisation and throughput.  Ties keep ``PolicyName`` order.
        """
        chosen = Metric(metric)
        sign = -1 if chosen.higher_is_better else 1
        ordered = sorted(self.results, key=lambda item: sign * item[1].metric(chosen))
        return [name for name, _ in ordered]

    def best_by(self, metric: Metric | str) -> PolicyName:
        """Return the best policy on *metric*."""
        return self.ranking(metric)[0]

    def to_dict(self) -> dict[str, Any]:
        """Return each policy's five metrics as a JSON-friendly dict."""
        return {name.value: {m.value: result.metric(m) for m in Metric} for name, result in self.results}


def compare(
    processes: Sequence[Process],
    *,
    quantum: int | None = None,
    logger: Logger | None = None,
) -> Comparison:
    """Simulate *processes* under every policy.

    Args:
        processes: The workload (never modified).
        quantum: Round Robin time quantum.
        logger: Optional event log shared by all runs; entries carry
            the policy name as their source.

    Raises:
        ConfigurationError: If the input or the quantum is invalid.

    """
    validate_processes(processes)
    return Comparison(
        results=tuple((name, simulate(processes, name, quantum=quantum, logger=logger)) for name in PolicyName),
    )
