"""Dispatch — the single public entry point of the engine.

``simulate`` maps a policy identifier (plus, for Round Robin, a time
quantum) onto the matching simulator and runs it::

    result = simulate(processes, "rr", quantum=3)

The identifiers are the short names used throughout the UI and the web
API: ``fcfs``, ``sjf``, ``rr``, ``ljf``, ``priority``, ``srtf``, ``lrtf``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, TypeAlias

from py_sched.config import DEFAULT_QUANTUM
from py_sched.simulator import (
    run_fcfs,
    run_ljf,
    run_lrtf,
    run_priority,
    run_round_robin,
    run_sjf,
    run_srtf,
)
from py_sched.validation import ConfigurationError, validate_quantum

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from py_sched.logging import Logger
    from py_sched.metrics import SimulationResult
    from py_sched.process import Process


class PolicyName(StrEnum):
    """Identifiers of the seven scheduling policies."""

    FCFS = "fcfs"
    SJF = "sjf"
    RR = "rr"
    LJF = "ljf"
    PRIORITY = "priority"
    SRTF = "srtf"
    LRTF = "lrtf"

    @property
    def display_name(self) -> str:
        """Return the human-readable policy name."""
        return _TITLES[self]

    @property
    def uses_quantum(self) -> bool:
        """Return True if the policy takes a time quantum."""
        return self is PolicyName.RR

    @property
    def preemptive(self) -> bool:
        """Return True if a running process can lose the CPU."""
        return self in {PolicyName.RR, PolicyName.SRTF, PolicyName.LRTF}


_TITLES: dict[PolicyName, str] = {
    PolicyName.FCFS: "First Come First Serve",
    PolicyName.SJF: "Shortest Job First",
    PolicyName.RR: "Round Robin",
    PolicyName.LJF: "Longest Job First",
    PolicyName.PRIORITY: "Priority",
    PolicyName.SRTF: "Shortest Remaining Time First",
    PolicyName.LRTF: "Longest Remaining Time First",
}

_Simulator: TypeAlias = "Callable[..., SimulationResult]"

_SIMULATORS: dict[PolicyName, _Simulator] = {
    PolicyName.FCFS: run_fcfs,
    PolicyName.SJF: run_sjf,
    PolicyName.LJF: run_ljf,
    PolicyName.PRIORITY: run_priority,
    PolicyName.SRTF: run_srtf,
    PolicyName.LRTF: run_lrtf,
}


def parse_policy(policy: PolicyName | str) -> PolicyName:
    """Return the ``PolicyName`` for *policy* (case-insensitive).

    Raises:
        ConfigurationError: If the name is not a known policy.

    """
    if isinstance(policy, PolicyName):
        return policy
    try:
        return PolicyName(str(policy).strip().lower())
    except ValueError:
        known = ", ".join(p.value for p in PolicyName)
        msg = f"Unknown policy {policy!r} (expected one of: {known})"
        raise ConfigurationError(msg) from None


def simulate(
    processes: Sequence[Process],
    policy: PolicyName | str,
    *,
    quantum: int | None = None,
    logger: Logger | None = None,
) -> SimulationResult:
    """Run one simulation.

    Args:
        processes: The caller's processes (never modified).
        policy: Which policy to run.
        quantum: Round Robin time quantum; defaults to ``DEFAULT_QUANTUM``.
            Ignored by other policies, but still rejected if invalid.
        logger: Optional event log.

    Returns:
        A fresh, independently owned result.

    Raises:
        ConfigurationError: On an unknown policy, invalid quantum, or
            invalid process input.

    """
    name = parse_policy(policy)
    if quantum is not None:
        validate_quantum(quantum)
    if name is PolicyName.RR:
        return run_round_robin(
            processes,
            quantum=DEFAULT_QUANTUM if quantum is None else quantum,
            logger=logger,
        )
    return _SIMULATORS[name](processes, logger=logger)
