"""Simulation configuration — defaults and caller-supplied settings.

A simulation is configured by two things: which policy to run, and (for
Round Robin only) the time quantum.  Callers that speak JSON (the web
API, saved test cases) hand us plain mappings; ``SimulationConfig``
turns those into a validated, immutable value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from py_sched.validation import ConfigurationError, validate_quantum

if TYPE_CHECKING:
    from collections.abc import Mapping

# Quantum used by Round Robin when the caller does not supply one.
DEFAULT_QUANTUM = 2

# Display colour attached to idle blocks.  Opaque to the simulator.
IDLE_COLOR = "#E5E7EB"


@dataclass(frozen=True)
class SimulationConfig:
    """Which policy to run and with what quantum.

    Attributes:
        policy: Policy identifier (e.g. ``"rr"``).
        quantum: Round Robin time quantum; None means the default.

    """

    policy: str
    quantum: int | None = None

    def __post_init__(self) -> None:
        """Reject a non-string policy or an invalid explicit quantum."""
        if not isinstance(self.policy, str) or not self.policy:
            msg = f"Policy must be a non-empty string, got {self.policy!r}"
            raise ConfigurationError(msg)
        if self.quantum is not None:
            validate_quantum(self.quantum)

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> SimulationConfig:
        """Build a config from a JSON-like mapping.

        Args:
            data: Mapping with ``policy`` and optional ``quantum`` keys.

        Raises:
            ConfigurationError: If the policy is missing or a value is invalid.

        """
        policy = data.get("policy")
        if policy is None:
            msg = "Missing 'policy' field"
            raise ConfigurationError(msg)
        quantum = data.get("quantum")
        return cls(policy=policy, quantum=quantum)  # type: ignore[arg-type]
