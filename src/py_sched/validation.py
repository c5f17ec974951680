"""Input validation — reject bad input before the clock starts.

Every simulation is a one-shot pure computation over input that is
fully known up front.  That means every failure can be detected before
the first timeline block is emitted, and nothing needs to be retried or
rolled back.  This module performs those checks.

Rejected input:
    - a time quantum that is not a positive integer;
    - a burst time below 1 or an arrival time below 0;
    - numeric fields that are not integers (``True`` is not a number
      here, even though Python says it is an ``int``);
    - empty or duplicate process identifiers.

Errors name the offending process and field so the caller can point
the user at exactly what to fix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.process import Process


class ConfigurationError(ValueError):
    """Raised when a simulation is configured with invalid input."""


def _is_int(value: object) -> bool:
    """Return True if *value* is an int and not a bool."""
    return isinstance(value, int) and not isinstance(value, bool)


def validate_quantum(quantum: object) -> int:
    """Return *quantum* if it is a positive integer.

    Raises:
        ConfigurationError: If the quantum is not a positive integer.

    """
    if not _is_int(quantum):
        msg = f"Time quantum must be an integer, got {quantum!r}"
        raise ConfigurationError(msg)
    if quantum < 1:  # type: ignore[operator]
        msg = f"Time quantum must be positive, got {quantum}"
        raise ConfigurationError(msg)
    return quantum  # type: ignore[return-value]


def validate_processes(processes: Sequence[Process]) -> None:
    """Check every process record and the set as a whole.

    Args:
        processes: The caller's process registry.

    Raises:
        ConfigurationError: On the first invalid field or duplicate id.

    """
    seen: set[str] = set()
    for process in processes:
        pid = process.process_id
        if not isinstance(pid, str) or not pid:
            msg = f"Process identifier must be a non-empty string, got {pid!r}"
            raise ConfigurationError(msg)
        if pid in seen:
            msg = f"Duplicate process identifier {pid!r}"
            raise ConfigurationError(msg)
        seen.add(pid)

        for field in ("arrival_time", "burst_time", "priority"):
            value = getattr(process, field)
            if not _is_int(value):
                msg = f"Process {pid!r}: {field} must be an integer, got {value!r}"
                raise ConfigurationError(msg)

        if process.arrival_time < 0:
            msg = f"Process {pid!r}: arrival_time must be >= 0, got {process.arrival_time}"
            raise ConfigurationError(msg)
        if process.burst_time < 1:
            msg = f"Process {pid!r}: burst_time must be >= 1, got {process.burst_time}"
            raise ConfigurationError(msg)
