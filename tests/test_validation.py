"""Tests for input validation.

Invalid configuration is rejected before the clock starts, with a
message naming the offending process and field.  Nothing is silently
clamped.
"""

import pytest

from py_sched.dispatch import simulate
from py_sched.process import Process
from py_sched.validation import ConfigurationError, validate_processes, validate_quantum


def _p(pid: str = "P1", arrival: object = 0, burst: object = 1, priority: object = 0) -> Process:
    """Build a process, allowing deliberately bad field values."""
    return Process(process_id=pid, arrival_time=arrival, burst_time=burst, priority=priority)  # type: ignore[arg-type]


class TestQuantum:
    """The Round Robin quantum must be a positive integer."""

    def test_positive_quantum_accepted(self) -> None:
        """A positive integer passes through unchanged."""
        expected = 3
        assert validate_quantum(3) == expected

    @pytest.mark.parametrize("quantum", [0, -1])
    def test_non_positive_rejected(self, quantum: int) -> None:
        """Zero and negatives are rejected, not clamped."""
        with pytest.raises(ConfigurationError, match="must be positive"):
            validate_quantum(quantum)

    @pytest.mark.parametrize("quantum", [1.5, "2", True, None])
    def test_non_integer_rejected(self, quantum: object) -> None:
        """Floats, strings, booleans and None are not quanta."""
        with pytest.raises(ConfigurationError, match="must be an integer"):
            validate_quantum(quantum)

    def test_configuration_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch configuration errors."""
        with pytest.raises(ValueError, match="positive"):
            validate_quantum(0)


class TestProcesses:
    """Every process field is checked, and ids must be unique."""

    def test_valid_input_passes(self) -> None:
        """A well-formed registry raises nothing."""
        validate_processes([_p("A"), _p("B", arrival=3, burst=2)])

    def test_empty_input_passes(self) -> None:
        """An empty registry is valid."""
        validate_processes([])

    def test_zero_burst_rejected(self) -> None:
        """Burst time must be at least 1; the error names the process."""
        with pytest.raises(ConfigurationError, match=r"'P1': burst_time must be >= 1"):
            validate_processes([_p(burst=0)])

    def test_negative_arrival_rejected(self) -> None:
        """Arrival time cannot be negative."""
        with pytest.raises(ConfigurationError, match=r"'P1': arrival_time must be >= 0"):
            validate_processes([_p(arrival=-1)])

    @pytest.mark.parametrize(
        ("field", "kwargs"),
        [
            ("arrival_time", {"arrival": 1.5}),
            ("burst_time", {"burst": "3"}),
            ("priority", {"priority": None}),
            ("burst_time", {"burst": True}),
        ],
    )
    def test_non_integer_fields_rejected(self, field: str, kwargs: dict[str, object]) -> None:
        """Numeric fields must be real integers."""
        with pytest.raises(ConfigurationError, match=f"{field} must be an integer"):
            validate_processes([_p(**kwargs)])  # type: ignore[arg-type]

    def test_duplicate_ids_rejected(self) -> None:
        """Identifiers must be unique within one run."""
        with pytest.raises(ConfigurationError, match="Duplicate process identifier 'P1'"):
            validate_processes([_p("P1"), _p("P2"), _p("P1")])

    def test_empty_id_rejected(self) -> None:
        """An empty string is not an identifier."""
        with pytest.raises(ConfigurationError, match="non-empty string"):
            validate_processes([_p("")])


class TestValidationBeforeSimulation:
    """Every simulator rejects bad input up front."""

    @pytest.mark.parametrize("policy", ["fcfs", "sjf", "rr", "ljf", "priority", "srtf", "lrtf"])
    def test_every_policy_rejects_duplicates(self, policy: str) -> None:
        """Duplicate ids fail regardless of the policy."""
        with pytest.raises(ConfigurationError, match="Duplicate"):
            simulate([_p("X"), _p("X")], policy)

    @pytest.mark.parametrize("policy", ["fcfs", "srtf"])
    def test_every_policy_rejects_zero_burst(self, policy: str) -> None:
        """A zero burst would otherwise produce an empty block."""
        with pytest.raises(ConfigurationError, match="burst_time"):
            simulate([_p(burst=0)], policy)
