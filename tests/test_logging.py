"""Tests for the simulation event log.

The logger records structured entries stamped with the simulated clock,
so a run's log is as deterministic as its timeline.
"""

from py_sched.dispatch import simulate
from py_sched.logging import LogEntry, Logger, LogLevel
from py_sched.process import Process


def _reference() -> list[Process]:
    """Return the three-process reference workload."""
    return [
        Process(process_id="P1", arrival_time=0, burst_time=5),
        Process(process_id="P2", arrival_time=1, burst_time=3),
        Process(process_id="P3", arrival_time=2, burst_time=1),
    ]


class TestLogLevel:
    """Verify log level ordering."""

    def test_levels_are_ordered(self) -> None:
        """DEBUG < INFO < WARNING < ERROR."""
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARNING
        assert LogLevel.WARNING < LogLevel.ERROR


class TestLogEntry:
    """Verify log entry structure."""

    def test_entry_has_fields(self) -> None:
        """A log entry should store level, message, source, and time."""
        entry = LogEntry(level=LogLevel.INFO, message="dispatch P1", source="fcfs", time=3)
        expected_time = 3
        assert entry.level is LogLevel.INFO
        assert entry.message == "dispatch P1"
        assert entry.source == "fcfs"
        assert entry.time == expected_time

    def test_entry_str(self) -> None:
        """String representation should include level, time and message."""
        entry = LogEntry(level=LogLevel.WARNING, message="odd", source="rr", time=7)
        assert str(entry) == "[WARNING] t=7 rr: odd"


class TestLogger:
    """Verify the logger."""

    def test_log_stores_entries(self) -> None:
        """Logged entries should be retrievable."""
        logger = Logger()
        logger.log(LogLevel.INFO, "started", source="fcfs")
        assert len(logger) == 1
        assert logger.entries[0].message == "started"

    def test_entries_are_ordered(self) -> None:
        """Entries should be in chronological order."""
        logger = Logger()
        logger.log(LogLevel.INFO, "first", source="test")
        logger.log(LogLevel.INFO, "second", source="test")
        assert [e.message for e in logger.entries] == ["first", "second"]

    def test_filter_by_level(self) -> None:
        """Filtering should return only entries at or above the level."""
        logger = Logger()
        logger.log(LogLevel.DEBUG, "debug msg", source="test")
        logger.log(LogLevel.INFO, "info msg", source="test")
        logger.log(LogLevel.ERROR, "error msg", source="test")
        warnings_and_above = logger.filter(min_level=LogLevel.WARNING)
        assert len(warnings_and_above) == 1
        assert warnings_and_above[0].level is LogLevel.ERROR

    def test_filter_by_source(self) -> None:
        """Filtering by source should return matching entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "a", source="sjf")
        logger.log(LogLevel.INFO, "b", source="rr")
        assert [e.message for e in logger.filter(source="rr")] == ["b"]

    def test_clear(self) -> None:
        """Clearing should remove all entries."""
        logger = Logger()
        logger.log(LogLevel.INFO, "test", source="test")
        logger.clear()
        assert len(logger.entries) == 0


class TestSimulationLogging:
    """Verify that simulators log their decisions."""

    def test_fcfs_dispatch_and_completion(self) -> None:
        """Each process logs a dispatch and a completion, at simulated times."""
        logger = Logger()
        simulate(_reference(), "fcfs", logger=logger)
        entries = logger.filter(min_level=LogLevel.INFO)
        assert [(e.time, e.message.split()[0]) for e in entries] == [
            (0, "dispatch"),
            (5, "P1"),
            (5, "dispatch"),
            (8, "P2"),
            (8, "dispatch"),
            (9, "P3"),
        ]
        assert all(e.source == "fcfs" for e in entries)

    def test_completion_message_has_timings(self) -> None:
        """Completion entries report turnaround and waiting time."""
        logger = Logger()
        simulate(_reference(), "fcfs", logger=logger)
        completions = [e.message for e in logger.entries if "completed" in e.message]
        assert completions[1] == "P2 completed (turnaround=7, waiting=4)"

    def test_idle_gap_logged(self) -> None:
        """An idle gap is logged at DEBUG with its end time."""
        logger = Logger()
        processes = [
            Process(process_id="P1", arrival_time=2, burst_time=3),
            Process(process_id="P2", arrival_time=8, burst_time=2),
        ]
        simulate(processes, "sjf", logger=logger)
        idle = [e for e in logger.entries if e.level is LogLevel.DEBUG]
        expected_time = 5
        assert len(idle) == 1
        assert idle[0].time == expected_time
        assert idle[0].message == "CPU idle until 8"

    def test_srtf_preemptions_logged(self) -> None:
        """P2 preempts P1 at t=1 and P3 preempts P2 at t=2."""
        logger = Logger()
        simulate(_reference(), "srtf", logger=logger)
        preemptions = [(e.time, e.message) for e in logger.entries if "preempts" in e.message]
        assert preemptions == [(1, "P2 preempts P1"), (2, "P3 preempts P2")]

    def test_round_robin_quantum_expiry_logged(self) -> None:
        """Quantum expiry is logged each time a process is requeued."""
        logger = Logger()
        simulate(_reference(), "rr", quantum=2, logger=logger)
        expiries = [e.time for e in logger.entries if "quantum expired" in e.message]
        assert expiries == [2, 4, 7]

    def test_logging_does_not_change_results(self) -> None:
        """A run with a logger matches a run without one."""
        with_log = simulate(_reference(), "lrtf", logger=Logger())
        without = simulate(_reference(), "lrtf")
        assert with_log.to_dict() == without.to_dict()
