"""CPU scheduling simulator.

Re-exports public symbols so callers can write::

    from py_sched import Process, simulate
"""

from py_sched.compare import Comparison, compare
from py_sched.config import DEFAULT_QUANTUM, SimulationConfig
from py_sched.dispatch import PolicyName, parse_policy, simulate
from py_sched.logging import LogEntry, Logger, LogLevel
from py_sched.metrics import Metric, SimulationResult
from py_sched.process import Process, ProcessState
from py_sched.simulator import (
    run_fcfs,
    run_ljf,
    run_lrtf,
    run_priority,
    run_round_robin,
    run_sjf,
    run_srtf,
)
from py_sched.timeline import IDLE, Idle, Occupant, Running, TimelineBlock
from py_sched.validation import ConfigurationError

__all__ = [
    "DEFAULT_QUANTUM",
    "IDLE",
    "Comparison",
    "ConfigurationError",
    "Idle",
    "LogEntry",
    "LogLevel",
    "Logger",
    "Metric",
    "Occupant",
    "PolicyName",
    "Process",
    "ProcessState",
    "Running",
    "SimulationConfig",
    "SimulationResult",
    "TimelineBlock",
    "compare",
    "parse_policy",
    "run_fcfs",
    "run_ljf",
    "run_lrtf",
    "run_priority",
    "run_round_robin",
    "run_sjf",
    "run_srtf",
    "simulate",
]
