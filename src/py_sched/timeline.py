"""Timeline — the Gantt chart of a simulation.

A timeline is an ordered list of blocks.  Each block says who occupied
the CPU over a half-open interval ``[start, end)``: either a process, or
nobody at all (an *idle* block).

Invariants, checked on every insert:
    - ``end > start`` for every block;
    - blocks are contiguous: each block starts where the previous one
      ended, so there are no gaps and no overlaps;
    - an idle block is never merged into a process block.

The occupant is a small tagged union rather than a magic string::

    Occupant = Idle | Running(process_id)

so a process that happens to be called ``"idle"`` can never be confused
with an empty CPU.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
class Idle:
    """Occupant of a block where no process ran."""

    def __str__(self) -> str:
        """Return the label used in charts."""
        return "idle"


@dataclass(frozen=True)
class Running:
    """Occupant of a block where *process_id* held the CPU."""

    process_id: str

    def __str__(self) -> str:
        """Return the process identifier."""
        return self.process_id


Occupant: TypeAlias = Idle | Running

IDLE = Idle()


@dataclass(frozen=True)
class TimelineBlock:
    """One contiguous interval of CPU occupancy.

    Attributes:
        occupant: Who held the CPU (``IDLE`` or ``Running(pid)``).
        start: Interval start (inclusive).
        end: Interval end (exclusive).
        color: Display colour, opaque to the simulator.

    """

    occupant: Occupant
    start: int
    end: int
    color: str | None = None

    def __post_init__(self) -> None:
        """Reject empty or inverted intervals."""
        if self.end <= self.start:
            msg = f"Block for {self.occupant} must end after it starts: [{self.start}, {self.end})"
            raise ValueError(msg)

    @property
    def duration(self) -> int:
        """Return the length of the interval."""
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        """Return True for an idle block."""
        return isinstance(self.occupant, Idle)

    @property
    def process_id(self) -> str | None:
        """Return the occupying process id, or None when idle."""
        if isinstance(self.occupant, Running):
            return self.occupant.process_id
        return None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly dict (``process_id`` is None when idle)."""
        return {
            "process_id": self.process_id,
            "idle": self.is_idle,
            "start": self.start,
            "end": self.end,
            "color": self.color,
        }


class Timeline:
    """Append-only builder that keeps the block invariants.

    Two insert flavours exist because the policies disagree on merging:

    - ``append`` always starts a new block.  Round Robin uses it so each
      quantum slice stays a separate block, even when the same process
      gets consecutive slices.
    - ``extend_or_append`` grows the previous block when it belongs to
      the same occupant.  SRTF and LRTF use it so a process that is not
      actually preempted at an arrival event shows as one block.
    """

    def __init__(self) -> None:
        """Create an empty timeline."""
        self._blocks: list[TimelineBlock] = []

    @property
    def blocks(self) -> tuple[TimelineBlock, ...]:
        """Return a snapshot of the blocks in order."""
        return tuple(self._blocks)

    @property
    def end_time(self) -> int:
        """Return the end of the last block, or 0 when empty."""
        return self._blocks[-1].end if self._blocks else 0

    def _check_contiguous(self, start: int) -> None:
        """Raise if *start* does not continue the last block."""
        if self._blocks and self._blocks[-1].end != start:
            msg = f"Timeline gap or overlap: last block ends at {self._blocks[-1].end}, next starts at {start}"
            raise ValueError(msg)

    def append(self, occupant: Occupant, start: int, end: int, color: str | None = None) -> TimelineBlock:
        """Add a new block without merging."""
        self._check_contiguous(start)
        block = TimelineBlock(occupant=occupant, start=start, end=end, color=color)
        self._blocks.append(block)
        return block

    def extend_or_append(
        self,
        occupant: Occupant,
        start: int,
        end: int,
        color: str | None = None,
    ) -> TimelineBlock:
        """Extend the last block if it has the same occupant, else append."""
        self._check_contiguous(start)
        if self._blocks and self._blocks[-1].occupant == occupant:
            block = replace(self._blocks[-1], end=end)
            self._blocks[-1] = block
            return block
        return self.append(occupant, start, end, color)

    def idle_until(self, start: int, end: int, color: str | None = None) -> TimelineBlock:
        """Cover ``[start, end)`` with idle time, merging only with idle."""
        return self.extend_or_append(IDLE, start, end, color)

    def __iter__(self) -> Iterator[TimelineBlock]:
        """Iterate over the blocks in order."""
        return iter(self._blocks)

    def __len__(self) -> int:
        """Return the number of blocks."""
        return len(self._blocks)
