"""Ready queue — FIFO order over a single process store.

Round Robin needs a first-in, first-out queue of processes waiting for
their next slice.  The queue holds *indices* into the simulator's one
list of process copies, never the processes themselves and never
copies of them, so a change to a process's remaining time is visible
through every path that reaches it.

Membership is tracked in a set alongside the deque, which makes the
"is it already queued?" check used on every arrival scan O(1).
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from py_sched.process import Process


class ReadyQueue:
    """A FIFO queue of indices into a shared process store."""

    def __init__(self, store: Sequence[Process]) -> None:
        """Create an empty queue over *store*.

        Args:
            store: The simulator's process copies; indices refer into it.

        """
        self._store = store
        self._order: deque[int] = deque()
        self._members: set[int] = set()

    def push(self, index: int) -> None:
        """Append *index* at the tail.

        Raises:
            ValueError: If the index is already queued.

        """
        if index in self._members:
            msg = f"Process {self._store[index].process_id} is already queued"
            raise ValueError(msg)
        self._order.append(index)
        self._members.add(index)

    def pop(self) -> int:
        """Remove and return the head index.

        Raises:
            IndexError: If the queue is empty.

        """
        if not self._order:
            msg = "pop from an empty ready queue"
            raise IndexError(msg)
        index = self._order.popleft()
        self._members.discard(index)
        return index

    def __len__(self) -> int:
        """Return the number of queued processes."""
        return len(self._order)

    def __bool__(self) -> bool:
        """Return True if anything is queued."""
        return bool(self._order)
