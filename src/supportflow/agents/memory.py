"""
Classification Memory

Rolling log of past (ticket, decision) exchanges that is rendered into the
classification prompt so consecutive decisions stay consistent.
"""

import threading
from dataclasses import dataclass

import structlog

from supportflow.config import settings

logger = structlog.get_logger(__name__)

NO_HISTORY = "No previous classification history available."


@dataclass(frozen=True)
class MemoryEntry:
    """One remembered exchange."""

    ticket_summary: str
    decision_summary: str


class ClassificationMemory:
    """
    Append-only sequence of MemoryEntry objects.

    Storage is never evicted; only the ``window`` most recent entries are
    rendered for prompts. Every operation holds a lock so concurrent requests
    cannot interleave on the entry list.
    """

    def __init__(self, window: int | None = None):
        window = settings.memory_window if window is None else window
        if window < 1:
            raise ValueError("Memory window must be at least 1")
        self.window = window
        self._entries: list[MemoryEntry] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def append(self, ticket_summary: str, decision_summary: str) -> MemoryEntry:
        """Record one exchange."""
        entry = MemoryEntry(ticket_summary=ticket_summary, decision_summary=decision_summary)
        with self._lock:
            self._entries.append(entry)
            size = len(self._entries)
        logger.debug("Memory entry appended", size=size)
        return entry

    def entries(self) -> list[MemoryEntry]:
        """Snapshot of every stored entry, oldest first."""
        with self._lock:
            return list(self._entries)

    def recent(self) -> list[MemoryEntry]:
        """The most recent entries that fit in the window, oldest first."""
        with self._lock:
            return self._entries[-self.window :]

    def render_recent(self) -> str:
        """Render the recent window as a labeled transcript."""
        recent = self.recent()
        if not recent:
            return NO_HISTORY

        lines = []
        for entry in recent:
            lines.append(f"Human: Ticket: {entry.ticket_summary}")
            lines.append(f"AI: Classification: {entry.decision_summary}")
        return "\n".join(lines)

    def clear(self) -> None:
        """Drop every stored entry."""
        with self._lock:
            self._entries.clear()
        logger.info("Classification memory cleared")


# Singleton memory instance
_classification_memory: ClassificationMemory | None = None
_singleton_lock = threading.Lock()


def get_classification_memory() -> ClassificationMemory:
    """Get or create the process-wide classification memory."""
    global _classification_memory
    with _singleton_lock:
        if _classification_memory is None:
            _classification_memory = ClassificationMemory()
        return _classification_memory
