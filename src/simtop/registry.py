"""Thread-safe registry of monitored processes."""

import logging
import threading
from collections.abc import Iterable

from simtop.models import ProcessEntry

logger = logging.getLogger(__name__)


class DuplicateProcessError(ValueError):
    """Raised when two entries with the same pid would coexist in a registry."""

    def __init__(self, pid: int) -> None:
        super().__init__(f"Duplicate process id: {pid}")
        self.pid = pid


class ProcessRegistry:
    """
    Ordered collection of ProcessEntry records keyed by pid.

    Every read and write happens under a single lock, so callers only ever
    see an entry fully present or fully absent. Readers that need to do slow
    work (formatting, printing) take a snapshot and release the lock first.

    Removals are sticky: a pid removed with remove() is left out of every
    later replace() until it is explicitly reintroduced with insert() or
    seed().
    """

    def __init__(self, entries: Iterable[ProcessEntry] = ()) -> None:
        """
        Initialize the ProcessRegistry.

        Args:
            entries: Initial entries. Pids must be unique.
        """
        self._lock = threading.Lock()
        self._entries: list[ProcessEntry] = []
        self._killed: set[int] = set()
        self.seed(entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, pid: object) -> bool:
        with self._lock:
            return any(entry.pid == pid for entry in self._entries)

    @property
    def killed(self) -> frozenset[int]:
        """Pids removed by remove() and excluded from later samples."""
        with self._lock:
            return frozenset(self._killed)

    def snapshot(self) -> list[ProcessEntry]:
        """Return a point-in-time copy of the registry contents."""
        with self._lock:
            return list(self._entries)

    def find(self, pid: int) -> ProcessEntry | None:
        """Return the entry with the given pid, or None if absent."""
        with self._lock:
            for entry in self._entries:
                if entry.pid == pid:
                    return entry
        return None

    def remove(self, pid: int) -> bool:
        """
        Remove the entry with the given pid.

        Returns:
            True if an entry was removed, False if the pid was not present.
            A failed removal leaves the registry untouched.
        """
        with self._lock:
            for index, entry in enumerate(self._entries):
                if entry.pid == pid:
                    del self._entries[index]
                    self._killed.add(pid)
                    logger.debug("Removed process %d", pid)
                    return True
        return False

    def insert(self, entry: ProcessEntry) -> None:
        """Append a single entry, reviving its pid if it was removed before."""
        with self._lock:
            if any(existing.pid == entry.pid for existing in self._entries):
                raise DuplicateProcessError(entry.pid)
            self._entries.append(entry)
            self._killed.discard(entry.pid)

    def replace(self, entries: Iterable[ProcessEntry]) -> None:
        """
        Atomically swap the working set for a fresh sample.

        Entries whose pid has been removed are dropped from the new set.
        """
        fresh = _unique(entries)
        with self._lock:
            self._entries = [entry for entry in fresh if entry.pid not in self._killed]

    def seed(self, entries: Iterable[ProcessEntry]) -> None:
        """Reset the registry to the given entries and forget all removals."""
        fresh = _unique(entries)
        with self._lock:
            self._entries = fresh
            self._killed.clear()
        if fresh:
            logger.debug("Seeded registry with %d processes", len(fresh))


def _unique(entries: Iterable[ProcessEntry]) -> list[ProcessEntry]:
    """Copy entries into a list, rejecting duplicate pids."""
    result: list[ProcessEntry] = []
    seen: set[int] = set()
    for entry in entries:
        if entry.pid in seen:
            raise DuplicateProcessError(entry.pid)
        seen.add(entry.pid)
        result.append(entry)
    return result
