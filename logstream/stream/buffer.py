"""
Stream Buffer Module - Bounded in-memory store of recent log entries

Handles:
- Newest-first ring capped at CAPACITY entries
- Eviction of the oldest entry on overflow
- Cumulative set of projects seen this session
- Incremental error tally over the current contents
"""
import logging
from collections import deque
from typing import Iterator, List, Optional, Set

from .entry import LogEntry

CAPACITY = 1000


class StreamBuffer:
    """
    Bounded, insertion-ordered store of received entries

    Entries are kept newest first. The known-projects set only ever grows:
    it is not recomputed on clear or eviction, so filter options stay stable
    after matching entries scroll out.
    """

    def __init__(self, capacity: int = CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")

        self.capacity = capacity
        self._entries: deque = deque(maxlen=capacity)
        self._projects: Set[str] = set()
        self._error_count = 0
        self.total_received = 0
        self.logger = logging.getLogger(__name__)

    def ingest(self, entry: LogEntry) -> Optional[LogEntry]:
        """
        Prepend an entry, evicting the oldest one when full

        Args:
            entry: Decoded LogEntry

        Returns:
            The evicted entry, or None if nothing was evicted
        """
        evicted = None
        if len(self._entries) == self.capacity:
            # appendleft on a full deque drops the rightmost (oldest) item
            evicted = self._entries[-1]
            if evicted.is_error:
                self._error_count -= 1
            self.logger.debug(f"Buffer full, evicting entry {evicted.id}")

        self._entries.appendleft(entry)
        self._projects.add(entry.project)
        if entry.is_error:
            self._error_count += 1
        self.total_received += 1

        return evicted

    def clear(self) -> None:
        """Empty the buffer. Known projects are kept."""
        self._entries.clear()
        self._error_count = 0

    def known_projects(self) -> List[str]:
        """Every project ingested this session, sorted"""
        return sorted(self._projects)

    def error_count(self) -> int:
        """Number of error/fatal entries currently buffered"""
        return self._error_count

    def entries(self) -> List[LogEntry]:
        """Snapshot of the current contents, newest first"""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)
