"""
Tail Session Module - Control surface over the live stream

Handles:
- Wiring the connection manager into the stream buffer
- Pause/resume (hard ingestion gate)
- Clearing the buffer
- Filter state and the visible view
- Export of the filtered view
- Change notification to a single listener
"""
import logging
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Callable, List, Optional

from .buffer import CAPACITY, StreamBuffer
from .connection import RECONNECT_DELAY, ConnectionManager
from .entry import LogEntry
from .export import write_export
from .filters import FilterCriteria, visible


@dataclass(frozen=True)
class TailStats:
    total: int
    showing: int
    errors: int


class TailSession:
    """
    One live tail: a connection, its buffer, and the operator's controls

    Every mutation (new entry, clear, status change, pause toggle, filter
    edit) notifies the subscribed listener exactly once. The listener is
    expected to call visible() again; nothing is cached here.
    """

    def __init__(
        self,
        url: str,
        export_dir: Path = Path("."),
        capacity: int = CAPACITY,
        reconnect_delay: float = RECONNECT_DELAY,
        connector: Optional[Callable] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.export_dir = Path(export_dir)

        self.buffer = StreamBuffer(capacity)
        self.criteria = FilterCriteria()
        self.paused = False
        self._listener: Optional[Callable[[], None]] = None

        self.connection = ConnectionManager(
            url,
            on_entry=self._ingest,
            on_status=self._status_changed,
            is_paused=lambda: self.paused,
            reconnect_delay=reconnect_delay,
            connector=connector,
        )

    @property
    def connected(self) -> bool:
        return self.connection.connected

    def subscribe(self, listener: Optional[Callable[[], None]]) -> None:
        """Register the change listener, replacing any previous one"""
        self._listener = listener

    def _notify(self) -> None:
        if self._listener:
            self._listener()

    # Connection lifecycle

    def start(self) -> None:
        self.connection.start()

    async def close(self) -> None:
        # Detach first so teardown doesn't render into an unmounted view
        self._listener = None
        await self.connection.close()

    def _ingest(self, entry: LogEntry) -> None:
        self.buffer.ingest(entry)
        self._notify()

    def _status_changed(self, connected: bool) -> None:
        self.logger.info(f"Connection status: {'connected' if connected else 'disconnected'}")
        self._notify()

    # Controls

    def pause(self) -> None:
        if not self.paused:
            self.paused = True
            self.logger.info("Stream paused")
            self._notify()

    def resume(self) -> None:
        if self.paused:
            self.paused = False
            self.logger.info("Stream resumed")
            self._notify()

    def toggle_pause(self) -> bool:
        """Flip the pause gate and return the new state"""
        if self.paused:
            self.resume()
        else:
            self.pause()
        return self.paused

    def clear(self) -> None:
        """Empty the buffer. Known projects and connection are untouched."""
        self.buffer.clear()
        self.logger.info("Buffer cleared")
        self._notify()

    def set_filter(self, **changes: str) -> None:
        """Update one or more of project, level, query"""
        criteria = replace(self.criteria, **changes)
        if criteria != self.criteria:
            self.criteria = criteria
            self._notify()

    def reset_filters(self) -> None:
        self.set_filter(project="", level="", query="")

    # Derived state

    def visible(self) -> List[LogEntry]:
        return visible(self.buffer.entries(), self.criteria)

    def stats(self, showing: Optional[int] = None) -> TailStats:
        if showing is None:
            showing = len(self.visible())
        return TailStats(
            total=len(self.buffer),
            showing=showing,
            errors=self.buffer.error_count(),
        )

    def export(
        self,
        entries: Optional[List[LogEntry]] = None,
        directory: Optional[Path] = None,
        day: Optional[date] = None,
    ) -> Path:
        """
        Export the filtered view (or the given entries) to logs-<date>.json

        Returns:
            Path of the written file
        """
        if entries is None:
            entries = self.visible()
        path = write_export(entries, directory or self.export_dir, day)
        self.logger.info(f"Exported {len(entries)} entries to {path}")
        return path
