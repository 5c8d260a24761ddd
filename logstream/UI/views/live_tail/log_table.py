"""
Log Stream Table Module - DataTable for displaying live log entries

Handles:
- Color-coded log levels
- Time-of-day, project and trace columns
- Message truncation
- Mapping rows back to entries for the details panel
"""
from typing import Dict, List

from rich.text import Text
from textual.widgets import DataTable

from logstream.stream.entry import LogEntry, level_style


class LogStreamTable(DataTable):
    """DataTable showing the filtered view, newest entry first"""

    COLUMNS = ("Time", "Level", "Project", "Trace", "Message")

    def __init__(self, **kwargs):
        """Initialize the log stream table"""
        super().__init__(**kwargs)
        self.entry_map: Dict = {}  # Maps row_key to LogEntry
        self.max_message_length = 200

    def on_mount(self) -> None:
        """Initialize table columns when mounted"""
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if not self.columns:
            self.add_columns(*self.COLUMNS)

    def show_entries(self, entries: List[LogEntry]) -> None:
        """
        Replace the table contents with the given entries

        Args:
            entries: Visible entries, newest first
        """
        self._ensure_columns()
        self.clear()
        self.entry_map.clear()

        for entry in entries:
            # Entry ids come off the wire, so don't trust them as unique row keys
            row_key = self.add_row(*self._format_entry(entry))
            self.entry_map[row_key] = entry

    def _format_entry(self, entry: LogEntry) -> tuple:
        """
        Format a log entry for table display

        Args:
            entry: LogEntry to format

        Returns:
            Tuple of formatted cell values
        """
        message = entry.message
        if len(message) > self.max_message_length:
            message = message[:self.max_message_length - 3] + "..."

        return (
            Text(entry.time_of_day, style="grey50"),
            Text(entry.level, style=level_style(entry.level)),
            Text(entry.project, style="medium_purple1"),
            Text(entry.short_trace, style="spring_green3"),
            Text(message),
        )
