"""
Live Tail Components Module - UI widgets and panels

Handles:
- Connection status indicator
- Toolbar with project/level/search filters and control buttons
- Stream statistics panel
- Entry details panel
"""
import json

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.reactive import reactive
from textual.widgets import Button, Input, Label, Select, Static

from logstream.stream.entry import LogEntry, LogLevel, level_style

LEVEL_OPTIONS = [(level.value.capitalize(), level.value) for level in LogLevel]


class ConnectionIndicator(Static):
    """Green/red dot showing whether the stream is live"""

    connected: reactive[bool] = reactive(False)
    paused: reactive[bool] = reactive(False)

    def render(self) -> Text:
        if self.connected:
            text = Text("● ", style="green").append("Connected", style="bold")
        else:
            text = Text("● ", style="red").append("Disconnected", style="bold")
        if self.paused:
            text.append("  (paused)", style="yellow")
        return text


class TailToolbar(Horizontal):
    """Filter inputs and stream controls"""

    def compose(self) -> ComposeResult:
        """Compose the toolbar"""
        yield Select([], prompt="All Projects", id="project-select")
        yield Select(LEVEL_OPTIONS, prompt="All Levels", id="level-select")
        yield Input(placeholder="Search...", id="search-input")
        yield Button("Clear", id="clear-btn", variant="default")
        yield Button("Pause", id="pause-btn", variant="primary")
        yield Button("Export", id="export-btn", variant="success")


class TailStatsPanel(Static):
    """Totals for the buffer and the filtered view"""

    total: reactive[int] = reactive(0)
    showing: reactive[int] = reactive(0)
    errors: reactive[int] = reactive(0)

    def render(self) -> Text:
        return Text.from_markup(
            f"Total: [green]{self.total}[/green]   "
            f"Showing: [green]{self.showing}[/green]   "
            f"Errors: [red]{self.errors}[/red]"
        )


class EntryDetailsPanel(Vertical):
    """Detailed view of the selected log entry"""

    PLACEHOLDER = "Select a log entry to view details"

    def compose(self) -> ComposeResult:
        """Compose the details panel"""
        yield Label("[bold]Entry Details[/bold]", classes="panel-title")
        yield Static(self.PLACEHOLDER, id="entry-details-content", markup=False)

    def show_entry_details(self, entry: LogEntry) -> None:
        """
        Display every field of a log entry

        Args:
            entry: LogEntry to display
        """
        details = Text()
        details.append("ID: ", style="bold").append(f"{entry.id}\n")
        details.append("Timestamp: ", style="bold").append(f"{entry.timestamp}\n")
        details.append("Level: ", style="bold").append(entry.level, style=level_style(entry.level)).append("\n")
        details.append("Project: ", style="bold").append(f"{entry.project}\n")
        details.append("Trace: ", style="bold").append(f"{entry.trace_id or 'N/A'}\n")
        source = entry.source
        if source is None:
            source = "N/A"
        elif not isinstance(source, str):
            source = json.dumps(source, default=str)
        details.append("Source: ", style="bold").append(f"{source}\n")
        details.append("Message:\n", style="bold").append(f"{entry.message}\n")
        if entry.meta is not None:
            details.append("\nMeta:\n", style="bold").append(json.dumps(entry.meta, indent=2, default=str))

        self.query_one("#entry-details-content", Static).update(details)

    def clear_details(self) -> None:
        """Clear the details display"""
        self.query_one("#entry-details-content", Static).update(self.PLACEHOLDER)
