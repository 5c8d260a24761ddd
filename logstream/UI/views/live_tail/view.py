"""
Live Tail View Module - Main UI orchestration

Handles:
- Main view composition and layout
- Wiring the tail session to the widgets
- Re-rendering the filtered view on every session change
- Filter, pause, clear and export controls
- Tearing the connection down when the view goes away
"""
import logging
from typing import Callable, List, Optional

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, DataTable, Input, Label, Select, Static

from logstream.config import Settings
from logstream.stream.session import TailSession

from .components import ConnectionIndicator, EntryDetailsPanel, TailStatsPanel, TailToolbar
from .log_table import LogStreamTable


def _select_value(value) -> str:
    # A blank Select yields a sentinel rather than a string
    return value if isinstance(value, str) else ""


class LiveTailView(Vertical):
    """
    Live view of the log stream

    The session notifies this view on every change; the view then
    recomputes the visible entries from scratch and redraws.
    """

    def __init__(self, settings: Settings, connector: Optional[Callable] = None, **kwargs):
        """
        Initialize the live tail view

        Args:
            settings: Endpoint and export configuration
            connector: Optional websocket connector override
        """
        super().__init__(**kwargs)
        self.logger = logging.getLogger(__name__)
        self.settings = settings
        self.session = TailSession(
            settings.stream_url,
            export_dir=settings.export_dir,
            connector=connector,
        )
        self._project_options: List[str] = []

    def compose(self) -> ComposeResult:
        """Compose the live tail layout"""
        with Horizontal(id="tail-toolbar-panel"):
            yield ConnectionIndicator(id="connection-indicator")
            yield TailToolbar(id="tail-toolbar")

        yield TailStatsPanel(id="tail-stats-panel")

        # Main content area - split pane
        with Horizontal(id="tail-content"):
            with Vertical(classes="main-panel", id="tail-main-panel"):
                yield Label("[bold]Log Stream[/bold]", classes="section-title")
                yield Static("Waiting for logs...", id="empty-state")
                yield LogStreamTable(id="log-stream-table")

            yield EntryDetailsPanel(classes="right-panel", id="entry-details-panel")

    def on_mount(self) -> None:
        """Subscribe to the session and open the stream"""
        self.logger.info(f"LiveTailView mounted, subscribing to {self.session.connection.url}")
        self.session.subscribe(self.refresh_view)
        self.refresh_view()
        self.session.start()

    async def on_unmount(self) -> None:
        """Close the stream and cancel any pending reconnect"""
        await self.session.close()

    def refresh_view(self) -> None:
        """Redraw everything from current session state"""
        try:
            entries = self.session.visible()

            table = self.query_one("#log-stream-table", LogStreamTable)
            table.show_entries(entries)

            stats = self.session.stats(showing=len(entries))
            stats_panel = self.query_one("#tail-stats-panel", TailStatsPanel)
            stats_panel.total = stats.total
            stats_panel.showing = stats.showing
            stats_panel.errors = stats.errors

            indicator = self.query_one("#connection-indicator", ConnectionIndicator)
            indicator.connected = self.session.connected
            indicator.paused = self.session.paused

            pause_btn = self.query_one("#pause-btn", Button)
            pause_btn.label = "Resume" if self.session.paused else "Pause"
            pause_btn.variant = "success" if self.session.paused else "primary"

            empty_state = self.query_one("#empty-state", Static)
            empty_state.display = not entries
            empty_state.update("Waiting for logs..." if stats.total == 0 else "No logs match filters")

            self._sync_project_options()

        except Exception as e:
            self.logger.error(f"Error refreshing live tail view: {e}", exc_info=True)

    def _sync_project_options(self) -> None:
        """Add newly seen projects to the project filter"""
        projects = self.session.buffer.known_projects()
        if projects == self._project_options:
            return
        self._project_options = projects

        select = self.query_one("#project-select", Select)
        current = self.session.criteria.project
        select.set_options([(project, project) for project in projects])
        if current in projects:
            select.value = current

    # Controls

    def toggle_pause(self) -> None:
        paused = self.session.toggle_pause()
        self.notify("Stream paused" if paused else "Stream resumed", severity="information")

    def clear_logs(self) -> None:
        self.session.clear()
        self.query_one("#entry-details-panel", EntryDetailsPanel).clear_details()
        self.notify("Log buffer cleared", severity="information")

    def export_logs(self) -> None:
        """Export the currently filtered entries"""
        entries = self.session.visible()

        if not entries:
            self.notify("No log entries to export", severity="warning")
            return

        try:
            export_file = self.session.export(entries)
        except OSError as e:
            self.logger.error(f"Export failed: {e}", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
            return

        self.notify(f"Exported {len(entries)} entries to {export_file.name}", severity="information")

    def reset_filters(self) -> None:
        """Clear project, level and search filters"""
        self.query_one("#project-select", Select).clear()
        self.query_one("#level-select", Select).clear()
        self.query_one("#search-input", Input).value = ""
        self.session.reset_filters()
        self.notify("Filters reset", severity="information")

    # Event Handlers

    @on(Select.Changed, "#project-select")
    def handle_project_changed(self, event: Select.Changed) -> None:
        self.session.set_filter(project=_select_value(event.value))

    @on(Select.Changed, "#level-select")
    def handle_level_changed(self, event: Select.Changed) -> None:
        self.session.set_filter(level=_select_value(event.value))

    @on(Input.Changed, "#search-input")
    def handle_search_changed(self, event: Input.Changed) -> None:
        self.session.set_filter(query=event.value)

    @on(Button.Pressed, "#clear-btn")
    def handle_clear(self) -> None:
        self.clear_logs()

    @on(Button.Pressed, "#pause-btn")
    def handle_pause(self) -> None:
        self.toggle_pause()

    @on(Button.Pressed, "#export-btn")
    def handle_export(self) -> None:
        self.export_logs()

    @on(DataTable.RowSelected, "#log-stream-table")
    def handle_row_selected(self, event: DataTable.RowSelected) -> None:
        """Show the selected entry in the details panel"""
        table = self.query_one("#log-stream-table", LogStreamTable)
        entry = table.entry_map.get(event.row_key)

        if entry:
            details_panel = self.query_one("#entry-details-panel", EntryDetailsPanel)
            details_panel.show_entry_details(entry)
