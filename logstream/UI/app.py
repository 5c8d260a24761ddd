"""
Logstream Main Application - Live log tail using Textual
"""
from typing import Callable, Optional

from textual.app import App, ComposeResult
from textual.widgets import Footer, Header

from logstream.config import Settings
from logstream.UI.views.live_tail import LiveTailView


class LogstreamApp(App):
    """Logstream - Live Log Tail Terminal UI Application"""

    TITLE = "📡 Logstream"
    CSS_PATH = "logstream.tcss"
    AUTO_FOCUS = "#log-stream-table"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("p", "toggle_pause", "Pause/Resume"),
        ("c", "clear_logs", "Clear"),
        ("e", "export_logs", "Export"),
        ("r", "reset_filters", "Reset Filters"),
    ]

    def __init__(self, settings: Optional[Settings] = None, connector: Optional[Callable] = None):
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.connector = connector

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)
        yield LiveTailView(self.settings, connector=self.connector, id="live-tail-view")
        yield Footer()

    def on_mount(self) -> None:
        self.sub_title = self.settings.stream_url

    @property
    def tail_view(self) -> LiveTailView:
        return self.query_one("#live-tail-view", LiveTailView)

    def action_toggle_pause(self) -> None:
        """Pause or resume ingestion"""
        self.tail_view.toggle_pause()

    def action_clear_logs(self) -> None:
        """Empty the log buffer"""
        self.tail_view.clear_logs()

    def action_export_logs(self) -> None:
        """Export the filtered view"""
        self.tail_view.export_logs()

    def action_reset_filters(self) -> None:
        """Clear all filters"""
        self.tail_view.reset_filters()


def run_app(settings: Optional[Settings] = None) -> None:
    """Entry point to run the Logstream application"""
    app = LogstreamApp(settings)
    app.run()


if __name__ == "__main__":
    run_app()
