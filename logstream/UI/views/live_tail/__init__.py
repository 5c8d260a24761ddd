"""
Live Tail Package - Streaming log view

This package provides the live log tail interface with:
- Connection status indicator
- Project, level and text filters applied on every update
- Pause/resume, clear and export controls
- Color-coded log table with entry details

Package Structure:
- view: Main view orchestration (LiveTailView)
- components: UI panels and controls (ConnectionIndicator, TailToolbar, TailStatsPanel, EntryDetailsPanel)
- log_table: Log entry table widget (LogStreamTable)
"""

# Import main view
from .view import LiveTailView

# Import components for external use
from .components import (
    ConnectionIndicator,
    TailToolbar,
    TailStatsPanel,
    EntryDetailsPanel
)
from .log_table import LogStreamTable

__all__ = [
    # Main view
    'LiveTailView',

    # UI components
    'ConnectionIndicator',
    'TailToolbar',
    'TailStatsPanel',
    'EntryDetailsPanel',
    'LogStreamTable',
]
