"""
Stream Package - Live log ingestion core

Package Structure:
- entry: Wire model and envelope decoding (LogEntry, Envelope, LogLevel)
- connection: Websocket subscription with reconnect (ConnectionManager)
- buffer: Bounded newest-first store (StreamBuffer)
- filters: Visible-subsequence selection (FilterCriteria, visible)
- session: Control surface tying it together (TailSession)
- export: JSON snapshot of the filtered view
"""

from .entry import LogEntry, LogLevel, Envelope, DecodeError, decode_envelope
from .buffer import StreamBuffer, CAPACITY
from .filters import FilterCriteria, matches, visible
from .connection import ConnectionManager, build_stream_url, RECONNECT_DELAY
from .session import TailSession, TailStats
from .export import export_filename, write_export

__all__ = [
    # Data models
    'LogEntry',
    'LogLevel',
    'Envelope',
    'DecodeError',
    'decode_envelope',

    # Core components
    'StreamBuffer',
    'CAPACITY',
    'FilterCriteria',
    'matches',
    'visible',
    'ConnectionManager',
    'build_stream_url',
    'RECONNECT_DELAY',
    'TailSession',
    'TailStats',

    # Export
    'export_filename',
    'write_export',
]
