"""
Logstream UI Views Package
"""

from .live_tail import LiveTailView

__all__ = [
    'LiveTailView',
]
