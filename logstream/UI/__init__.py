"""
Logstream UI Package
"""

from .app import LogstreamApp, run_app

__all__ = [
    'LogstreamApp',
    'run_app',
]
