"""
Export Module - Snapshot the filtered view to a JSON file
"""
import json
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from .entry import LogEntry


def export_filename(day: date) -> str:
    return f"logs-{day.isoformat()}.json"


def write_export(entries: Iterable[LogEntry], directory: Path, day: Optional[date] = None) -> Path:
    """
    Write entries as a pretty-printed JSON array

    Args:
        entries: Entries to export, in display order
        directory: Destination directory (created if missing)
        day: Date used in the file name (default: today)

    Returns:
        Path of the written file
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    export_file = directory / export_filename(day or date.today())

    with open(export_file, 'w', encoding='utf-8') as f:
        json.dump([entry.to_dict() for entry in entries], f, indent=2, default=str)

    return export_file
