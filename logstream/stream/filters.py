"""
Filter Pipeline Module - Select the visible subsequence of the buffer

Pure functions only: the same entries and criteria always give the same
result, so the view is recomputed on every change instead of cached.
"""
from dataclasses import dataclass
from typing import Iterable, List

from .entry import LogEntry


@dataclass(frozen=True)
class FilterCriteria:
    """Current filter selection. Empty fields match everything."""
    project: str = ""
    level: str = ""
    query: str = ""

    @property
    def is_active(self) -> bool:
        return bool(self.project or self.level or self.query)


def matches(entry: LogEntry, criteria: FilterCriteria) -> bool:
    """Check a single entry against all filters (AND semantics)"""
    if criteria.project and entry.project != criteria.project:
        return False
    if criteria.level and entry.level != criteria.level:
        return False
    if criteria.query and criteria.query.casefold() not in entry.message.casefold():
        return False
    return True


def visible(entries: Iterable[LogEntry], criteria: FilterCriteria) -> List[LogEntry]:
    """
    Filter entries, preserving their order

    Args:
        entries: Buffer contents, newest first
        criteria: Active filters

    Returns:
        Matching entries in the same order
    """
    if not criteria.is_active:
        return list(entries)

    return [entry for entry in entries if matches(entry, criteria)]
