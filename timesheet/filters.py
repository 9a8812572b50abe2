from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, List

from .models import EntryFilter, TimeEntry

ALL = "all"


def entry_date(entry: TimeEntry) -> date:
    """Calendar date of an entry, taken in UTC."""
    return entry.timestamp.astimezone(timezone.utc).date()


def filter_entries(entries: Iterable[TimeEntry], criteria: EntryFilter) -> List[TimeEntry]:
    """Filter entries by project type, user and date range.

    Criteria set to ``"all"`` or left empty match everything. The input is not
    modified and its order is preserved.
    """

    def matches(entry: TimeEntry) -> bool:
        if criteria.project_type and criteria.project_type != ALL and entry.project_type != criteria.project_type:
            return False
        if criteria.user and criteria.user != ALL and entry.user != criteria.user:
            return False
        if criteria.date_from and entry_date(entry) < criteria.date_from:
            return False
        if criteria.date_to and entry_date(entry) > criteria.date_to:
            return False
        return True

    return [entry for entry in entries if matches(entry)]


def parse_filter_date(value: str | None) -> date | None:
    if not value:
        return None
    return datetime.strptime(value, "%Y-%m-%d").date()
