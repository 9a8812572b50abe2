from __future__ import annotations

from datetime import datetime, timezone

import pytest

from timesheet.errors import CollaboratorError
from timesheet.models import TimeEntry
from timesheet.store import TimesheetStore, newest_first, with_id


class RecordingStore(TimesheetStore):
    """In-memory collaborator that records calls and can be told to fail."""

    def __init__(self, entries=None):
        self.entries = list(entries or [])
        self.inserted = []
        self.select_calls = []
        self.fail_insert = False
        self.fail_select = False

    def insert(self, entry):
        if self.fail_insert:
            raise CollaboratorError("insert", "connection refused")
        entry_id = f"id-{len(self.entries) + 1}"
        self.inserted.append(entry)
        self.entries.append(with_id(entry, entry_id))
        return entry_id

    def select_all(self, user_id=None):
        self.select_calls.append(user_id)
        if self.fail_select:
            raise CollaboratorError("select", "connection refused")
        entries = [e for e in self.entries if not user_id or e.user_id == user_id]
        return newest_first(entries)


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def make_entry():
    def factory(**overrides) -> TimeEntry:
        values = dict(
            project_name="Dashboard",
            project_type="BI",
            other_project_name="",
            user="Lavezzo",
            hourly_rate=35.0,
            start_time="09:00",
            end_time="17:00",
            total_hours=8.0,
            total_value=280.0,
            timestamp=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
            user_id="user-1",
        )
        values.update(overrides)
        return TimeEntry(**values)

    return factory
