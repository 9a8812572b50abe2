from __future__ import annotations
import time
from dataclasses import fields
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .calculator import Calculation, calculate
from .errors import CollaboratorError, TimesheetError, ValidationError
from .logging import get_logger
from .models import EntryDraft, Notification, ProjectType, TimeEntry, UserChoice
from .store import TimesheetStore, with_id
from .validation import validate_draft

logger = get_logger(__name__)

SAVED_MESSAGE = "Apontamento de horas salvo com sucesso."


def calculate_draft(draft: EntryDraft) -> Calculation:
    return calculate(draft.start_time, draft.end_time, draft.user, draft.project_type, draft.custom_rate)


def build_entry(draft: EntryDraft, user_id: str, timestamp: datetime) -> TimeEntry:
    """Turn a validated draft into the record that gets persisted."""
    calculation = calculate_draft(draft)
    is_other = draft.project_type == ProjectType.OTHER.value
    return TimeEntry(
        project_name=draft.project_name.strip(),
        project_type=draft.project_type,
        other_project_name=draft.other_project_name.strip() if is_other else "",
        user=UserChoice.parse(draft.user).value,
        hourly_rate=calculation.hourly_rate,
        start_time=draft.start_time.strip(),
        end_time=draft.end_time.strip(),
        total_hours=calculation.total_hours,
        total_value=calculation.total_value,
        timestamp=timestamp,
        user_id=user_id,
    )


class EntryForm:
    """State and actions behind the entry form for one identity."""

    def __init__(
        self,
        store: TimesheetStore,
        user_id: str,
        *,
        simulated_latency: float = 0.0,
        on_notify: Optional[Callable[[Notification], None]] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.store = store
        self.user_id = user_id
        self.simulated_latency = simulated_latency
        self.on_notify = on_notify
        self.clock = clock
        self.draft = EntryDraft()
        self.entries: List[TimeEntry] = []
        self.notifications: List[Notification] = []
        self.busy = False
        self.last_error: Optional[TimesheetError] = None

    @property
    def preview(self) -> Calculation:
        return calculate_draft(self.draft)

    @property
    def can_submit(self) -> bool:
        return not self.busy

    def update(self, **values: str) -> None:
        for name, value in values.items():
            if not hasattr(self.draft, name):
                raise AttributeError(f"Unknown form field {name}")
            setattr(self.draft, name, value or "")

    def clear(self) -> None:
        self.draft = EntryDraft()

    def notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        if self.on_notify:
            self.on_notify(notification)

    def refresh(self) -> List[TimeEntry]:
        """Reload this identity's entries; on failure the current list is kept."""
        try:
            self.entries = self.store.select_all(user_id=self.user_id)
        except CollaboratorError as exc:
            self.notify(Notification.error(exc.message))
        return self.entries

    def submit(self) -> Optional[TimeEntry]:
        if self.busy:
            logger.info("submit_ignored", reason="in_flight")
            return None

        self.last_error = None
        try:
            validate_draft(self.draft)
        except ValidationError as exc:
            self.last_error = exc
            logger.info("submit_rejected", reason=type(exc).__name__)
            self.notify(Notification.error(exc.message))
            return None

        entry = build_entry(self.draft, self.user_id, self.clock())
        self.busy = True
        try:
            if self.simulated_latency:
                time.sleep(self.simulated_latency)
            entry_id = self.store.insert(entry)
        except CollaboratorError as exc:
            self.last_error = exc
            self.notify(Notification.error(exc.message))
            return None
        finally:
            self.busy = False

        saved = with_id(entry, entry_id)
        logger.info(
            "entry_submitted",
            id=entry_id,
            project_type=saved.project_type,
            total_hours=saved.total_hours,
        )
        self.clear()
        self.refresh()
        self.notify(Notification.success(SAVED_MESSAGE))
        return saved


def draft_from_mapping(values: dict) -> EntryDraft:
    names = {f.name for f in fields(EntryDraft)}
    return EntryDraft(**{name: str(values.get(name) or "") for name in names})
