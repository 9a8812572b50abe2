from __future__ import annotations
from dataclasses import replace
from typing import Callable, List, Optional

from .errors import CollaboratorError
from .filters import filter_entries
from .logging import get_logger
from .models import EntryFilter, Notification, TimeEntry
from .store import TimesheetStore

logger = get_logger(__name__)

LOAD_FAILED_MESSAGE = "Erro ao carregar todos os apontamentos."


class EntriesBrowser:
    """Read-only view over every identity's entries with client-side filters."""

    def __init__(
        self,
        store: TimesheetStore,
        criteria: Optional[EntryFilter] = None,
        on_notify: Optional[Callable[[Notification], None]] = None,
    ) -> None:
        self.store = store
        self.criteria = criteria or EntryFilter()
        self.on_notify = on_notify
        self.entries: List[TimeEntry] = []
        self.notifications: List[Notification] = []

    def load(self) -> List[TimeEntry]:
        try:
            self.entries = self.store.select_all()
        except CollaboratorError as exc:
            logger.warning("entries_load_failed", error=exc.detail)
            self.entries = []
            self._notify(Notification.error(LOAD_FAILED_MESSAGE))
        return self.entries

    @property
    def visible(self) -> List[TimeEntry]:
        return filter_entries(self.entries, self.criteria)

    def set_filter(self, **changes) -> List[TimeEntry]:
        self.criteria = replace(self.criteria, **changes)
        return self.visible

    def clear_filters(self) -> List[TimeEntry]:
        self.criteria = EntryFilter()
        return self.visible

    def _notify(self, notification: Notification) -> None:
        self.notifications.append(notification)
        if self.on_notify:
            self.on_notify(notification)
