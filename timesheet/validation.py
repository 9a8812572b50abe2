from __future__ import annotations

from .calculator import parse_hhmm
from .errors import InvalidRate, InvalidTime, MissingDescription, MissingField
from .models import EntryDraft, ProjectType, UserChoice
from .rates import parse_rate

REQUIRED_FIELDS = ("project_name", "project_type", "user", "start_time", "end_time")


def validate_draft(draft: EntryDraft) -> None:
    """Check a draft before anything is persisted. The first failing rule raises."""
    if any(not getattr(draft, name).strip() for name in REQUIRED_FIELDS):
        raise MissingField()
    if ProjectType.parse(draft.project_type) is None or UserChoice.parse(draft.user) is None:
        raise MissingField()

    if draft.project_type == ProjectType.OTHER.value and not draft.other_project_name.strip():
        raise MissingDescription()

    if UserChoice.parse(draft.user) is UserChoice.OTHER and parse_rate(draft.custom_rate) <= 0:
        raise InvalidRate()

    for value in (draft.start_time, draft.end_time):
        try:
            parse_hhmm(value)
        except ValueError as exc:
            raise InvalidTime() from exc
