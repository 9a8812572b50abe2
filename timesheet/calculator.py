"""Duration and value of a shift.

Every figure shown in the form preview and every figure stored on a record
comes from :func:`calculate`, so the two can never disagree.
"""
from __future__ import annotations

from dataclasses import dataclass

from .rates import resolve_hourly_rate

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class Calculation:
    duration_minutes: int
    hourly_rate: float

    @property
    def total_hours(self) -> float:
        return self.duration_minutes / 60

    @property
    def total_value(self) -> float:
        return self.total_hours * self.hourly_rate

    @property
    def duration_label(self) -> str:
        return format_minutes(self.duration_minutes)

    @property
    def value_label(self) -> str:
        return format_currency(self.total_value)


ZERO = Calculation(duration_minutes=0, hourly_rate=0.0)


def parse_hhmm(value: str) -> int:
    """Parse ``HH:MM`` into minutes since midnight.

    Raises ValueError for anything that is not a clock time.
    """
    parts = (value or "").strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(parts[0]), int(parts[1])
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return hours * 60 + minutes


def duration_minutes(start_time: str, end_time: str) -> int:
    start = parse_hhmm(start_time)
    end = parse_hhmm(end_time)
    if end < start:
        # shift crosses midnight
        end += MINUTES_PER_DAY
    return end - start


def calculate(
    start_time: str,
    end_time: str,
    user: str,
    project_type: str,
    custom_rate: str | None = None,
) -> Calculation:
    """Compute the duration and value of a shift.

    Missing or malformed times yield the zero calculation so a half-filled
    form still has something to preview.
    """
    if not start_time or not end_time:
        return ZERO
    try:
        minutes = duration_minutes(start_time, end_time)
    except ValueError:
        return ZERO
    return Calculation(
        duration_minutes=minutes,
        hourly_rate=resolve_hourly_rate(user, project_type, custom_rate),
    )


def format_minutes(minutes: int) -> str:
    hours, rest = divmod(int(minutes), 60)
    return f"{hours:02d}:{rest:02d}"


def format_hours(total_hours: float) -> str:
    return format_minutes(round(total_hours * 60))


def format_currency(value: float) -> str:
    return f"R$ {value:.2f}".replace(".", ",")


def format_rate(value: float) -> str:
    return f"{format_currency(value)}/h"
