from __future__ import annotations
from typing import Iterable

from .calculator import format_currency, format_hours, format_rate
from .filters import entry_date
from .models import TimeEntry


def format_entry(entry: TimeEntry) -> str:
    return "\n".join(
        [
            f"{entry.project_name}  [{entry_date(entry).isoformat()}]",
            f"  Tipo: {entry.type_label}",
            f"  {entry.user} - {format_rate(entry.hourly_rate)}",
            f"  {entry.start_time}-{entry.end_time}  {format_hours(entry.total_hours)}  {format_currency(entry.total_value)}",
        ]
    )


def format_entries(entries: Iterable[TimeEntry]) -> str:
    entries = list(entries)
    if not entries:
        return "Nenhum apontamento encontrado."
    rows = [format_entry(entry) for entry in entries]
    total_hours = sum(e.total_hours for e in entries)
    total_value = sum(e.total_value for e in entries)
    rows.append(f"Total: {len(entries)} apontamento(s), {format_hours(total_hours)}, {format_currency(total_value)}")
    return "\n".join(rows)
