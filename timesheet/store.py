from __future__ import annotations
import json
from abc import ABC, abstractmethod
from dataclasses import asdict, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

import httpx

from .errors import CollaboratorError
from .logging import get_logger
from .models import TimeEntry

TABLE = "timesheets"

logger = get_logger(__name__)


class TimesheetStore(ABC):
    """Persistence collaborator holding the ``timesheets`` collection."""

    @abstractmethod
    def insert(self, entry: TimeEntry) -> str:
        raise NotImplementedError

    @abstractmethod
    def select_all(self, user_id: Optional[str] = None) -> List[TimeEntry]:
        """Return entries, newest first, optionally only those of ``user_id``."""
        raise NotImplementedError


def serialize_entry(entry: TimeEntry) -> dict:
    payload = asdict(entry)
    payload.pop("id")
    payload["timestamp"] = entry.timestamp.isoformat()
    return payload


def deserialize_entry(data: dict) -> TimeEntry:
    timestamp = datetime.fromisoformat(str(data["timestamp"]).replace("Z", "+00:00"))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return TimeEntry(
        id=str(data["id"]) if data.get("id") is not None else None,
        project_name=data["project_name"],
        project_type=data["project_type"],
        other_project_name=data.get("other_project_name") or "",
        user=data["user"],
        hourly_rate=float(data["hourly_rate"]),
        start_time=data["start_time"],
        end_time=data["end_time"],
        total_hours=float(data["total_hours"]),
        total_value=float(data["total_value"]),
        timestamp=timestamp,
        user_id=data["user_id"],
    )


def newest_first(entries: List[TimeEntry]) -> List[TimeEntry]:
    return sorted(entries, key=lambda e: e.timestamp, reverse=True)


class JsonTimesheetStore(TimesheetStore):
    """Keeps the collection in a local JSON file, for use without the service."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self, operation: str = "select") -> List[dict]:
        if not self.path.exists():
            return []
        try:
            content = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CollaboratorError(operation, f"cannot read {self.path}: {exc}") from exc
        rows = content.get(TABLE, []) if isinstance(content, dict) else None
        if not isinstance(rows, list):
            raise CollaboratorError(operation, f"{self.path} does not hold a {TABLE} list")
        return rows

    def _save(self, rows: List[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps({TABLE: rows}, indent=2), encoding="utf-8")
        except OSError as exc:
            raise CollaboratorError("insert", f"cannot write {self.path}: {exc}") from exc

    def insert(self, entry: TimeEntry) -> str:
        rows = self._load("insert")
        entry_id = str(uuid4())
        rows.append({"id": entry_id, **serialize_entry(entry)})
        self._save(rows)
        logger.info("entry_inserted", store="json", id=entry_id)
        return entry_id

    def select_all(self, user_id: Optional[str] = None) -> List[TimeEntry]:
        try:
            entries = [deserialize_entry(row) for row in self._load()]
        except (KeyError, TypeError, ValueError) as exc:
            raise CollaboratorError("select", f"malformed record in {self.path}: {exc}") from exc
        if user_id:
            entries = [e for e in entries if e.user_id == user_id]
        return newest_first(entries)


class HttpTimesheetStore(TimesheetStore):
    """Client for the timesheet service's ``/timesheets`` endpoints."""

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    @classmethod
    def from_url(cls, base_url: str, timeout: float = 10.0) -> "HttpTimesheetStore":
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def insert(self, entry: TimeEntry) -> str:
        try:
            response = self.client.post(f"/{TABLE}", json=serialize_entry(entry))
            response.raise_for_status()
            entry_id = str(response.json()["id"])
        except (httpx.HTTPError, KeyError, ValueError) as exc:
            logger.warning("insert_failed", error=str(exc))
            raise CollaboratorError("insert", str(exc)) from exc
        logger.info("entry_inserted", store="http", id=entry_id)
        return entry_id

    def select_all(self, user_id: Optional[str] = None) -> List[TimeEntry]:
        params = {"user_id": user_id} if user_id else {}
        try:
            response = self.client.get(f"/{TABLE}", params=params)
            response.raise_for_status()
            entries = [deserialize_entry(row) for row in response.json()]
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
            logger.warning("select_failed", error=str(exc))
            raise CollaboratorError("select", str(exc)) from exc
        return entries


def with_id(entry: TimeEntry, entry_id: str) -> TimeEntry:
    return replace(entry, id=entry_id)


def store_from_settings(settings) -> TimesheetStore:
    if settings.api_url:
        return HttpTimesheetStore.from_url(settings.api_url, timeout=settings.request_timeout)
    return JsonTimesheetStore(settings.data_path)
