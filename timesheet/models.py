from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional


class ProjectType(str, Enum):
    BI = "BI"
    DATA_ENGINEERING = "Engenharia de Dados"
    DATA_SCIENCE = "Data Science"
    OTHER = "Outros"

    @classmethod
    def parse(cls, value: str) -> Optional["ProjectType"]:
        for member in cls:
            if member.value == value:
                return member
        return None


class UserChoice(str, Enum):
    """Who is billing the hours. The fixed identity bills from the rate table."""

    LAVEZZO = "Lavezzo"
    OTHER = "Outro"

    @classmethod
    def parse(cls, value: str) -> Optional["UserChoice"]:
        key = (value or "").strip().lower()
        return USER_ALIASES.get(key)


USER_ALIASES = {
    "lavezzo": UserChoice.LAVEZZO,
    "outro": UserChoice.OTHER,
    "other": UserChoice.OTHER,
}

PROJECT_TYPES = [member.value for member in ProjectType]
USERS = [member.value for member in UserChoice]


@dataclass
class EntryDraft:
    """Raw form state, exactly as typed by the user."""

    project_name: str = ""
    project_type: str = ""
    other_project_name: str = ""
    user: str = ""
    custom_rate: str = ""
    start_time: str = ""
    end_time: str = ""


@dataclass(frozen=True)
class TimeEntry:
    project_name: str
    project_type: str
    user: str
    hourly_rate: float
    start_time: str
    end_time: str
    total_hours: float
    total_value: float
    timestamp: datetime
    user_id: str
    other_project_name: str = ""
    id: Optional[str] = None

    @property
    def type_label(self) -> str:
        if self.project_type == ProjectType.OTHER.value:
            return f"{self.project_type} - {self.other_project_name}"
        return self.project_type


@dataclass
class Notification:
    title: str
    message: str
    variant: str = "default"  # default or destructive

    @property
    def is_error(self) -> bool:
        return self.variant == "destructive"

    @classmethod
    def success(cls, message: str) -> "Notification":
        return cls(title="Sucesso!", message=message)

    @classmethod
    def error(cls, message: str) -> "Notification":
        return cls(title="Erro", message=message, variant="destructive")


@dataclass
class EntryFilter:
    project_type: str = "all"
    user: str = "all"
    date_from: Optional[date] = None
    date_to: Optional[date] = None
