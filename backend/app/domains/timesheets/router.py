from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field, field_validator, model_validator
from sqlalchemy.orm import Session

from app.core.observability import entries_created, tracer
from app.db.session import get_session
from app.models.timesheet import Timesheet
from timesheet.calculator import parse_hhmm
from timesheet.logging import get_logger
from timesheet.models import ProjectType

router = APIRouter(prefix="/timesheets", tags=["timesheets"])
logger = get_logger(__name__)

ProjectTypeName = Literal["BI", "Engenharia de Dados", "Data Science", "Outros"]
UserName = Literal["Lavezzo", "Outro"]


class TimesheetIn(BaseModel):
    project_name: Annotated[str, Field(min_length=1, max_length=255)]
    project_type: ProjectTypeName
    other_project_name: str = ""
    user: UserName
    hourly_rate: Annotated[float, Field(ge=0)]
    start_time: str
    end_time: str
    total_hours: Annotated[float, Field(ge=0, lt=24)]
    total_value: Annotated[float, Field(ge=0)]
    timestamp: datetime
    user_id: Annotated[str, Field(min_length=1, max_length=64)]

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock_time(cls, value: str) -> str:
        parse_hhmm(value)
        return value

    @field_validator("timestamp")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def description_only_for_other(self) -> "TimesheetIn":
        if self.project_type == ProjectType.OTHER.value:
            if not self.other_project_name.strip():
                raise ValueError("other_project_name is required for project type Outros")
        elif self.other_project_name:
            raise ValueError("other_project_name is only allowed for project type Outros")
        return self


class TimesheetOut(TimesheetIn):
    id: str


def _to_out(row: Timesheet) -> TimesheetOut:
    return TimesheetOut(
        id=row.id,
        project_name=row.project_name,
        project_type=row.project_type,
        other_project_name=row.other_project_name or "",
        user=row.user,
        hourly_rate=row.hourly_rate,
        start_time=row.start_time,
        end_time=row.end_time,
        total_hours=row.total_hours,
        total_value=row.total_value,
        timestamp=row.timestamp,
        user_id=row.user_id,
    )


@router.get("", response_model=list[TimesheetOut])
def list_timesheets(
    user_id: str | None = Query(default=None, description="Only entries recorded by this identity"),
    db: Session = Depends(get_session),
) -> list[TimesheetOut]:
    query = db.query(Timesheet)
    if user_id:
        query = query.filter(Timesheet.user_id == user_id)
    rows = query.order_by(Timesheet.timestamp.desc(), Timesheet.id.desc()).all()
    return [_to_out(row) for row in rows]


@router.post("", response_model=TimesheetOut, status_code=201)
def create_timesheet(payload: TimesheetIn, db: Session = Depends(get_session)) -> TimesheetOut:
    with tracer.start_as_current_span("timesheets.insert"):
        row = Timesheet(**payload.model_dump())
        db.add(row)
        db.commit()
        db.refresh(row)

    entries_created.add(1, {"project_type": row.project_type})
    logger.info("timesheet_created", id=row.id, project_type=row.project_type, user=row.user)
    return _to_out(row)
