from uuid import uuid4

from sqlalchemy import Column, DateTime, Float, String

from app.db.session import Base


def _new_id() -> str:
    return str(uuid4())


class Timesheet(Base):
    """One recorded shift. Rows are only ever inserted."""

    __tablename__ = "timesheets"

    id = Column(String(36), primary_key=True, default=_new_id)
    project_name = Column(String(255), nullable=False)
    project_type = Column(String(50), nullable=False)
    other_project_name = Column(String(255), nullable=False, default="")
    user = Column(String(50), nullable=False)
    hourly_rate = Column(Float, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    total_hours = Column(Float, nullable=False)
    total_value = Column(Float, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    user_id = Column(String(64), nullable=False, index=True)
