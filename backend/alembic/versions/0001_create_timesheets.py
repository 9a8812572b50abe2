"""create timesheets table

Revision ID: 0001
Revises: None
Create Date: 2026-10-17
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "timesheets",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("project_name", sa.String(length=255), nullable=False),
        sa.Column("project_type", sa.String(length=50), nullable=False),
        sa.Column("other_project_name", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("user", sa.String(length=50), nullable=False),
        sa.Column("hourly_rate", sa.Float(), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("total_hours", sa.Float(), nullable=False),
        sa.Column("total_value", sa.Float(), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_timesheets_timestamp"), "timesheets", ["timestamp"], unique=False)
    op.create_index(op.f("ix_timesheets_user_id"), "timesheets", ["user_id"], unique=False)


def downgrade() -> None:
    op.drop_index(op.f("ix_timesheets_user_id"), table_name="timesheets")
    op.drop_index(op.f("ix_timesheets_timestamp"), table_name="timesheets")
    op.drop_table("timesheets")
