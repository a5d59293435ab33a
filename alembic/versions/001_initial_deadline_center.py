"""Create holidays, deadlines, deadline_suspensions, job_logs and audit_logs

Revision ID: 001_initial_deadline_center
Revises:
Create Date: initial schema for the deadline center

"""
from alembic import op  # type: ignore
import sqlalchemy as sa  # type: ignore
from sqlalchemy import text  # type: ignore


# revision identifiers, used by Alembic.
revision = "001_initial_deadline_center"
down_revision = None
branch_labels = None
depends_on = None


def _table_exists(connection, table_name: str) -> bool:
    result = connection.execute(
        text(
            "SELECT 1 FROM information_schema.tables "
            "WHERE table_schema = DATABASE() AND table_name = :t"
        ),
        {"t": table_name},
    )
    return result.scalar() is not None


def upgrade() -> None:
    connection = op.get_bind()

    if not _table_exists(connection, "holidays"):
        op.create_table(
            "holidays",
            sa.Column("id", sa.String(36), nullable=False),
            sa.Column("name", sa.String(255), nullable=False),
            sa.Column("date", sa.Date(), nullable=False, comment="Only month/day is significant when recurring"),
            sa.Column("scope", sa.String(20), nullable=False, server_default="nacional"),
            sa.Column("court", sa.String(50), nullable=True, comment="Court/jurisdiction for non-national holidays, e.g. TRT2"),
            sa.Column("recurring", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("idx_holiday_date", "holidays", ["date"])
        op.create_index("idx_holiday_scope_court", "holidays", ["scope", "court"])

    if not _table_exists(connection, "deadlines"):
        op.create_table(
            "deadlines",
            sa.Column("id", sa.String(36), nullable=False),
            sa.Column("title", sa.String(255), nullable=False),
            sa.Column("case_number", sa.String(50), nullable=True, comment="Process number (CNJ format)"),
            sa.Column("court", sa.String(50), nullable=True),
            sa.Column("deadline_type", sa.String(50), nullable=True),
            sa.Column("due_at", sa.Date(), nullable=False),
            sa.Column("original_due_at", sa.Date(), nullable=True),
            sa.Column("suspended", sa.Boolean(), nullable=False, server_default=sa.false()),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("idx_deadline_due_at", "deadlines", ["due_at"])
        op.create_index("idx_deadline_suspended", "deadlines", ["suspended"])
        op.create_index("idx_deadline_case_number", "deadlines", ["case_number"])

    if not _table_exists(connection, "deadline_suspensions"):
        op.create_table(
            "deadline_suspensions",
            sa.Column("id", sa.String(36), nullable=False),
            sa.Column("deadline_id", sa.String(36), nullable=False),
            sa.Column("reason", sa.Text(), nullable=False),
            sa.Column("remaining_days", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.Column("resumed_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.ForeignKeyConstraint(["deadline_id"], ["deadlines.id"], ondelete="CASCADE", onupdate="CASCADE"),
        )
        op.create_index("idx_suspension_deadline_id", "deadline_suspensions", ["deadline_id"])
        op.create_index("idx_suspension_created_at", "deadline_suspensions", ["created_at"])

    if not _table_exists(connection, "job_logs"):
        op.create_table(
            "job_logs",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("job_name", sa.String(255), nullable=False),
            sa.Column("executed_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.Column("status", sa.Enum("SUCCESS", "FAILED", name="jobstatusenum"), nullable=False),
            sa.Column("details", sa.JSON(), nullable=True),
            sa.Column("executed_by", sa.String(255), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("job_name"),
        )
        op.create_index("idx_job_name", "job_logs", ["job_name"])
        op.create_index("idx_job_executed_at", "job_logs", ["executed_at"])
        op.create_index("idx_job_status", "job_logs", ["job_name", "status"])

    if not _table_exists(connection, "audit_logs"):
        op.create_table(
            "audit_logs",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("actor", sa.String(255), nullable=True),
            sa.Column("affected_entity_id", sa.String(36), nullable=True),
            sa.Column("affected_entity_type", sa.String(50), nullable=False),
            sa.Column("action", sa.String(100), nullable=False),
            sa.Column("summary", sa.Text(), nullable=True),
            sa.Column("request_method", sa.String(10), nullable=True),
            sa.Column("request_path", sa.String(500), nullable=True),
            sa.Column("old_values", sa.JSON(), nullable=True),
            sa.Column("new_values", sa.JSON(), nullable=True),
            sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP")),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("idx_audit_action", "audit_logs", ["action"])
        op.create_index("idx_audit_affected_entity", "audit_logs", ["affected_entity_type", "affected_entity_id"])
        op.create_index("idx_audit_created_at", "audit_logs", ["created_at"])


def downgrade() -> None:
    op.drop_table("audit_logs")
    op.drop_table("job_logs")
    op.drop_table("deadline_suspensions")
    op.drop_table("deadlines")
    op.drop_table("holidays")
