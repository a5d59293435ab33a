"""
Audit log SQLAlchemy model.
Stores what was done, to which record, when.
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, Index  # type: ignore
from datetime import datetime
from backend.db import Base


class AuditLog(Base):
    """
    Audit logs table - trail of changes to holidays and deadlines.

    affected_entity_type = kind of record that was affected (HOLIDAY, DEADLINE, SUSPENSION).
    affected_entity_id   = primary key of that record (UUID string).
    """
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    actor = Column(String(255), nullable=True, comment="Free-form actor label; authentication lives outside this service")

    # --- Affected entity (which record was acted upon) ---
    affected_entity_id = Column(String(36), nullable=True, comment="ID of the affected record")
    affected_entity_type = Column(String(50), nullable=False, comment="Type of affected record: HOLIDAY, DEADLINE, SUSPENSION")

    # --- Action & context ---
    action = Column(String(100), nullable=False, comment="e.g. CREATE_HOLIDAY, SUSPEND_DEADLINE")
    summary = Column(Text, nullable=True, comment="Human-readable one-line description")
    request_method = Column(String(10), nullable=True, comment="e.g. POST, DELETE")
    request_path = Column(String(500), nullable=True, comment="e.g. /deadlines/{id}/suspend")

    old_values = Column(JSON, nullable=True, comment="Previous values before change")
    new_values = Column(JSON, nullable=True, comment="New values after change")
    created_at = Column(DateTime, default=datetime.utcnow, server_default="CURRENT_TIMESTAMP")

    __table_args__ = (
        Index("idx_audit_action", "action"),
        Index("idx_audit_affected_entity", "affected_entity_type", "affected_entity_id"),
        Index("idx_audit_created_at", "created_at"),
    )
