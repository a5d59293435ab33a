"""
Deadline-related SQLAlchemy models
"""
import uuid
from datetime import datetime, date
from typing import Optional

from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, Text, ForeignKey, Index, text  # type: ignore
from sqlalchemy.orm import relationship  # type: ignore
from pydantic import BaseModel, Field

from backend.db import Base
from backend.models.enums import AlertLevelEnum, DeadlineUnitEnum


def _new_id() -> str:
    return str(uuid.uuid4())


class Deadline(Base):
    """Procedural deadlines table"""
    __tablename__ = "deadlines"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    case_number = Column(String(50), nullable=True, comment="Process number (CNJ format)")
    court = Column(String(50), nullable=True, comment="Court used to pick court-specific holidays")
    deadline_type = Column(String(50), nullable=True, comment="Code from the deadline type catalog")
    due_at = Column(Date, nullable=False)
    original_due_at = Column(Date, nullable=True, comment="Due date before the first suspension")
    suspended = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP"))
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    suspensions = relationship(
        "DeadlineSuspension",
        back_populates="deadline",
        cascade="all, delete-orphan",
        order_by="DeadlineSuspension.created_at",
    )

    __table_args__ = (
        Index("idx_deadline_due_at", "due_at"),
        Index("idx_deadline_suspended", "suspended"),
        Index("idx_deadline_case_number", "case_number"),
    )


class DeadlineSuspension(Base):
    """Deadline suspensions table"""
    __tablename__ = "deadline_suspensions"

    id = Column(String(36), primary_key=True, default=_new_id)
    deadline_id = Column(String(36), ForeignKey("deadlines.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=False)
    reason = Column(Text, nullable=False)
    remaining_days = Column(Integer, nullable=False, default=0, comment="Business days left when suspended")
    created_at = Column(DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP"))
    resumed_at = Column(DateTime, nullable=True, comment="NULL while the suspension is open")

    deadline = relationship("Deadline", back_populates="suspensions")

    __table_args__ = (
        Index("idx_suspension_deadline_id", "deadline_id"),
        Index("idx_suspension_created_at", "created_at"),
    )


# Pydantic Models (for API request/response)

class DeadlineType(BaseModel):
    """Catalog entry for a named procedural deadline"""
    code: str
    label: str
    day_count: int = Field(..., ge=0)
    unit: DeadlineUnitEnum = DeadlineUnitEnum.BUSINESS_DAYS

    class Config:
        frozen = True


class DeadlineCalculationRequest(BaseModel):
    """Model for the deadline calculator"""
    start_date: date
    deadline_type: Optional[str] = None
    days: Optional[int] = Field(None, ge=0, description="Business days, used when no catalog type applies")
    court: Optional[str] = None


class DeadlineCalculationResult(BaseModel):
    start_date: date
    due_date: date
    business_days: int
    court: Optional[str] = None
    deadline_type: Optional[str] = None


class AlertLevelResult(BaseModel):
    due_date: date
    alert_level: AlertLevelEnum
    remaining_business_days: int
    remaining_calendar_days: int


class DeadlineBase(BaseModel):
    """Base deadline model"""
    title: str = Field(..., min_length=1)
    case_number: Optional[str] = None
    court: Optional[str] = None
    deadline_type: Optional[str] = None
    notes: Optional[str] = None


class DeadlineCreate(DeadlineBase):
    """
    Model for creating a deadline.
    Either due_at is given, or it is computed from start_date plus deadline_type/days.
    """
    due_at: Optional[date] = None
    start_date: Optional[date] = None
    days: Optional[int] = Field(None, ge=0)


class DeadlineSchema(DeadlineBase):
    """Model for deadline response"""
    id: str
    due_at: date
    original_due_at: Optional[date] = None
    suspended: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    alert_level: Optional[AlertLevelEnum] = None
    remaining_business_days: Optional[int] = None

    class Config:
        from_attributes = True


class SuspendRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class DeadlineSuspensionSchema(BaseModel):
    """Model for suspension history response"""
    id: str
    deadline_id: str
    reason: str
    remaining_days: int
    created_at: Optional[datetime] = None
    resumed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
