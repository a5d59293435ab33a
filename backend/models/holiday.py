"""
Holiday SQLAlchemy model
"""
import uuid
from datetime import datetime, date
from typing import Optional

from sqlalchemy import Column, String, Boolean, Date, DateTime, Index, text  # type: ignore
from pydantic import BaseModel, Field

from backend.db import Base
from backend.models.enums import HolidayScopeEnum


def _new_id() -> str:
    return str(uuid.uuid4())


class Holiday(Base):
    """Holidays table"""
    __tablename__ = "holidays"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    date = Column(Date, nullable=False, comment="Only month/day is significant when recurring")
    scope = Column(String(20), nullable=False, default=HolidayScopeEnum.NACIONAL.value)
    court = Column(String(50), nullable=True, comment="Court/jurisdiction for non-national holidays, e.g. TRT2")
    recurring = Column(Boolean, nullable=False, default=False, comment="Repeats every year on the same month/day")
    created_at = Column(DateTime, default=datetime.utcnow, server_default=text("CURRENT_TIMESTAMP"))

    __table_args__ = (
        Index("idx_holiday_date", "date"),
        Index("idx_holiday_scope_court", "scope", "court"),
    )


# Pydantic Models (for API request/response)

class HolidayBase(BaseModel):
    """Base holiday model"""
    name: str = Field(..., min_length=1)
    date: date
    scope: HolidayScopeEnum = HolidayScopeEnum.NACIONAL
    court: Optional[str] = None
    recurring: bool = False


class HolidayCreate(HolidayBase):
    """Model for creating holiday"""
    pass


class HolidaySchema(HolidayBase):
    """Model for holiday response"""
    id: str

    class Config:
        from_attributes = True
