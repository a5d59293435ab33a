"""
Models package for the deadline center

SQLAlchemy ORM models are split by domain.
Pydantic models are in the same files as their corresponding SQLAlchemy models.
"""

# Enums
from .enums import (
    HolidayScopeEnum,
    DeadlineUnitEnum,
    AlertLevelEnum,
    JobStatusEnum,
)

# SQLAlchemy Models
from .holiday import Holiday
from .deadline import Deadline, DeadlineSuspension
from .job import JobLog
from .audit import AuditLog

# Pydantic Models
from .holiday import (
    HolidayBase,
    HolidayCreate,
    HolidaySchema,
)
from .deadline import (
    DeadlineType,
    DeadlineCalculationRequest,
    DeadlineCalculationResult,
    AlertLevelResult,
    DeadlineBase,
    DeadlineCreate,
    DeadlineSchema,
    SuspendRequest,
    DeadlineSuspensionSchema,
)
from .job import JobLogSchema

__all__ = [
    # Enums
    "HolidayScopeEnum",
    "DeadlineUnitEnum",
    "AlertLevelEnum",
    "JobStatusEnum",
    # SQLAlchemy Models
    "Holiday",
    "Deadline",
    "DeadlineSuspension",
    "JobLog",
    "AuditLog",
    # Pydantic Models
    "HolidayBase",
    "HolidayCreate",
    "HolidaySchema",
    "DeadlineType",
    "DeadlineCalculationRequest",
    "DeadlineCalculationResult",
    "AlertLevelResult",
    "DeadlineBase",
    "DeadlineCreate",
    "DeadlineSchema",
    "SuspendRequest",
    "DeadlineSuspensionSchema",
    "JobLogSchema",
]
