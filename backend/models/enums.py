"""
SQLAlchemy Enum definitions
"""
import enum


class HolidayScopeEnum(str, enum.Enum):
    NACIONAL = "nacional"
    ESTADUAL = "estadual"
    MUNICIPAL = "municipal"
    TRT = "trt"


class DeadlineUnitEnum(str, enum.Enum):
    BUSINESS_DAYS = "business_days"
    HOURS = "hours"


class AlertLevelEnum(str, enum.Enum):
    """Urgency of a deadline, most urgent first."""
    OVERDUE = "overdue"
    TODAY = "today"
    WITHIN_3_DAYS = "within_3_days"
    WITHIN_7_DAYS = "within_7_days"
    WITHIN_15_DAYS = "within_15_days"
    OK = "ok"


class JobStatusEnum(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
