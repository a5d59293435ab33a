"""
Business-day arithmetic for procedural deadlines.

Business days skip Saturdays, Sundays and holidays. Holidays are national
or scoped to a court, and may recur every year on the same month/day.
All functions are pure: holiday records are only read, and every date is
compared as a calendar date (datetimes are reduced to their date part).

Holiday records can be ORM rows or pydantic models; anything exposing
``date``, ``scope``, ``court`` and ``recurring`` works. ``date`` may be a
``datetime.date`` or an ISO ``YYYY-MM-DD`` string.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence, Union

from backend.models.enums import AlertLevelEnum, HolidayScopeEnum

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]

NATIONAL_SCOPE = HolidayScopeEnum.NACIONAL.value

# date.weekday(): Saturday=5, Sunday=6
WEEKEND_DAYS = (5, 6)


def to_date(value: DateLike) -> date:
    """Normalize a date, datetime or ISO string to a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


def applies_to_court(holiday: Any, court: Optional[str] = None) -> bool:
    """
    Whether a holiday is in force for the given court.

    Only a non-national holiday that names a court, queried with a different
    court, is excluded. A court-scoped holiday queried without a court still
    applies.
    """
    if holiday.scope != NATIONAL_SCOPE and holiday.court and court and holiday.court != court:
        return False
    return True


def is_holiday(day: DateLike, holidays: Sequence[Any], court: Optional[str] = None) -> bool:
    """Check if a date falls on a holiday for the given court (national holidays always count)."""
    day = to_date(day)
    month_day = day.strftime("%m-%d")

    for holiday in holidays:
        if not applies_to_court(holiday, court):
            continue

        holiday_day = to_date(holiday.date)
        if holiday.recurring:
            # Year is a placeholder; a 02-29 holiday only matches leap years
            if holiday_day.strftime("%m-%d") == month_day:
                return True
        elif holiday_day == day:
            return True

    return False


def is_business_day(day: DateLike, holidays: Sequence[Any], court: Optional[str] = None) -> bool:
    """Check if a date is a business day (not weekend, not holiday)."""
    day = to_date(day)
    return day.weekday() not in WEEKEND_DAYS and not is_holiday(day, holidays, court)


def add_business_days(
    start_date: DateLike,
    business_days: int,
    holidays: Sequence[Any],
    court: Optional[str] = None,
) -> date:
    """
    Add N business days to a start date, skipping weekends and holidays.

    The start date itself never counts. With business_days=0 the start date
    is returned unchanged; otherwise the result is strictly later and is
    always a business day.
    """
    current = to_date(start_date)
    added = 0

    while added < business_days:
        current += timedelta(days=1)
        if is_business_day(current, holidays, court):
            added += 1

    logger.debug("add_business_days start=%s days=%s court=%s -> %s", start_date, business_days, court, current)
    return current


def count_business_days(
    start: DateLike,
    end: DateLike,
    holidays: Sequence[Any],
    court: Optional[str] = None,
) -> int:
    """Count business days after start, up to and including end."""
    end = to_date(end)
    current = to_date(start) + timedelta(days=1)
    count = 0

    while current <= end:
        if is_business_day(current, holidays, court):
            count += 1
        current += timedelta(days=1)

    return count


def remaining_business_days(
    due_date: DateLike,
    holidays: Sequence[Any],
    court: Optional[str] = None,
    today: Optional[DateLike] = None,
) -> int:
    """Calculate remaining business days until a deadline (0 once due today or past)."""
    today = to_date(today) if today is not None else date.today()
    due = to_date(due_date)

    if due <= today:
        return 0
    return count_business_days(today, due, holidays, court)


def remaining_calendar_days(due_date: DateLike, today: Optional[DateLike] = None) -> int:
    """Calculate remaining calendar days until a deadline, clamped at 0."""
    today = to_date(today) if today is not None else date.today()
    return max(0, (to_date(due_date) - today).days)


def get_deadline_alert_level(
    due_date: DateLike,
    holidays: Sequence[Any],
    court: Optional[str] = None,
    today: Optional[DateLike] = None,
) -> AlertLevelEnum:
    """
    Classify how close a deadline is.

    Both remaining counts are 0 for a deadline due today and for one already
    missed, so that case falls back to comparing the dates directly.
    """
    today = to_date(today) if today is not None else date.today()
    due = to_date(due_date)

    remaining = remaining_business_days(due, holidays, court, today=today)
    calendar_days = remaining_calendar_days(due, today=today)

    if calendar_days == 0 and remaining == 0:
        if due < today:
            return AlertLevelEnum.OVERDUE
        return AlertLevelEnum.TODAY

    if remaining <= 0:
        return AlertLevelEnum.OVERDUE
    if remaining <= 3:
        return AlertLevelEnum.WITHIN_3_DAYS
    if remaining <= 7:
        return AlertLevelEnum.WITHIN_7_DAYS
    if remaining <= 15:
        return AlertLevelEnum.WITHIN_15_DAYS
    return AlertLevelEnum.OK
