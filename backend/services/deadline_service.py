"""
Deadline service: due-date calculation, alert enrichment and suspension handling.
Holidays are always passed in; this module never loads them itself.
"""
import logging
from collections import Counter
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from fastapi import HTTPException
from sqlalchemy import select  # type: ignore
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore
from sqlalchemy.orm import selectinload  # type: ignore

from backend.models import (
    AlertLevelEnum,
    Deadline as DeadlineModel,
    DeadlineSchema,
    DeadlineSuspension as DeadlineSuspensionModel,
)
from backend.utils.business_days import (
    add_business_days,
    get_deadline_alert_level,
    remaining_business_days,
)
from backend.utils.deadline_types import get_deadline_type, resolve_business_days

logger = logging.getLogger(__name__)


def calculate_due_date(
    start_date: date,
    holidays: Sequence[Any],
    deadline_type: Optional[str] = None,
    days: Optional[int] = None,
    court: Optional[str] = None,
) -> Tuple[date, int]:
    """
    Resolve the business-day count for a deadline type (or explicit days) and add it to start_date.
    Returns (due_date, business_days). Raises HTTPException 400 if no count can be resolved.
    """
    business_days = resolve_business_days(deadline_type, days)
    if business_days is None:
        if deadline_type and get_deadline_type(deadline_type) is None:
            raise HTTPException(status_code=400, detail=f"Unknown deadline type: {deadline_type}")
        raise HTTPException(status_code=400, detail="Provide a deadline_type or a number of days")

    due_date = add_business_days(start_date, business_days, holidays, court)
    return due_date, business_days


def enrich_deadline(deadline: DeadlineModel, holidays: Sequence[Any], today: Optional[date] = None) -> DeadlineSchema:
    """
    Attach alert level and remaining business days to a deadline.
    Suspended deadlines are reported as OK with no remaining count.
    """
    schema = DeadlineSchema.model_validate(deadline)
    if deadline.suspended:
        return schema.model_copy(update={"alert_level": AlertLevelEnum.OK, "remaining_business_days": None})

    return schema.model_copy(update={
        "alert_level": get_deadline_alert_level(deadline.due_at, holidays, deadline.court, today=today),
        "remaining_business_days": remaining_business_days(deadline.due_at, holidays, deadline.court, today=today),
    })


def filter_deadlines(
    deadlines: Iterable[DeadlineSchema],
    alert_level: Optional[AlertLevelEnum] = None,
    search: Optional[str] = None,
) -> List[DeadlineSchema]:
    """Filter enriched deadlines by alert level and a case-insensitive text search."""
    needle = search.lower() if search else None
    filtered = []
    for d in deadlines:
        if alert_level is not None and d.alert_level != alert_level:
            continue
        if needle:
            haystack = (d.title or "", d.case_number or "", d.court or "")
            if not any(needle in field.lower() for field in haystack):
                continue
        filtered.append(d)
    return filtered


def compute_deadline_stats(deadlines: Sequence[DeadlineSchema]) -> Dict[str, int]:
    """Counts per alert level (suspended deadlines counted separately)."""
    counts = Counter(d.alert_level for d in deadlines if not d.suspended)
    stats = {level.value: counts.get(level, 0) for level in AlertLevelEnum}
    stats["suspended"] = sum(1 for d in deadlines if d.suspended)
    stats["total"] = len(deadlines)
    return stats


def open_suspension(deadline: DeadlineModel) -> Optional[DeadlineSuspensionModel]:
    """The suspension that has not been resumed yet, if any."""
    for suspension in reversed(deadline.suspensions):
        if suspension.resumed_at is None:
            return suspension
    return None


def suspend_deadline(
    deadline: DeadlineModel,
    reason: str,
    holidays: Sequence[Any],
    today: Optional[date] = None,
) -> DeadlineSuspensionModel:
    """
    Freeze a deadline, recording how many business days were left.
    original_due_at keeps the due date from before the first suspension.
    """
    if deadline.suspended:
        raise HTTPException(status_code=400, detail="Deadline is already suspended")

    remaining = remaining_business_days(deadline.due_at, holidays, deadline.court, today=today)
    suspension = DeadlineSuspensionModel(
        deadline_id=deadline.id,
        reason=reason,
        remaining_days=remaining,
        created_at=datetime.utcnow(),
    )
    deadline.suspensions.append(suspension)
    deadline.suspended = True
    if deadline.original_due_at is None:
        deadline.original_due_at = deadline.due_at

    logger.info("Deadline %s suspended with %s business days remaining", deadline.id, remaining)
    return suspension


def resume_deadline(
    deadline: DeadlineModel,
    holidays: Sequence[Any],
    today: Optional[date] = None,
) -> DeadlineModel:
    """Reactivate a suspended deadline; the remaining business days restart from today."""
    if not deadline.suspended:
        raise HTTPException(status_code=400, detail="Deadline is not suspended")

    suspension = open_suspension(deadline)
    if suspension is None:
        raise HTTPException(status_code=400, detail="No open suspension found for this deadline")

    start = today if today is not None else date.today()
    new_due = add_business_days(start, suspension.remaining_days or 0, holidays, deadline.court)

    suspension.resumed_at = datetime.utcnow()
    deadline.suspended = False
    deadline.due_at = new_due

    logger.info("Deadline %s resumed, new due date %s", deadline.id, new_due)
    return deadline


async def get_deadline_or_404(deadline_id: str, db: AsyncSession) -> DeadlineModel:
    result = await db.execute(
        select(DeadlineModel)
        .options(selectinload(DeadlineModel.suspensions))
        .where(DeadlineModel.id == deadline_id)
    )
    deadline = result.scalar_one_or_none()
    if not deadline:
        raise HTTPException(status_code=404, detail="Deadline not found")
    return deadline


async def list_deadlines(db: AsyncSession) -> List[DeadlineModel]:
    result = await db.execute(select(DeadlineModel).order_by(DeadlineModel.due_at))
    return list(result.scalars().all())
