from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Request, status
from sqlalchemy import select  # type: ignore
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore

from backend.db import get_db
from backend.models import (
    AlertLevelEnum,
    AlertLevelResult,
    Deadline as DeadlineModel,
    DeadlineCalculationRequest,
    DeadlineCalculationResult,
    DeadlineCreate,
    DeadlineSchema,
    DeadlineSuspension as DeadlineSuspensionModel,
    DeadlineSuspensionSchema,
    DeadlineType,
    SuspendRequest,
)
from backend.services.audit import log_action as audit_log_action
from backend.services.deadline_service import (
    calculate_due_date,
    compute_deadline_stats,
    enrich_deadline,
    filter_deadlines,
    get_deadline_or_404,
    list_deadlines,
    resume_deadline,
    suspend_deadline,
)
from backend.services.holiday_repository import HolidayRepository, get_holiday_repository
from backend.utils.action_log import log_user_action, get_client_ip
from backend.utils.business_days import (
    get_deadline_alert_level,
    remaining_business_days,
    remaining_calendar_days,
)
from backend.utils.deadline_types import DEADLINE_TYPES, get_deadline_type

router = APIRouter(prefix="/deadlines", tags=["Deadlines"])


@router.get("/types", response_model=List[DeadlineType])
async def get_deadline_types():
    """Catalog of common labor-law deadlines with their default day counts."""
    return list(DEADLINE_TYPES)


@router.post("/calculate", response_model=DeadlineCalculationResult)
async def calculate_deadline(
    payload: DeadlineCalculationRequest,
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    """
    Calculate a due date by adding business days to a start date.
    Uses the catalog count for deadline_type, or days for custom deadlines.
    """
    holidays = await repository.list_holidays()
    due_date, business_days = calculate_due_date(
        payload.start_date,
        holidays,
        deadline_type=payload.deadline_type,
        days=payload.days,
        court=payload.court,
    )
    return DeadlineCalculationResult(
        start_date=payload.start_date,
        due_date=due_date,
        business_days=business_days,
        court=payload.court,
        deadline_type=payload.deadline_type,
    )


@router.get("/alert-level", response_model=AlertLevelResult)
async def get_alert_level(
    due_date: date,
    court: Optional[str] = None,
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    holidays = await repository.list_holidays()
    today = date.today()
    return AlertLevelResult(
        due_date=due_date,
        alert_level=get_deadline_alert_level(due_date, holidays, court, today=today),
        remaining_business_days=remaining_business_days(due_date, holidays, court, today=today),
        remaining_calendar_days=remaining_calendar_days(due_date, today=today),
    )


@router.get("", response_model=List[DeadlineSchema])
async def get_deadlines(
    alert_level: Optional[AlertLevelEnum] = None,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    """
    List tracked deadlines with their alert level, soonest first.
    Filter by alert_level and/or a text search on title, case number and court.
    """
    holidays = await repository.list_holidays()
    today = date.today()
    enriched = [enrich_deadline(d, holidays, today=today) for d in await list_deadlines(db)]
    return filter_deadlines(enriched, alert_level=alert_level, search=search)


@router.get("/stats", response_model=dict)
async def get_deadline_stats(
    db: AsyncSession = Depends(get_db),
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    holidays = await repository.list_holidays()
    today = date.today()
    enriched = [enrich_deadline(d, holidays, today=today) for d in await list_deadlines(db)]
    return compute_deadline_stats(enriched)


@router.get("/suspensions", response_model=List[DeadlineSuspensionSchema])
async def get_suspensions(db: AsyncSession = Depends(get_db)):
    """Suspension history, newest first."""
    result = await db.execute(
        select(DeadlineSuspensionModel).order_by(DeadlineSuspensionModel.created_at.desc())
    )
    return result.scalars().all()


@router.post("", response_model=DeadlineSchema, status_code=status.HTTP_201_CREATED)
async def create_deadline(
    payload: DeadlineCreate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    """
    Track a new deadline. due_at is taken as given, or computed from
    start_date plus the deadline type (or days) when omitted.
    """
    if payload.deadline_type and get_deadline_type(payload.deadline_type) is None:
        raise HTTPException(status_code=400, detail=f"Unknown deadline type: {payload.deadline_type}")

    holidays = await repository.list_holidays()
    due_at = payload.due_at
    if due_at is None:
        if payload.start_date is None:
            raise HTTPException(status_code=400, detail="Provide due_at or start_date")
        due_at, _ = calculate_due_date(
            payload.start_date,
            holidays,
            deadline_type=payload.deadline_type,
            days=payload.days,
            court=payload.court,
        )

    deadline = DeadlineModel(
        title=payload.title,
        case_number=payload.case_number,
        court=payload.court,
        deadline_type=payload.deadline_type,
        notes=payload.notes,
        due_at=due_at,
        suspended=False,
    )
    db.add(deadline)
    await db.flush()

    await audit_log_action(
        db, "CREATE_DEADLINE", "DEADLINE",
        affected_entity_id=deadline.id,
        new_values={"title": deadline.title, "due_at": due_at, "court": deadline.court},
        request_method=request.method, request_path=request.url.path,
    )
    await db.commit()
    log_user_action("CREATE_DEADLINE", client_ip=get_client_ip(request), deadline_id=deadline.id, due_at=due_at.isoformat())

    return enrich_deadline(deadline, holidays)


@router.post("/{deadline_id}/suspend", response_model=DeadlineSuspensionSchema)
async def suspend(
    deadline_id: str,
    payload: SuspendRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    """Suspend a deadline, keeping the business days left for when it resumes."""
    deadline = await get_deadline_or_404(deadline_id, db)
    holidays = await repository.list_holidays()

    suspension = suspend_deadline(deadline, payload.reason, holidays)
    await db.flush()

    await audit_log_action(
        db, "SUSPEND_DEADLINE", "DEADLINE",
        affected_entity_id=deadline.id,
        old_values={"suspended": False},
        new_values={"suspended": True, "remaining_days": suspension.remaining_days, "reason": payload.reason},
        request_method=request.method, request_path=request.url.path,
    )
    await db.commit()
    log_user_action(
        "SUSPEND_DEADLINE", client_ip=get_client_ip(request),
        deadline_id=deadline.id, remaining_days=suspension.remaining_days,
    )
    return suspension


@router.post("/{deadline_id}/resume", response_model=DeadlineSchema)
async def resume(
    deadline_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    """Resume a suspended deadline; the new due date counts the remaining days from today."""
    deadline = await get_deadline_or_404(deadline_id, db)
    holidays = await repository.list_holidays()
    old_due = deadline.due_at

    resume_deadline(deadline, holidays)

    await audit_log_action(
        db, "RESUME_DEADLINE", "DEADLINE",
        affected_entity_id=deadline.id,
        old_values={"suspended": True, "due_at": old_due},
        new_values={"suspended": False, "due_at": deadline.due_at},
        request_method=request.method, request_path=request.url.path,
    )
    await db.commit()
    log_user_action(
        "RESUME_DEADLINE", client_ip=get_client_ip(request),
        deadline_id=deadline.id, due_at=deadline.due_at.isoformat(),
    )
    return enrich_deadline(deadline, holidays)
