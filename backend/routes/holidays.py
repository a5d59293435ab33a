from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Depends, Response, Request, status
from sqlalchemy import select, and_  # type: ignore
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore

from backend.db import get_db, AsyncSessionLocal, ensure_database_exists, init_db
from backend.models import Holiday as HolidayModel, HolidayCreate, HolidaySchema, HolidayScopeEnum
from backend.services.audit import log_action as audit_log_action
from backend.services.holiday_repository import HolidayRepository, get_holiday_repository
from backend.services.scheduler import deadline_alert_sweep
from backend.services.seed import run_seed_holidays
from backend.utils.action_log import log_user_action, get_client_ip
from backend.utils.business_days import is_business_day, is_holiday

router = APIRouter(prefix="/admin", tags=["Holidays"])

calendar_router = APIRouter(prefix="/calendar", tags=["Calendar"])


def _court_for(holiday: HolidayCreate) -> Optional[str]:
    # Court only makes sense for non-national holidays
    if holiday.scope == HolidayScopeEnum.NACIONAL:
        return None
    return holiday.court


async def _find_duplicate(holiday: HolidayCreate, db: AsyncSession) -> Optional[HolidayModel]:
    """Same date, scope and court already registered."""
    court = _court_for(holiday)
    court_clause = HolidayModel.court.is_(None) if court is None else HolidayModel.court == court
    result = await db.execute(
        select(HolidayModel).where(
            and_(
                HolidayModel.date == holiday.date,
                HolidayModel.scope == holiday.scope.value,
                court_clause,
            )
        )
    )
    return result.scalars().first()


def _to_model(holiday: HolidayCreate) -> HolidayModel:
    return HolidayModel(
        name=holiday.name,
        date=holiday.date,
        scope=holiday.scope.value,
        court=_court_for(holiday),
        recurring=holiday.recurring,
    )


@router.post("/holidays/bulk", response_model=dict)
async def bulk_create_holidays(holidays: List[HolidayCreate], request: Request, db: AsyncSession = Depends(get_db)):
    """
    Bulk import holidays. Skips duplicates based on date, scope and court.
    """
    inserted_count = 0
    errors = []
    seen = set()

    for h in holidays:
        court = _court_for(h)
        key = (h.date, h.scope.value, court)
        if key in seen or await _find_duplicate(h, db):
            errors.append(f"Holiday on {h.date} ({h.scope.value}{'/' + court if court else ''}) already exists")
            continue
        seen.add(key)
        db.add(_to_model(h))
        inserted_count += 1

    await audit_log_action(
        db, "BULK_CREATE_HOLIDAYS", "HOLIDAY",
        new_values={"inserted": inserted_count, "skipped": len(errors)},
        summary=f"Imported {inserted_count} holidays",
        request_method=request.method, request_path=request.url.path,
    )
    await db.commit()
    log_user_action("BULK_CREATE_HOLIDAYS", client_ip=get_client_ip(request), inserted=inserted_count, skipped=len(errors))

    return {
        "success": True,
        "count": inserted_count,
        "errors": errors
    }


@router.post("/holidays", response_model=str, status_code=status.HTTP_201_CREATED)
async def create_holiday(holiday: HolidayCreate, request: Request, db: AsyncSession = Depends(get_db)):
    if await _find_duplicate(holiday, db):
        raise HTTPException(status_code=400, detail="Holiday for this date and jurisdiction already exists")

    new_holiday = _to_model(holiday)
    db.add(new_holiday)
    await db.flush()
    holiday_id = new_holiday.id

    await audit_log_action(
        db, "CREATE_HOLIDAY", "HOLIDAY",
        affected_entity_id=holiday_id,
        new_values=holiday.model_dump(),
        summary=f"Holiday {holiday.name} on {holiday.date}",
        request_method=request.method, request_path=request.url.path,
    )
    await db.commit()
    log_user_action(
        "CREATE_HOLIDAY", client_ip=get_client_ip(request),
        holiday_id=holiday_id, date=holiday.date.isoformat(), scope=holiday.scope.value, court=holiday.court,
    )
    return holiday_id


@router.delete("/holidays/{holiday_id}")
async def delete_holiday(holiday_id: str, request: Request, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(HolidayModel).where(HolidayModel.id == holiday_id))
    holiday = result.scalar_one_or_none()
    if not holiday:
        raise HTTPException(status_code=404, detail="Holiday not found")

    old_values = HolidaySchema.model_validate(holiday).model_dump()
    await db.delete(holiday)
    await audit_log_action(
        db, "DELETE_HOLIDAY", "HOLIDAY",
        affected_entity_id=holiday_id,
        old_values=old_values,
        request_method=request.method, request_path=request.url.path,
    )
    await db.commit()
    log_user_action("DELETE_HOLIDAY", client_ip=get_client_ip(request), holiday_id=holiday_id)

    return {"message": "Deleted successfully"}


@calendar_router.get("/holidays", response_model=List[HolidaySchema])
async def get_holidays(
    response: Response,
    court: Optional[str] = None,
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    """
    Get holidays sorted by date, optionally only those in force for a court.
    """
    holidays = await repository.list_for_court(court)

    # Short max-age so newly imported holidays show up quickly
    response.headers["Cache-Control"] = "public, max-age=60, must-revalidate"
    return holidays


@calendar_router.get("/business-day", response_model=dict)
async def check_business_day(
    day: date,
    court: Optional[str] = None,
    repository: HolidayRepository = Depends(get_holiday_repository),
):
    holidays = await repository.list_holidays()
    return {
        "day": day,
        "court": court,
        "is_business_day": is_business_day(day, holidays, court),
        "is_holiday": is_holiday(day, holidays, court),
    }


@router.post("/bootstrap", response_model=dict)
async def bootstrap():
    """
    Full bootstrap: create database if missing, create all tables, then seed the national holidays.
    Safe to run multiple times (idempotent).
    """
    await ensure_database_exists()
    await init_db()
    async with AsyncSessionLocal() as db:
        holidays_created = await run_seed_holidays(db)
        await db.commit()
    log_user_action("BOOTSTRAP", holidays_created=holidays_created)
    return {
        "message": "Bootstrap complete",
        "tables_created": True,
        "holidays_created": holidays_created,
    }


@router.post("/deadline-sweep", response_model=dict)
async def run_deadline_sweep():
    """
    Run the daily deadline alert sweep now.
    Idempotent per day: returns the stored result if it already ran today.
    """
    stats = await deadline_alert_sweep(executed_by="manual")
    if stats is None:
        return {"message": "Deadline alert sweep already executed today (or failed; see job_logs)."}
    return {"message": "Deadline alert sweep completed successfully.", "stats": stats}
