import logging
import datetime
import os
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from backend.db import AsyncSessionLocal
from backend.models import JobLog
from backend.models.enums import JobStatusEnum
from backend.services.deadline_service import compute_deadline_stats, enrich_deadline, list_deadlines
from backend.services.holiday_repository import SqlHolidayRepository
from sqlalchemy import select, and_  # type: ignore

logger = logging.getLogger(__name__)
scheduler = AsyncIOScheduler()

DEADLINE_SWEEP_HOUR = int(os.getenv("DEADLINE_SWEEP_HOUR", 6))
DEADLINE_SWEEP_MINUTE = int(os.getenv("DEADLINE_SWEEP_MINUTE", 0))


def _sweep_job_name(day: datetime.date) -> str:
    """Canonical job name for the daily sweep (one per day)."""
    return f"deadline_alert_sweep_{day.year}_{day.month:02d}_{day.day:02d}"


async def deadline_alert_sweep(executed_by: str = "scheduler"):
    """
    Classifies every tracked deadline and records the counts per alert level.
    Runs once a day. Idempotent: skips if already run today.
    """
    today = datetime.date.today()
    job_name = _sweep_job_name(today)
    logger.info("Running deadline alert sweep for %s", today)

    async with AsyncSessionLocal() as db:
        existing = await db.execute(
            select(JobLog).where(
                and_(JobLog.job_name == job_name, JobLog.status == JobStatusEnum.SUCCESS)
            )
        )
        if existing.scalar_one_or_none():
            logger.info("Deadline alert sweep already run for %s, skipping", today)
            return None

        try:
            holidays = await SqlHolidayRepository(db).list_holidays()
            deadlines = await list_deadlines(db)
            stats = compute_deadline_stats([enrich_deadline(d, holidays, today=today) for d in deadlines])

            db.add(JobLog(
                job_name=job_name,
                status=JobStatusEnum.SUCCESS,
                executed_by=executed_by,
                details=stats,
            ))
            # A concurrent run for the same day fails here on the unique job_name
            await db.commit()
        except Exception as e:
            logger.exception("Deadline alert sweep failed")
            await db.rollback()
            db.add(JobLog(
                job_name=f"{job_name}_failed_{int(datetime.datetime.utcnow().timestamp())}",
                status=JobStatusEnum.FAILED,
                executed_by=executed_by,
                details={"error": str(e)},
            ))
            await db.commit()
            return None

    logger.info(
        "Deadline alert sweep complete: %s overdue, %s due today, %s within 3 days (of %s)",
        stats["overdue"], stats["today"], stats["within_3_days"], stats["total"],
    )
    return stats


def start_scheduler():
    # Trigger: every day at DEADLINE_SWEEP_HOUR:DEADLINE_SWEEP_MINUTE
    scheduler.add_job(deadline_alert_sweep, 'cron', hour=DEADLINE_SWEEP_HOUR, minute=DEADLINE_SWEEP_MINUTE)

    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")


def shutdown_scheduler():
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler shutdown")
