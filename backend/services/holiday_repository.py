"""
Holiday data source for the business-day engine.
Routes depend on get_holiday_repository() so the source can be swapped
(e.g. an in-memory list in tests) through FastAPI dependency overrides.
"""
import logging
from typing import List, Optional, Sequence

from fastapi import Depends
from sqlalchemy import select  # type: ignore
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore

from backend.db import get_db
from backend.models import Holiday as HolidayModel, HolidaySchema
from backend.utils.business_days import applies_to_court

logger = logging.getLogger(__name__)


class HolidayRepository:
    """Read-only access to the holiday registry."""

    async def list_holidays(self) -> List[HolidaySchema]:
        raise NotImplementedError

    async def list_for_court(self, court: Optional[str] = None) -> List[HolidaySchema]:
        """Holidays in force for a court, using the same rule as the engine."""
        holidays = await self.list_holidays()
        if court is None:
            return holidays
        return [h for h in holidays if applies_to_court(h, court)]


class SqlHolidayRepository(HolidayRepository):
    """Holidays stored in the holidays table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_holidays(self) -> List[HolidaySchema]:
        result = await self.db.execute(select(HolidayModel).order_by(HolidayModel.date))
        holidays = [HolidaySchema.model_validate(h) for h in result.scalars().all()]
        logger.debug("Loaded %s holidays", len(holidays))
        return holidays


class InMemoryHolidayRepository(HolidayRepository):
    """Fixed list of holidays, e.g. for tests or seeding previews."""

    def __init__(self, holidays: Sequence[HolidaySchema] = ()):
        self._holidays = sorted(holidays, key=lambda h: h.date)

    async def list_holidays(self) -> List[HolidaySchema]:
        return list(self._holidays)


async def get_holiday_repository(db: AsyncSession = Depends(get_db)) -> HolidayRepository:
    """FastAPI dependency returning the database-backed repository."""
    return SqlHolidayRepository(db)
