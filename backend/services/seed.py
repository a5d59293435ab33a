"""
Seed logic for the holiday registry.
Used by scripts/seed_holidays.py and the POST /admin/bootstrap API endpoint.
"""
from datetime import date
from typing import List, Tuple

from sqlalchemy import select  # type: ignore
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore

from backend.models import Holiday as HolidayModel, HolidayScopeEnum


# Fixed-date Brazilian national holidays; stored as recurring, year is a placeholder
NATIONAL_HOLIDAYS: List[Tuple[str, date]] = [
    ("Confraternização Universal", date(2000, 1, 1)),
    ("Tiradentes", date(2000, 4, 21)),
    ("Dia do Trabalho", date(2000, 5, 1)),
    ("Independência do Brasil", date(2000, 9, 7)),
    ("Nossa Senhora Aparecida", date(2000, 10, 12)),
    ("Finados", date(2000, 11, 2)),
    ("Proclamação da República", date(2000, 11, 15)),
    ("Dia Nacional de Zumbi e da Consciência Negra", date(2000, 11, 20)),
    ("Natal", date(2000, 12, 25)),
]


async def run_seed_holidays(db: AsyncSession) -> int:
    """
    Create the recurring national holidays that are missing (matched by month/day). Does not commit.
    Returns the number of holidays created.
    """
    result = await db.execute(
        select(HolidayModel).where(
            HolidayModel.scope == HolidayScopeEnum.NACIONAL.value,
            HolidayModel.recurring == True,  # noqa: E712
        )
    )
    existing = {(h.date.month, h.date.day) for h in result.scalars().all()}

    created = 0
    for name, holiday_date in NATIONAL_HOLIDAYS:
        if (holiday_date.month, holiday_date.day) in existing:
            continue
        db.add(HolidayModel(
            name=name,
            date=holiday_date,
            scope=HolidayScopeEnum.NACIONAL.value,
            court=None,
            recurring=True,
        ))
        created += 1

    return created
