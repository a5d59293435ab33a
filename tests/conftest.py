"""
Shared fixtures for the deadline center tests
"""
import uuid
from datetime import date

import pytest

from backend.models import HolidaySchema, HolidayScopeEnum


@pytest.fixture
def make_holiday():
    """Factory for holiday records"""
    def _make(day, name="Feriado", scope=HolidayScopeEnum.NACIONAL, court=None, recurring=False):
        return HolidaySchema(
            id=str(uuid.uuid4()),
            name=name,
            date=day,
            scope=scope,
            court=court,
            recurring=recurring,
        )
    return _make


@pytest.fixture
def ash_wednesday(make_holiday):
    """National holiday on Wednesday 2026-02-18"""
    return make_holiday(date(2026, 2, 18), name="Quarta-feira de Cinzas")


@pytest.fixture
def national_holidays(make_holiday, ash_wednesday):
    """Mix of exact and recurring national holidays"""
    return [
        make_holiday(date(2026, 1, 1), name="Confraternização Universal"),
        make_holiday(date(2020, 12, 25), name="Natal", recurring=True),
        ash_wednesday,
    ]
