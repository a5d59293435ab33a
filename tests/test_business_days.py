"""
Tests for the business-day engine
=================================
Weekend/holiday matching, business-day arithmetic and alert levels
"""
from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest

from backend.models import AlertLevelEnum, HolidayScopeEnum
from backend.utils.business_days import (
    add_business_days,
    applies_to_court,
    count_business_days,
    get_deadline_alert_level,
    is_business_day,
    is_holiday,
    remaining_business_days,
    remaining_calendar_days,
    to_date,
)

MONDAY = date(2026, 2, 16)


# ═══════════════════════════════════════════════════════════
# HOLIDAY MATCHING
# ═══════════════════════════════════════════════════════════

class TestIsHoliday:
    """Holiday matching by date, recurrence and court"""

    def test_exact_national_holiday(self, national_holidays):
        assert is_holiday(date(2026, 1, 1), national_holidays) is True
        assert is_holiday(date(2027, 1, 1), national_holidays) is False

    def test_recurring_holiday_ignores_year(self, national_holidays):
        assert is_holiday(date(2026, 12, 25), national_holidays) is True
        assert is_holiday(date(2027, 12, 25), national_holidays) is True
        assert is_holiday(date(2026, 12, 24), national_holidays) is False

    def test_court_holiday_does_not_leak_to_other_court(self, make_holiday):
        holidays = [make_holiday(date(2026, 3, 3), scope=HolidayScopeEnum.TRT, court="TRT5")]

        assert is_holiday(date(2026, 3, 3), holidays, court="TRT2") is False
        assert is_holiday(date(2026, 3, 3), holidays, court="TRT5") is True

    def test_court_holiday_matches_when_no_court_given(self, make_holiday):
        """A court-scoped holiday still applies to queries that name no court"""
        holidays = [make_holiday(date(2026, 3, 3), scope=HolidayScopeEnum.TRT, court="TRT5")]

        assert is_holiday(date(2026, 3, 3), holidays) is True
        assert is_holiday(date(2026, 3, 3), holidays, court=None) is True

    def test_non_national_holiday_without_court_matches_every_court(self, make_holiday):
        holidays = [make_holiday(date(2026, 3, 3), scope=HolidayScopeEnum.ESTADUAL, court=None)]

        assert is_holiday(date(2026, 3, 3), holidays, court="TRT2") is True
        assert is_holiday(date(2026, 3, 3), holidays, court="TRT15") is True

    def test_national_holiday_with_court_still_applies_everywhere(self, make_holiday):
        holidays = [make_holiday(date(2026, 3, 3), scope=HolidayScopeEnum.NACIONAL, court="TRT5")]

        assert is_holiday(date(2026, 3, 3), holidays, court="TRT2") is True

    def test_leap_day_recurring_holiday_only_matches_leap_years(self, make_holiday):
        holidays = [make_holiday(date(2024, 2, 29), recurring=True)]

        assert is_holiday(date(2028, 2, 29), holidays) is True
        assert is_holiday(date(2026, 2, 28), holidays) is False
        assert is_holiday(date(2026, 3, 1), holidays) is False

    def test_datetime_is_compared_by_date_only(self, national_holidays):
        assert is_holiday(datetime(2026, 1, 1, 23, 59), national_holidays) is True

    def test_iso_string_holiday_dates(self):
        holidays = [SimpleNamespace(date="2026-04-21", scope="nacional", court=None, recurring=False)]

        assert is_holiday(date(2026, 4, 21), holidays) is True
        assert is_holiday(date(2026, 4, 22), holidays) is False

    def test_empty_registry(self):
        assert is_holiday(MONDAY, []) is False

    def test_applies_to_court(self, make_holiday):
        trt5 = make_holiday(date(2026, 3, 3), scope=HolidayScopeEnum.TRT, court="TRT5")

        assert applies_to_court(trt5, "TRT5") is True
        assert applies_to_court(trt5, "TRT2") is False
        assert applies_to_court(trt5, None) is True


# ═══════════════════════════════════════════════════════════
# BUSINESS DAY PREDICATE
# ═══════════════════════════════════════════════════════════

class TestIsBusinessDay:

    @pytest.mark.parametrize("weekend_day", [date(2026, 2, 21), date(2026, 2, 22)])
    def test_weekends_are_not_business_days(self, weekend_day):
        assert is_business_day(weekend_day, []) is False

    def test_plain_weekday_is_business_day(self):
        assert is_business_day(MONDAY, []) is True

    def test_weekday_holiday_is_not_business_day(self, national_holidays):
        # 2026-01-01 is a Thursday
        assert date(2026, 1, 1).weekday() == 3
        assert is_business_day(date(2026, 1, 1), national_holidays) is False

    def test_court_specific(self, make_holiday):
        holidays = [make_holiday(date(2026, 3, 3), scope=HolidayScopeEnum.TRT, court="TRT5")]

        assert is_business_day(date(2026, 3, 3), holidays, court="TRT2") is True
        assert is_business_day(date(2026, 3, 3), holidays, court="TRT5") is False


# ═══════════════════════════════════════════════════════════
# ADDING AND COUNTING BUSINESS DAYS
# ═══════════════════════════════════════════════════════════

class TestAddBusinessDays:

    def test_zero_days_returns_start(self, national_holidays):
        saturday = date(2026, 2, 21)
        assert add_business_days(MONDAY, 0, national_holidays) == MONDAY
        assert add_business_days(saturday, 0, national_holidays) == saturday

    def test_friday_plus_one_is_monday(self):
        assert add_business_days(date(2026, 2, 20), 1, []) == date(2026, 2, 23)

    def test_skips_holiday(self, ash_wednesday):
        # Tue 17 counts, Wed 18 is a holiday, Thu 19 counts
        assert add_business_days(MONDAY, 2, [ash_wednesday]) == date(2026, 2, 19)

    def test_contestacao_over_a_holiday(self, ash_wednesday):
        assert add_business_days(MONDAY, 15, [ash_wednesday]) == date(2026, 3, 10)

    def test_court_holiday_only_counts_for_its_court(self, make_holiday):
        holidays = [make_holiday(date(2026, 2, 17), scope=HolidayScopeEnum.TRT, court="TRT2")]

        assert add_business_days(MONDAY, 1, holidays, court="TRT2") == date(2026, 2, 18)
        assert add_business_days(MONDAY, 1, holidays, court="TRT5") == date(2026, 2, 17)

    def test_monotonic_and_lands_on_business_day(self, national_holidays):
        start = date(2026, 2, 13)
        previous = start
        for n in range(0, 31):
            result = add_business_days(start, n, national_holidays)
            assert result >= previous
            if n > 0:
                assert result > start
                assert is_business_day(result, national_holidays)
            previous = result

    def test_accepts_datetime_start(self):
        assert add_business_days(datetime(2026, 2, 20, 18, 0), 1, []) == date(2026, 2, 23)

    def test_does_not_mutate_holidays(self, national_holidays):
        snapshot = [h.model_dump() for h in national_holidays]
        add_business_days(MONDAY, 20, national_holidays)
        assert [h.model_dump() for h in national_holidays] == snapshot


class TestCountBusinessDays:

    def test_excludes_start_includes_end(self):
        # Tue, Wed, Thu
        assert count_business_days(MONDAY, date(2026, 2, 19), []) == 3

    def test_end_before_next_day_is_zero(self):
        assert count_business_days(MONDAY, MONDAY, []) == 0
        assert count_business_days(MONDAY, date(2026, 2, 10), []) == 0

    def test_skips_weekend_and_holiday(self, ash_wednesday):
        # Feb 17..Feb 23: 17, 19, 20, 23
        assert count_business_days(MONDAY, date(2026, 2, 23), [ash_wednesday]) == 4

    @pytest.mark.parametrize("n", [1, 5, 8, 15])
    def test_round_trip_with_add(self, n, national_holidays):
        due = add_business_days(MONDAY, n, national_holidays)
        assert count_business_days(MONDAY, due, national_holidays) == n


# ═══════════════════════════════════════════════════════════
# REMAINING DAYS
# ═══════════════════════════════════════════════════════════

class TestRemainingDays:

    def test_remaining_business_days(self):
        assert remaining_business_days(date(2026, 2, 19), [], today=MONDAY) == 3

    def test_remaining_business_days_zero_when_due_or_past(self):
        assert remaining_business_days(MONDAY, [], today=MONDAY) == 0
        assert remaining_business_days(date(2026, 2, 10), [], today=MONDAY) == 0

    def test_remaining_business_days_uses_court(self, make_holiday):
        holidays = [make_holiday(date(2026, 2, 17), scope=HolidayScopeEnum.TRT, court="TRT2")]

        assert remaining_business_days(date(2026, 2, 19), holidays, court="TRT2", today=MONDAY) == 2
        assert remaining_business_days(date(2026, 2, 19), holidays, court="TRT5", today=MONDAY) == 3

    def test_remaining_calendar_days(self):
        assert remaining_calendar_days(date(2026, 2, 19), today=MONDAY) == 3
        assert remaining_calendar_days(MONDAY, today=MONDAY) == 0
        assert remaining_calendar_days(date(2026, 2, 10), today=MONDAY) == 0

    def test_defaults_to_today(self):
        tomorrow = date.today() + timedelta(days=1)
        assert remaining_calendar_days(tomorrow) == 1
        assert remaining_business_days(date.today(), []) == 0

    def test_time_of_day_is_ignored(self):
        assert remaining_calendar_days(datetime(2026, 2, 19, 8, 0), today=datetime(2026, 2, 16, 22, 0)) == 3


# ═══════════════════════════════════════════════════════════
# ALERT LEVEL
# ═══════════════════════════════════════════════════════════

class TestAlertLevel:

    def test_within_3_days(self):
        assert get_deadline_alert_level(date(2026, 2, 19), [], today=MONDAY) == AlertLevelEnum.WITHIN_3_DAYS

    def test_due_today(self):
        assert get_deadline_alert_level(MONDAY, [], today=MONDAY) == AlertLevelEnum.TODAY

    def test_past_due(self):
        assert get_deadline_alert_level(date(2026, 2, 10), [], today=MONDAY) == AlertLevelEnum.OVERDUE

    def test_within_7_days(self):
        # Feb 25 is 7 business days after Feb 16
        assert get_deadline_alert_level(date(2026, 2, 25), [], today=MONDAY) == AlertLevelEnum.WITHIN_7_DAYS
        assert get_deadline_alert_level(date(2026, 2, 20), [], today=MONDAY) == AlertLevelEnum.WITHIN_7_DAYS

    def test_15_day_boundary_over_a_holiday(self, ash_wednesday):
        holidays = [ash_wednesday]
        due_15 = add_business_days(MONDAY, 15, holidays)
        due_16 = add_business_days(MONDAY, 16, holidays)

        assert due_15 == date(2026, 3, 10)
        assert due_16 == date(2026, 3, 11)
        assert get_deadline_alert_level(due_15, holidays, today=MONDAY) == AlertLevelEnum.WITHIN_15_DAYS
        assert get_deadline_alert_level(due_16, holidays, today=MONDAY) == AlertLevelEnum.OK

    def test_future_weekend_due_date_without_business_days_is_overdue(self):
        friday = date(2026, 2, 20)
        sunday = date(2026, 2, 22)

        assert remaining_business_days(sunday, [], today=friday) == 0
        assert get_deadline_alert_level(sunday, [], today=friday) == AlertLevelEnum.OVERDUE

    def test_levels_are_ordered_by_urgency(self):
        assert [level.value for level in AlertLevelEnum] == [
            "overdue", "today", "within_3_days", "within_7_days", "within_15_days", "ok",
        ]


def test_to_date_normalizes_inputs():
    assert to_date(datetime(2026, 2, 16, 13, 45)) == MONDAY
    assert to_date("2026-02-16") == MONDAY
    assert to_date("2026-02-16T10:00:00") == MONDAY
    assert to_date(MONDAY) == MONDAY
