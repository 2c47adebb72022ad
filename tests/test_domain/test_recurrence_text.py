"""Tests for RecurringDate summaries"""
from datetime import date

import pytest

from recurrence_engine.config import get_settings
from recurrence_engine.domain.recurrence_text import ordinal
from recurrence_engine.domain.recurring_date import RecurringDate


@pytest.mark.parametrize("n, expected", [
    (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"),
    (11, "11th"), (12, "12th"), (13, "13th"),
    (21, "21st"), (22, "22nd"), (23, "23rd"), (31, "31st"),
    (101, "101st"), (111, "111th"),
])
def test_ordinal(n, expected):
    assert ordinal(n) == expected


class TestShortSummary:
    def test_daily(self):
        assert RecurringDate("day").to_string() == "Daily"
        assert RecurringDate("day", interval_length=3).to_string() == "Every 3 days"

    def test_weekly(self):
        assert RecurringDate("week").to_string() == "Weekly"

    def test_weekly_days_in_given_order(self):
        rule = RecurringDate("week", interval_length=2, days_of_week=[1, 3])
        assert rule.to_string() == "Every 2 weeks on Monday, Wednesday"
        assert RecurringDate("week", days_of_week=[5, 1]).to_string() == "Weekly on Friday, Monday"

    def test_weekly_all_days(self):
        rule = RecurringDate("week", days_of_week=[0, 1, 2, 3, 4, 5, 6])
        assert rule.to_string() == "Weekly on all days"

    def test_weekly_empty_days(self):
        assert RecurringDate("week", days_of_week=[]).to_string() == "Weekly"

    def test_monthly_day(self):
        assert RecurringDate("month", day_of_month=3).to_string() == "Monthly on the 3rd"
        assert RecurringDate("month", interval_length=2, day_of_month=22).to_string() == "Every 2 months on the 22nd"

    def test_monthly_nth_weekday(self):
        assert RecurringDate("month", week_number=2, days_of_week=[2]).to_string() == "Monthly on the 2nd Tuesday"

    def test_monthly_last_weekday(self):
        assert RecurringDate("month", week_number=5, days_of_week=[5]).to_string() == "Monthly on the last Friday"

    def test_monthly_week_number_needs_single_day(self):
        assert RecurringDate("month", week_number=2, days_of_week=[1, 2]).to_string() == "Monthly"

    def test_annually(self):
        assert RecurringDate("year", month=2, day_of_month=15).to_string() == "Annually on March 15th"
        assert RecurringDate("year", interval_length=2).to_string() == "Every 2 years"

    def test_annually_needs_month_and_day(self):
        assert RecurringDate("year", month=2).to_string() == "Annually"

    def test_january_is_month_zero(self):
        assert RecurringDate("year", month=0, day_of_month=1).to_string() == "Annually on January 1st"

    def test_unknown_unit(self):
        assert RecurringDate("fortnight").to_string() == ""

    def test_str(self):
        assert str(RecurringDate("day", interval_length=2)) == "Every 2 days"


class TestVerboseSummary:
    def test_all_parts(self):
        rule = RecurringDate(
            "month", day_of_month=3, start_date=date(2026, 1, 3), max_count=5,
            base_on_completion=True, on_weekend="next-weekday",
        )
        assert rule.to_string_verbose() == (
            "Monthly on the 3rd, from 01/03/2026, 5 times, based on completion date, next weekday"
        )

    def test_plain(self):
        assert RecurringDate("day").to_string_verbose() == "Daily"

    def test_end_date_takes_precedence_over_count(self):
        rule = RecurringDate("day", end_date=date(2026, 12, 31), max_count=3)
        assert rule.to_string_verbose() == "Daily, until 12/31/2026"

    def test_single_time(self):
        assert RecurringDate("week", max_count=1).to_string_verbose() == "Weekly, 1 time"

    def test_exhausted_count_not_shown(self):
        assert RecurringDate("week", max_count=0).to_string_verbose() == "Weekly"

    @pytest.mark.parametrize("policy, note", [
        ("previous-weekday", "previous weekday"),
        ("nearest-weekday", "nearest weekday"),
        ("no-change", None),
    ])
    def test_weekend_notes(self, policy, note):
        text = RecurringDate("day", on_weekend=policy).to_string_verbose()
        assert text == ("Daily" if note is None else f"Daily, {note}")

    def test_explicit_format(self):
        rule = RecurringDate("day", start_date=date(2026, 3, 9))
        assert rule.to_string_verbose("%Y-%m-%d") == "Daily, from 2026-03-09"

    def test_configured_format(self, monkeypatch):
        monkeypatch.setenv("DATE_FORMAT", "%d.%m.%Y")
        get_settings.cache_clear()
        rule = RecurringDate("day", start_date=date(2026, 3, 9))
        assert rule.to_string_verbose() == "Daily, from 09.03.2026"
