"""Tests for rule labels and editor default rules."""

from datetime import date

import pytest

from recurring_tasks.recurrence.defaults import build_range, default_rule
from recurring_tasks.recurrence.enums import MonthParity, RangeEndType, RecurrenceType
from recurring_tasks.recurrence.generator import generate
from recurring_tasks.recurrence.labels import describe_rule, ordinal
from recurring_tasks.recurrence.models import (
    AsNeededRule,
    AsOccursRule,
    BimonthlyRule,
    DailyRule,
    MonthDay,
    MonthlyRule,
    MultiDateRule,
    MultiMonthRule,
    MultiYearRule,
    NthWeekdayRule,
    OneTimeRule,
    QuarterlyRule,
    RecurrenceRange,
    WeeklyRule,
    YearlyRule,
)


@pytest.mark.parametrize(
    ("rule", "label"),
    [
        (DailyRule(weekdays_only=False), "Daily"),
        (DailyRule(weekdays_only=True), "Every weekday"),
        (DailyRule(weekdays_only=False, interval=3), "Every 3 days"),
        (WeeklyRule(day_of_week=1), "Weekly (Monday)"),
        (WeeklyRule(day_of_week=1, days_of_week=[1, 3]), "Weekly (Mon, Wed)"),
        (WeeklyRule(day_of_week=1, interval=2), "Every 2 weeks (Monday)"),
        (MonthlyRule(day_of_month=15), "Monthly (day 15)"),
        (MonthlyRule(day_of_month=1, interval=3), "Day 1 every 3 months"),
        (MonthlyRule(day_of_month=1, use_nth_weekday=True, nth_week=2, nth_day_of_week=2), "Second Tuesday monthly"),
        (BimonthlyRule(month_parity=MonthParity.EVEN, day_of_month=1), "Bi-Monthly (even months)"),
        (QuarterlyRule(month_of_quarter=1, day_of_month=1), "Quarterly"),
        (YearlyRule(month=7, day_of_month=4), "Yearly (July 4)"),
        (YearlyRule(month=1, day_of_month=1, interval=2), "Every 2 years (January 1)"),
        (
            YearlyRule(month=11, day_of_month=1, use_nth_weekday=True, nth_week=4, nth_day_of_week=4),
            "Fourth Thursday of November",
        ),
        (NthWeekdayRule(n=2, day_of_week=2), "2nd Tuesday"),
        (NthWeekdayRule(n=1, day_of_week=1, month=9), "1st Monday of September"),
        (MultiMonthRule(months=[1, 7], day_of_month=1), "Months: 1, 7"),
        (MultiDateRule(dates=[MonthDay(month=4, day=30), MonthDay(month=10, day=31)]), "Dates: Apr 30, Oct 31"),
        (MultiYearRule(interval=3, base_year=2026, month=1, day_of_month=1), "Every 3 years"),
        (OneTimeRule(date=date(2025, 5, 1)), "One-time: 2025-05-01"),
        (AsNeededRule(), "As Needed"),
        (AsOccursRule(), "As Occurs"),
    ],
)
def test_describe_rule(rule, label):
    assert describe_rule(rule) == label


@pytest.mark.parametrize(("n", "text"), [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (22, "22nd")])
def test_ordinal(n, text):
    assert ordinal(n) == text


class TestDefaultRule:
    def test_weekly_default(self):
        assert default_rule(RecurrenceType.WEEKLY) == WeeklyRule(day_of_week=1, days_of_week=[1], interval=1)

    def test_bimonthly_default(self):
        assert default_rule("bimonthly") == BimonthlyRule(month_parity=MonthParity.EVEN, day_of_month=1)

    @pytest.mark.parametrize("rule_type", ["nthWeekday", "multiYear", "oneTime", "asOccurs", "fortnightly"])
    def test_types_without_form_start_as_needed(self, rule_type):
        assert default_rule(rule_type) == AsNeededRule()

    def test_range_attached_only_to_ranged_types(self):
        rng = RecurrenceRange(start_date=date(2024, 6, 1))
        assert default_rule("daily", rng).range == rng
        assert default_rule("yearly", rng).range == rng
        assert not hasattr(default_rule("quarterly", rng), "range")

    @pytest.mark.parametrize("rule_type", [t.value for t in RecurrenceType])
    def test_defaults_generate(self, rule_type):
        """Test that every default rule is valid input for the generator."""
        generate(default_rule(rule_type), date(2024, 1, 1), date(2024, 12, 31))


class TestBuildRange:
    def test_unbounded_without_start_is_none(self):
        assert build_range() is None

    def test_start_only(self):
        rng = build_range(start_date=date(2024, 6, 1))
        assert rng == RecurrenceRange(start_date=date(2024, 6, 1), end_type=RangeEndType.NEVER)

    def test_drops_values_for_other_end_types(self):
        rng = build_range(end_type="occurrences", end_date=date(2024, 12, 31), occurrences=10)
        assert rng.end_date is None
        assert rng.occurrences == 10

    def test_end_by_date(self):
        rng = build_range(end_type=RangeEndType.DATE, end_date=date(2024, 12, 31), occurrences=10)
        assert rng.end_date == date(2024, 12, 31)
        assert rng.occurrences is None
