"""Tests for cross-field rule validation.

Validation runs before any date is computed; a malformed rule never yields
partial output.
"""

from datetime import date

import pytest

from recurring_tasks.recurrence.enums import RangeEndType
from recurring_tasks.recurrence.errors import InvalidRuleError
from recurring_tasks.recurrence.generator import generate
from recurring_tasks.recurrence.models import (
    DailyRule,
    MonthlyRule,
    MultiMonthRule,
    NthWeekdayRule,
    RecurrenceRange,
    YearlyRule,
)
from recurring_tasks.recurrence.validation import validate_rule

WINDOW = (date(2024, 1, 1), date(2024, 12, 31))


def test_monthly_nth_weekday_requires_nth_fields():
    """Test that useNthWeekday without nthWeek/nthDayOfWeek is rejected."""
    rule = MonthlyRule(day_of_month=1, use_nth_weekday=True)
    with pytest.raises(InvalidRuleError) as exc_info:
        generate(rule, *WINDOW)
    assert exc_info.value.code == "MISSING_FIELD"
    assert "nthWeek is required" in exc_info.value.details


def test_yearly_nth_weekday_requires_day_of_week():
    rule = YearlyRule(month=11, day_of_month=1, use_nth_weekday=True, nth_week=4)
    with pytest.raises(InvalidRuleError) as exc_info:
        validate_rule(rule)
    assert exc_info.value.details == ["nthDayOfWeek is required"]


def test_nth_fields_ignored_when_flag_off():
    """Test that stale nth fields do not matter when useNthWeekday is false."""
    validate_rule(MonthlyRule(day_of_month=1, use_nth_weekday=False))


def test_range_end_date_required():
    rule = DailyRule(weekdays_only=False, range=RecurrenceRange(end_type=RangeEndType.DATE))
    with pytest.raises(InvalidRuleError) as exc_info:
        generate(rule, *WINDOW)
    assert exc_info.value.details == ["range.endDate is required"]


def test_range_occurrences_required():
    rule = DailyRule(weekdays_only=False, range=RecurrenceRange(end_type=RangeEndType.OCCURRENCES))
    with pytest.raises(InvalidRuleError) as exc_info:
        generate(rule, *WINDOW)
    assert exc_info.value.code == "MISSING_FIELD"


def test_range_end_before_start():
    rng = RecurrenceRange(start_date=date(2024, 6, 1), end_type=RangeEndType.DATE, end_date=date(2024, 5, 1))
    with pytest.raises(InvalidRuleError) as exc_info:
        validate_rule(DailyRule(weekdays_only=False, range=rng))
    assert exc_info.value.code == "OUT_OF_RANGE"


def test_unvalidated_day_of_month_caught():
    """Test rules built without pydantic validation are still bounds-checked."""
    rule = MonthlyRule.model_construct(day_of_month=32)
    with pytest.raises(InvalidRuleError) as exc_info:
        generate(rule, *WINDOW)
    assert exc_info.value.code == "OUT_OF_RANGE"
    assert exc_info.value.details == ["dayOfMonth must be 1-31, got 32"]


def test_unvalidated_nth_caught():
    rule = NthWeekdayRule.model_construct(n=6, day_of_week=2)
    with pytest.raises(InvalidRuleError) as exc_info:
        validate_rule(rule)
    assert exc_info.value.details == ["n must be 1-5, got 6"]


def test_empty_month_set():
    rule = MultiMonthRule.model_construct(months=[], day_of_month=1)
    with pytest.raises(InvalidRuleError) as exc_info:
        validate_rule(rule)
    assert exc_info.value.code == "EMPTY_SET"


def test_invalid_rule_raised_even_for_empty_window():
    """Test that validation precedes the empty-window shortcut."""
    rule = MonthlyRule.model_construct(day_of_month=0)
    with pytest.raises(InvalidRuleError):
        generate(rule, date(2024, 12, 31), date(2024, 1, 1))


def test_invalid_payload_raised_by_generator():
    with pytest.raises(InvalidRuleError) as exc_info:
        generate({"type": "yearly", "month": 13, "dayOfMonth": 1}, *WINDOW)
    assert exc_info.value.code == "SCHEMA_VIOLATION"


def test_unknown_rule_object():
    with pytest.raises(InvalidRuleError) as exc_info:
        validate_rule(object())
    assert exc_info.value.code == "UNKNOWN_TYPE"
