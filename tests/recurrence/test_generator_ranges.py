"""Tests for range bounds: start date, end-by-date and end-after-N-occurrences.

Occurrence counting is anchored to range.start_date (or window_start when the
range has none), never to a later window_start. These tests pin that choice.
"""

from datetime import date

from recurring_tasks.recurrence.enums import RangeEndType
from recurring_tasks.recurrence.generator import generate
from recurring_tasks.recurrence.models import (
    DailyRule,
    MonthlyRule,
    RecurrenceRange,
    WeeklyRule,
    YearlyRule,
)


def _after(n: int, start: date | None = None) -> RecurrenceRange:
    return RecurrenceRange(start_date=start, end_type=RangeEndType.OCCURRENCES, occurrences=n)


class TestEndAfterOccurrences:
    def test_daily_five_occurrences_any_window_size(self):
        rule = DailyRule(weekdays_only=False, range=_after(5, date(2024, 1, 1)))
        expected = [date(2024, 1, d) for d in range(1, 6)]
        assert generate(rule, date(2024, 1, 1), date(2024, 1, 31)) == expected
        assert generate(rule, date(2024, 1, 1), date(2030, 12, 31)) == expected

    def test_window_starting_before_range_start(self):
        rule = DailyRule(weekdays_only=False, range=_after(5, date(2024, 1, 1)))
        assert generate(rule, date(2023, 1, 1), date(2024, 12, 31)) == [date(2024, 1, d) for d in range(1, 6)]

    def test_window_starting_mid_series(self):
        """Test that a later window start does not restart the count."""
        rule = DailyRule(weekdays_only=False, range=_after(5, date(2024, 1, 1)))
        assert generate(rule, date(2024, 1, 3), date(2024, 12, 31)) == [date(2024, 1, 3), date(2024, 1, 4), date(2024, 1, 5)]

    def test_window_after_series_ends(self):
        rule = DailyRule(weekdays_only=False, range=_after(5, date(2024, 1, 1)))
        assert generate(rule, date(2024, 2, 1), date(2024, 12, 31)) == []

    def test_window_ending_before_series_start(self):
        rule = DailyRule(weekdays_only=False, range=_after(5, date(2024, 6, 1)))
        assert generate(rule, date(2024, 1, 1), date(2024, 5, 31)) == []

    def test_without_start_date_counts_from_window_start(self):
        rule = DailyRule(weekdays_only=False, range=_after(3))
        assert generate(rule, date(2024, 1, 10), date(2024, 1, 31)) == [
            date(2024, 1, 10),
            date(2024, 1, 11),
            date(2024, 1, 12),
        ]

    def test_only_produced_dates_count(self):
        """Test that skipped weekend days are not counted as occurrences."""
        rule = DailyRule(weekdays_only=True, range=_after(6, date(2024, 1, 1)))
        assert generate(rule, date(2024, 1, 1), date(2024, 3, 31)) == [
            date(2024, 1, 1),
            date(2024, 1, 2),
            date(2024, 1, 3),
            date(2024, 1, 4),
            date(2024, 1, 5),
            date(2024, 1, 8),
        ]

    def test_weekly_three_occurrences(self):
        rule = WeeklyRule(day_of_week=1, range=_after(3, date(2024, 1, 1)))
        assert generate(rule, date(2024, 1, 1), date(2024, 12, 31)) == [
            date(2024, 1, 1),
            date(2024, 1, 8),
            date(2024, 1, 15),
        ]

    def test_monthly_clamped_occurrences(self):
        rule = MonthlyRule(day_of_month=31, range=_after(3, date(2024, 1, 15)))
        assert generate(rule, date(2024, 1, 1), date(2024, 12, 31)) == [
            date(2024, 1, 31),
            date(2024, 2, 29),
            date(2024, 3, 31),
        ]

    def test_repeated_calls_identical(self):
        rule = YearlyRule(month=3, day_of_month=1, range=_after(2, date(2024, 1, 1)))
        first = generate(rule, date(2024, 1, 1), date(2030, 12, 31))
        assert first == [date(2024, 3, 1), date(2025, 3, 1)]
        assert generate(rule, date(2024, 1, 1), date(2030, 12, 31)) == first


class TestStartAndEndDate:
    def test_end_by_date(self):
        rng = RecurrenceRange(start_date=date(2024, 1, 1), end_type=RangeEndType.DATE, end_date=date(2024, 1, 5))
        rule = DailyRule(weekdays_only=False, range=rng)
        assert generate(rule, date(2023, 1, 1), date(2025, 12, 31)) == [date(2024, 1, d) for d in range(1, 6)]

    def test_end_date_before_window(self):
        rng = RecurrenceRange(end_type=RangeEndType.DATE, end_date=date(2023, 12, 31))
        rule = DailyRule(weekdays_only=False, range=rng)
        assert generate(rule, date(2024, 1, 1), date(2024, 12, 31)) == []

    def test_start_date_after_window(self):
        rule = DailyRule(weekdays_only=False, range=RecurrenceRange(start_date=date(2025, 1, 1)))
        assert generate(rule, date(2024, 1, 1), date(2024, 12, 31)) == []

    def test_start_date_anchors_month_interval(self):
        """Test that every-other-month counts from the range start month."""
        rule = MonthlyRule(day_of_month=5, interval=2, range=RecurrenceRange(start_date=date(2024, 2, 10)))
        assert generate(rule, date(2024, 1, 1), date(2024, 12, 31)) == [
            date(2024, 4, 5),
            date(2024, 6, 5),
            date(2024, 8, 5),
            date(2024, 10, 5),
            date(2024, 12, 5),
        ]

    def test_never_end_type_with_start_only(self):
        rule = WeeklyRule(day_of_week=3, range=RecurrenceRange(start_date=date(2024, 1, 20), end_type=RangeEndType.NEVER))
        assert generate(rule, date(2024, 1, 1), date(2024, 1, 31)) == [date(2024, 1, 24), date(2024, 1, 31)]

    def test_anchored_interval_stable_across_windows(self):
        """Test that a range start keeps the interval grid fixed when the window moves."""
        rule = DailyRule(weekdays_only=False, interval=3, range=RecurrenceRange(start_date=date(2024, 1, 1)))
        wide = set(generate(rule, date(2024, 1, 1), date(2024, 3, 31)))
        narrow = set(generate(rule, date(2024, 2, 2), date(2024, 2, 29)))
        assert narrow <= wide
        assert min(narrow) == date(2024, 2, 3)
