"""Instance Generator - Deterministic Core.

Turns a RecurrenceRule + an inclusive [window_start, window_end] window into
the sorted, duplicate-free list of calendar dates on which the task occurs.

Rules:
- Day-of-month values are clamped to the month length, never rejected
- Nth-weekday months that cannot be resolved are skipped
- Interval rules (daily/weekly/monthly/yearly) are anchored to range.start_date,
  or to a fixed grid when the rule carries no start date (days and Sunday weeks
  counted from EPOCH, months from year 0, years from year 0), so the dates a
  rule produces never depend on where the window starts
- "End after N occurrences" counts from range.start_date (window_start when the
  range has none), so a window that starts mid-series is still truncated correctly
- An inverted window (end before start) yields no dates

Stateless: nothing is kept between calls and "today" is never consulted.
"""

from collections.abc import Callable, Iterable
from datetime import date, timedelta
from typing import Any

from recurring_tasks.observability import log_generation
from recurring_tasks.recurrence.calendar import (
    EPOCH,
    clamped_date,
    day_number,
    is_weekday,
    iter_days,
    iter_months,
    month_index,
    nth_weekday_of_month,
    sunday_weekday,
    week_number,
)
from recurring_tasks.recurrence.enums import MonthParity, RangeEndType
from recurring_tasks.recurrence.models import (
    AsNeededRule,
    AsOccursRule,
    BimonthlyRule,
    DailyRule,
    MonthlyRule,
    MultiDateRule,
    MultiMonthRule,
    MultiYearRule,
    NthWeekdayRule,
    OneTimeRule,
    QuarterlyRule,
    RecurrenceRange,
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
)
from recurring_tasks.recurrence.serialization import coerce_rule
from recurring_tasks.recurrence.validation import validate_rule


def _within(dates: Iterable[date | None], start: date, end: date) -> list[date]:
    return sorted({d for d in dates if d is not None and start <= d <= end})


def _years(start: date, end: date) -> range:
    return range(start.year, end.year + 1)


def _expand_daily(rule: DailyRule, start: date, end: date, anchor: date | None) -> list[date]:
    interval = rule.interval or 1
    # First date on or after start that sits on the interval grid
    gap = -(day_number(start) - day_number(anchor or EPOCH)) % interval
    if (end - start).days < gap:
        return []
    current = start + timedelta(days=gap)
    out: list[date] = []
    while True:
        if not rule.weekdays_only or is_weekday(current):
            out.append(current)
        if (end - current).days < interval:
            return out
        current += timedelta(days=interval)


def _expand_weekly(rule: WeeklyRule, start: date, end: date, anchor: date | None) -> list[date]:
    days = set(rule.days_of_week) if rule.days_of_week else {rule.day_of_week}
    interval = rule.interval or 1
    anchor_week = week_number(anchor or EPOCH)

    def on_interval(d: date) -> bool:
        return (week_number(d) - anchor_week) % interval == 0

    return [d for d in iter_days(start, end) if sunday_weekday(d) in days and on_interval(d)]


def _month_date(rule: MonthlyRule | YearlyRule, year: int, month: int) -> date | None:
    if rule.use_nth_weekday:
        return nth_weekday_of_month(year, month, rule.nth_week, rule.nth_day_of_week)
    return clamped_date(year, month, rule.day_of_month)


def _expand_monthly(rule: MonthlyRule, start: date, end: date, anchor: date | None) -> list[date]:
    interval = rule.interval or 1
    anchor_index = month_index(anchor.year, anchor.month) if anchor else 0
    return _within(
        (
            _month_date(rule, year, month)
            for year, month in iter_months(start, end)
            if (month_index(year, month) - anchor_index) % interval == 0
        ),
        start,
        end,
    )


def _expand_bimonthly(rule: BimonthlyRule, start: date, end: date, anchor: date | None) -> list[date]:
    want_even = rule.month_parity == MonthParity.EVEN
    return _within(
        (
            clamped_date(year, month, rule.day_of_month)
            for year, month in iter_months(start, end)
            if (month % 2 == 0) == want_even
        ),
        start,
        end,
    )


def _expand_quarterly(rule: QuarterlyRule, start: date, end: date, anchor: date | None) -> list[date]:
    # Quarter starts are Jan/Apr/Jul/Oct; month_of_quarter picks the 1st, 2nd or 3rd month
    position = rule.month_of_quarter - 1
    return _within(
        (
            clamped_date(year, month, rule.day_of_month)
            for year, month in iter_months(start, end)
            if (month - 1) % 3 == position
        ),
        start,
        end,
    )


def _expand_yearly(rule: YearlyRule, start: date, end: date, anchor: date | None) -> list[date]:
    interval = rule.interval or 1
    anchor_year = anchor.year if anchor else 0
    return _within(
        (_month_date(rule, year, rule.month) for year in _years(start, end) if (year - anchor_year) % interval == 0),
        start,
        end,
    )


def _expand_nth_weekday(rule: NthWeekdayRule, start: date, end: date, anchor: date | None) -> list[date]:
    return _within(
        (
            nth_weekday_of_month(year, month, rule.n, rule.day_of_week)
            for year, month in iter_months(start, end)
            if rule.month is None or month == rule.month
        ),
        start,
        end,
    )


def _expand_multi_month(rule: MultiMonthRule, start: date, end: date, anchor: date | None) -> list[date]:
    return _within(
        (clamped_date(year, month, rule.day_of_month) for year in _years(start, end) for month in rule.months),
        start,
        end,
    )


def _expand_multi_date(rule: MultiDateRule, start: date, end: date, anchor: date | None) -> list[date]:
    return _within(
        (clamped_date(year, pair.month, pair.day) for year in _years(start, end) for pair in rule.dates),
        start,
        end,
    )


def _expand_multi_year(rule: MultiYearRule, start: date, end: date, anchor: date | None) -> list[date]:
    return _within(
        (
            clamped_date(year, rule.month, rule.day_of_month)
            for year in _years(start, end)
            if (year - rule.base_year) % rule.interval == 0
        ),
        start,
        end,
    )


def _expand_one_time(rule: OneTimeRule, start: date, end: date, anchor: date | None) -> list[date]:
    return _within([rule.date], start, end)


def _expand_manual(rule: AsNeededRule | AsOccursRule, start: date, end: date, anchor: date | None) -> list[date]:
    return []


_EXPANDERS: dict[type, Callable[[Any, date, date, date | None], list[date]]] = {
    DailyRule: _expand_daily,
    WeeklyRule: _expand_weekly,
    MonthlyRule: _expand_monthly,
    BimonthlyRule: _expand_bimonthly,
    QuarterlyRule: _expand_quarterly,
    YearlyRule: _expand_yearly,
    NthWeekdayRule: _expand_nth_weekday,
    MultiMonthRule: _expand_multi_month,
    MultiDateRule: _expand_multi_date,
    MultiYearRule: _expand_multi_year,
    OneTimeRule: _expand_one_time,
    AsNeededRule: _expand_manual,
    AsOccursRule: _expand_manual,
}


def _expand(rule: RecurrenceRule, start: date, end: date, anchor: date | None) -> list[date]:
    return _EXPANDERS[type(rule)](rule, start, end, anchor)


def _expand_ranged(rule: RecurrenceRule, rng: RecurrenceRange, window_start: date, window_end: date) -> list[date]:
    anchor = rng.start_date
    lower = max(window_start, rng.start_date) if rng.start_date else window_start
    upper = window_end
    if rng.end_type == RangeEndType.DATE and rng.end_date is not None:
        upper = min(upper, rng.end_date)

    if rng.end_type == RangeEndType.OCCURRENCES and rng.occurrences is not None:
        # Count from the series start so a mid-series window truncates at the same place
        count_from = anchor or window_start
        if count_from > upper:
            return []
        series = _expand(rule, count_from, upper, anchor)[: rng.occurrences]
        return [d for d in series if lower <= d <= upper]

    if lower > upper:
        return []
    return _expand(rule, lower, upper, anchor)


def generate(
    rule: RecurrenceRule | dict[str, Any] | str,
    window_start: date,
    window_end: date,
) -> list[date]:
    """Produce the occurrence dates of a rule inside an inclusive window.

    Args:
        rule: Rule model, decoded rule payload, or rule JSON text
        window_start: First date of the window (inclusive)
        window_end: Last date of the window (inclusive)

    Returns:
        Sorted list of unique dates; empty when window_end < window_start

    Raises:
        InvalidRuleError: If the rule is malformed (raised before any date is computed)
    """
    rule = coerce_rule(rule)
    validate_rule(rule)

    if window_end < window_start:
        log_generation(rule_type=rule.type, window_start=window_start, window_end=window_end, produced=0)
        return []

    rng = getattr(rule, "range", None)
    if rng is None:
        dates = _expand(rule, window_start, window_end, None)
    else:
        dates = _expand_ranged(rule, rng, window_start, window_end)

    log_generation(rule_type=rule.type, window_start=window_start, window_end=window_end, produced=len(dates))
    return dates
