"""Calendar helpers for recurrence generation.

Pure functions over naive calendar dates. Weekdays use the stored rule
numbering (0 = Sunday ... 6 = Saturday), not Python's Monday-based ``weekday()``.
"""

from collections.abc import Iterator
from datetime import date, timedelta

from recurring_tasks.recurrence.enums import FIRST_NTH, LAST_NTH, SATURDAY, SUNDAY
from recurring_tasks.recurrence.errors import InvalidRuleError

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Fixed interval grid origin for rules without a start date; a Sunday so weeks line up
EPOCH = date(1970, 1, 4)


def is_leap_year(year: int) -> bool:
    """Gregorian leap year: divisible by 4, except centuries not divisible by 400."""
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """Return the last valid day (28-31) of the given month."""
    if not 1 <= month <= 12:
        raise InvalidRuleError("OUT_OF_RANGE", [f"month must be 1-12, got {month}"])
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def clamp_day(day: int, year: int, month: int) -> int:
    """Reduce a day of month to the last valid day of that month."""
    return min(day, days_in_month(year, month))


def clamped_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the month length."""
    return date(year, month, clamp_day(day, year, month))


def sunday_weekday(d: date) -> int:
    """Weekday of d with 0 = Sunday ... 6 = Saturday."""
    return (d.weekday() + 1) % 7


def is_weekday(d: date) -> bool:
    """True unless d is a Saturday or Sunday."""
    return sunday_weekday(d) not in (SATURDAY, SUNDAY)


def day_number(d: date) -> int:
    """Days elapsed since EPOCH (negative before it)."""
    return (d - EPOCH).days


def week_number(d: date) -> int:
    """Sunday-started weeks elapsed since EPOCH (negative before it)."""
    return day_number(d) // 7


def month_index(year: int, month: int) -> int:
    """Months elapsed since year 0, used to compare month positions."""
    return year * 12 + (month - 1)


def nth_weekday_of_month(year: int, month: int, n: int, day_of_week: int) -> date | None:
    """Resolve "the nth <weekday> of <month>".

    n = 1-4 walks forward from the first matching weekday; n = 5 means
    "last" and walks backward from the end of the month, so it never spills
    into the next month.

    Args:
        year: Calendar year
        month: Month (1-12)
        n: 1-4 for first-fourth, 5 for last
        day_of_week: 0 = Sunday ... 6 = Saturday

    Returns:
        The resolved date, or None if the month has no such weekday

    Raises:
        InvalidRuleError: If n or day_of_week are out of bounds
    """
    if not FIRST_NTH <= n <= LAST_NTH:
        raise InvalidRuleError("OUT_OF_RANGE", [f"nth week must be 1-5, got {n}"])
    if not SUNDAY <= day_of_week <= SATURDAY:
        raise InvalidRuleError("OUT_OF_RANGE", [f"day of week must be 0-6, got {day_of_week}"])

    last_day = days_in_month(year, month)

    if n == LAST_NTH:
        last = date(year, month, last_day)
        offset = (sunday_weekday(last) - day_of_week) % 7
        return last - timedelta(days=offset)

    first = date(year, month, 1)
    offset = (day_of_week - sunday_weekday(first)) % 7
    day = 1 + offset + (n - 1) * 7
    if day > last_day:
        return None
    return date(year, month, day)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date in [start, end]."""
    if start > end:
        return
    current = start
    while True:
        yield current
        if current == end:
            return
        current += timedelta(days=1)


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """Yield every (year, month) pair overlapping [start, end]."""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1
