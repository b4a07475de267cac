"""Schedule text parser.

Converts the free-text "When" column of an imported spreadsheet
("Second Tuesday", "Jan-Mar", "Every 3 years", "May 2025" ...) into a
structured RecurrenceRule.

Patterns are tried in a fixed priority order and the first match wins,
because several patterns can match the same text (a bare year vs. a month
and year). Text that matches nothing never raises: it becomes a
FallbackSchedule carrying the default rule (yearly, January 1) and the
original text, so callers can flag the row instead of silently
mis-scheduling it.

Matching is case-insensitive and ignores surrounding whitespace.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from recurring_tasks.observability import log_schedule_fallback
from recurring_tasks.parsing.vocabulary import (
    FULL_MONTH_PATTERN,
    MONTH_PATTERN,
    ORDINAL_MAP,
    ORDINAL_PATTERN,
    WEEKDAY_MAP,
    WEEKDAY_PATTERN,
    month_number,
)
from recurring_tasks.recurrence.calendar import clamped_date
from recurring_tasks.recurrence.enums import MonthParity
from recurring_tasks.recurrence.models import (
    AsNeededRule,
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
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
)


@dataclass(frozen=True)
class ParsedSchedule:
    """Schedule text that matched a known pattern.

    Attributes:
        rule: Parsed rule
        text: Original schedule text
        pattern: Name of the pattern that matched
    """

    rule: RecurrenceRule
    text: str
    pattern: str

    @property
    def fell_back(self) -> bool:
        return False


@dataclass(frozen=True)
class FallbackSchedule:
    """Schedule text that matched nothing; ``rule`` is the default substitute.

    Attributes:
        rule: Default rule used in place of the text (yearly, January 1)
        text: Original schedule text, kept so the caller can surface it
    """

    rule: RecurrenceRule
    text: str

    @property
    def fell_back(self) -> bool:
        return True


ScheduleParseResult = ParsedSchedule | FallbackSchedule

_Matcher = Callable[[str, date], RecurrenceRule | None]


def fallback_rule() -> YearlyRule:
    """Rule substituted for schedule text that matches no pattern."""
    return YearlyRule(month=1, day_of_month=1)


def _valid_day(day: int) -> bool:
    return 1 <= day <= 31


def _match_keyword(text: str, today: date) -> RecurrenceRule | None:
    if text == "daily":
        return DailyRule(weekdays_only=False)
    if text == "weekly":
        return WeeklyRule(day_of_week=1)
    if text == "monthly":
        return MonthlyRule(day_of_month=1)
    if text in ("bi-monthly", "bimonthly") or "even months" in text or "odd months" in text:
        parity = MonthParity.ODD if "odd" in text else MonthParity.EVEN
        return BimonthlyRule(month_parity=parity, day_of_month=1)
    if text == "quarterly":
        return QuarterlyRule(month_of_quarter=1, day_of_month=1)
    return None


_DAY_OF_MONTH_RE = re.compile(r"\b(\d{1,3})(?:st|nd|rd|th)\s+of\s+(?:the\s+)?month")


def _match_day_of_month(text: str, today: date) -> RecurrenceRule | None:
    match = _DAY_OF_MONTH_RE.search(text)
    if not match or not _valid_day(int(match.group(1))):
        return None
    return MonthlyRule(day_of_month=int(match.group(1)))


_EVERY_N_YEARS_RE = re.compile(r"every\s+(\d{1,4})\s*(?:years?|yrs?)")


def _match_every_n_years(text: str, today: date) -> RecurrenceRule | None:
    match = _EVERY_N_YEARS_RE.search(text)
    if not match or int(match.group(1)) < 1:
        return None
    return MultiYearRule(interval=int(match.group(1)), base_year=today.year, month=1, day_of_month=1)


_NTH_WEEKDAY_RE = re.compile(rf"\b({ORDINAL_PATTERN})\s+({WEEKDAY_PATTERN})\b")


def _match_nth_weekday(text: str, today: date) -> RecurrenceRule | None:
    match = _NTH_WEEKDAY_RE.search(text)
    if not match:
        return None
    return NthWeekdayRule(n=ORDINAL_MAP[match.group(1)], day_of_week=WEEKDAY_MAP[match.group(2)])


_TWO_DATES_RE = re.compile(r"([a-z]+)\s+(\d{1,2})\s*/\s*([a-z]+)\s+(\d{1,2})")


def _match_two_dates(text: str, today: date) -> RecurrenceRule | None:
    match = _TWO_DATES_RE.search(text)
    if not match:
        return None
    month1, month2 = month_number(match.group(1)), month_number(match.group(3))
    day1, day2 = int(match.group(2)), int(match.group(4))
    if not (month1 and month2 and _valid_day(day1) and _valid_day(day2)):
        return None
    return MultiDateRule(dates=[MonthDay(month=month1, day=day1), MonthDay(month=month2, day=day2)])


_FULL_MONTH_SLASH_RE = re.compile(rf"^({FULL_MONTH_PATTERN})\s*/\s*({FULL_MONTH_PATTERN})$")


def _match_full_month_slash(text: str, today: date) -> RecurrenceRule | None:
    match = _FULL_MONTH_SLASH_RE.match(text)
    if not match:
        return None
    return MultiMonthRule(months=_unique([month_number(match.group(1)), month_number(match.group(2))]), day_of_month=1)


_MONTH_RANGE_RE = re.compile(rf"^({MONTH_PATTERN})\s*-\s*({MONTH_PATTERN})$")


def _match_month_range(text: str, today: date) -> RecurrenceRule | None:
    match = _MONTH_RANGE_RE.match(text)
    if not match:
        return None
    first, last = month_number(match.group(1)), month_number(match.group(2))
    if first <= last:
        months = list(range(first, last + 1))
    else:
        # "Oct-Mar" wraps past December into January
        months = list(range(first, 13)) + list(range(1, last + 1))
    return MultiMonthRule(months=months, day_of_month=1)


_MONTH_SLASH_RE = re.compile(rf"^({MONTH_PATTERN})\s*/\s*({MONTH_PATTERN})$")


def _match_month_slash(text: str, today: date) -> RecurrenceRule | None:
    match = _MONTH_SLASH_RE.match(text)
    if not match:
        return None
    return MultiMonthRule(months=_unique([month_number(match.group(1)), month_number(match.group(2))]), day_of_month=1)


_FULL_DATE_RE = re.compile(r"([a-z]+)\s+(\d{1,2}),?\s+(\d{4})")


def _match_full_date(text: str, today: date) -> RecurrenceRule | None:
    match = _FULL_DATE_RE.search(text)
    if not match:
        return None
    month, day, year = month_number(match.group(1)), int(match.group(2)), int(match.group(3))
    if not month or not _valid_day(day) or year < 1:
        return None
    return OneTimeRule(date=clamped_date(year, month, day))


_MONTH_YEAR_RE = re.compile(r"^([a-z]+)\s+(\d{4})$")


def _match_month_year(text: str, today: date) -> RecurrenceRule | None:
    match = _MONTH_YEAR_RE.match(text)
    if not match:
        return None
    month, year = month_number(match.group(1)), int(match.group(2))
    if not month or year < 1:
        return None
    return OneTimeRule(date=date(year, month, 1))


_MONTH_DAY_RE = re.compile(r"^([a-z]+)\s+(\d{1,2})$")


def _match_month_day(text: str, today: date) -> RecurrenceRule | None:
    match = _MONTH_DAY_RE.match(text)
    if not match:
        return None
    month, day = month_number(match.group(1)), int(match.group(2))
    if not month or not _valid_day(day):
        return None
    return YearlyRule(month=month, day_of_month=day)


_MONTH_ONLY_RE = re.compile(rf"^({MONTH_PATTERN})$")


def _match_month_only(text: str, today: date) -> RecurrenceRule | None:
    match = _MONTH_ONLY_RE.match(text)
    if not match:
        return None
    return YearlyRule(month=month_number(match.group(1)), day_of_month=1)


_YEAR_ONLY_RE = re.compile(r"^(\d{4})$")


def _match_year_only(text: str, today: date) -> RecurrenceRule | None:
    match = _YEAR_ONLY_RE.match(text)
    if not match or int(match.group(1)) < 1:
        return None
    return OneTimeRule(date=date(int(match.group(1)), 1, 1))


def _match_as_needed(text: str, today: date) -> RecurrenceRule | None:
    if "as needed" in text or "as occurs" in text:
        return AsNeededRule()
    return None


def _unique(values: list[int | None]) -> list[int]:
    out: list[int] = []
    for value in values:
        if value is not None and value not in out:
            out.append(value)
    return out


# Priority order; first match wins
PATTERNS: tuple[tuple[str, _Matcher], ...] = (
    ("keyword", _match_keyword),
    ("day_of_month", _match_day_of_month),
    ("every_n_years", _match_every_n_years),
    ("nth_weekday", _match_nth_weekday),
    ("two_dates", _match_two_dates),
    ("full_month_slash", _match_full_month_slash),
    ("month_range", _match_month_range),
    ("month_slash", _match_month_slash),
    ("full_date", _match_full_date),
    ("month_year", _match_month_year),
    ("month_day", _match_month_day),
    ("month_only", _match_month_only),
    ("year_only", _match_year_only),
    ("as_needed", _match_as_needed),
)


def parse_schedule(text: str, *, today: date | None = None) -> ScheduleParseResult:
    """Parse schedule text into a rule, reporting whether the fallback was used.

    Args:
        text: Free-text schedule description
        today: Reference date; its year anchors "every N years" rules (defaults to date.today())

    Returns:
        ParsedSchedule on a pattern match, FallbackSchedule otherwise
    """
    today = today or date.today()
    normalized = (text or "").strip().lower()

    for name, matcher in PATTERNS:
        rule = matcher(normalized, today)
        if rule is not None:
            return ParsedSchedule(rule=rule, text=text, pattern=name)

    rule = fallback_rule()
    log_schedule_fallback(text, rule.type)
    return FallbackSchedule(rule=rule, text=text)


def parse(text: str, *, today: date | None = None) -> RecurrenceRule:
    """Parse schedule text into a rule, substituting the fallback rule for unknown text.

    Never raises for unrecognized text; use parse_schedule to tell a fallback apart.
    """
    return parse_schedule(text, today=today).rule
