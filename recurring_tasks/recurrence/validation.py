"""Rule validation.

Schemas already enforce per-field bounds on construction, but rules can reach
the generator without passing through pydantic validation (``model_construct``,
``model_copy(update=...)``). ``validate_rule`` re-checks bounds and enforces
the cross-field requirements that a single field cannot express.

Fails fast with InvalidRuleError; never returns partial results.
"""

from recurring_tasks.recurrence.enums import RangeEndType
from recurring_tasks.recurrence.errors import InvalidRuleError
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


def _require(value: object, name: str, errors: list[str]) -> bool:
    if value is None:
        errors.append(f"{name} is required")
        return False
    return True


def _bounded(value: int | None, name: str, low: int, high: int | None, errors: list[str]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(f"{name} must be an integer, got {value!r}")
        return
    if value < low or (high is not None and value > high):
        upper = "" if high is None else f"-{high}"
        errors.append(f"{name} must be {low}{upper}, got {value}")


def _check_nth_weekday(rule: MonthlyRule | YearlyRule, errors: list[str]) -> None:
    if not rule.use_nth_weekday:
        return
    if _require(rule.nth_week, "nthWeek", errors):
        _bounded(rule.nth_week, "nthWeek", 1, 5, errors)
    if _require(rule.nth_day_of_week, "nthDayOfWeek", errors):
        _bounded(rule.nth_day_of_week, "nthDayOfWeek", 0, 6, errors)


def _check_range(rng: RecurrenceRange | None, errors: list[str]) -> None:
    if rng is None:
        return
    if rng.end_type == RangeEndType.DATE:
        _require(rng.end_date, "range.endDate", errors)
    elif rng.end_type == RangeEndType.OCCURRENCES:
        if _require(rng.occurrences, "range.occurrences", errors):
            _bounded(rng.occurrences, "range.occurrences", 1, None, errors)
    if rng.start_date and rng.end_date and rng.end_type == RangeEndType.DATE and rng.end_date < rng.start_date:
        errors.append(f"range.endDate {rng.end_date} is before range.startDate {rng.start_date}")


def _collect_errors(rule: RecurrenceRule) -> list[str]:  # noqa: C901
    errors: list[str] = []

    if isinstance(rule, DailyRule):
        if rule.weekdays_only is None:
            errors.append("weekdaysOnly is required")
        _bounded(rule.interval, "interval", 1, None, errors)
        _check_range(rule.range, errors)
    elif isinstance(rule, WeeklyRule):
        if _require(rule.day_of_week, "dayOfWeek", errors):
            _bounded(rule.day_of_week, "dayOfWeek", 0, 6, errors)
        for day in rule.days_of_week or []:
            _bounded(day, "daysOfWeek[]", 0, 6, errors)
        _bounded(rule.interval, "interval", 1, None, errors)
        _check_range(rule.range, errors)
    elif isinstance(rule, MonthlyRule):
        if _require(rule.day_of_month, "dayOfMonth", errors):
            _bounded(rule.day_of_month, "dayOfMonth", 1, 31, errors)
        _bounded(rule.interval, "interval", 1, None, errors)
        _check_nth_weekday(rule, errors)
        _check_range(rule.range, errors)
    elif isinstance(rule, BimonthlyRule):
        _require(rule.month_parity, "monthParity", errors)
        if _require(rule.day_of_month, "dayOfMonth", errors):
            _bounded(rule.day_of_month, "dayOfMonth", 1, 31, errors)
    elif isinstance(rule, QuarterlyRule):
        if _require(rule.month_of_quarter, "monthOfQuarter", errors):
            _bounded(rule.month_of_quarter, "monthOfQuarter", 1, 3, errors)
        if _require(rule.day_of_month, "dayOfMonth", errors):
            _bounded(rule.day_of_month, "dayOfMonth", 1, 31, errors)
    elif isinstance(rule, YearlyRule):
        if _require(rule.month, "month", errors):
            _bounded(rule.month, "month", 1, 12, errors)
        if _require(rule.day_of_month, "dayOfMonth", errors):
            _bounded(rule.day_of_month, "dayOfMonth", 1, 31, errors)
        _bounded(rule.interval, "interval", 1, None, errors)
        _check_nth_weekday(rule, errors)
        _check_range(rule.range, errors)
    elif isinstance(rule, NthWeekdayRule):
        if _require(rule.n, "n", errors):
            _bounded(rule.n, "n", 1, 5, errors)
        if _require(rule.day_of_week, "dayOfWeek", errors):
            _bounded(rule.day_of_week, "dayOfWeek", 0, 6, errors)
        _bounded(rule.month, "month", 1, 12, errors)
    elif isinstance(rule, MultiMonthRule):
        if not rule.months:
            errors.append("months must not be empty")
        for month in rule.months or []:
            _bounded(month, "months[]", 1, 12, errors)
        if _require(rule.day_of_month, "dayOfMonth", errors):
            _bounded(rule.day_of_month, "dayOfMonth", 1, 31, errors)
    elif isinstance(rule, MultiDateRule):
        if not rule.dates:
            errors.append("dates must not be empty")
        for pair in rule.dates or []:
            _bounded(pair.month, "dates[].month", 1, 12, errors)
            _bounded(pair.day, "dates[].day", 1, 31, errors)
    elif isinstance(rule, MultiYearRule):
        if _require(rule.interval, "interval", errors):
            _bounded(rule.interval, "interval", 1, None, errors)
        _require(rule.base_year, "baseYear", errors)
        if _require(rule.month, "month", errors):
            _bounded(rule.month, "month", 1, 12, errors)
        if _require(rule.day_of_month, "dayOfMonth", errors):
            _bounded(rule.day_of_month, "dayOfMonth", 1, 31, errors)
    elif isinstance(rule, OneTimeRule):
        _require(rule.date, "date", errors)
    elif isinstance(rule, AsNeededRule | AsOccursRule):
        pass
    else:
        raise InvalidRuleError("UNKNOWN_TYPE", [f"unsupported rule object: {type(rule).__name__}"])

    return errors


def validate_rule(rule: RecurrenceRule) -> None:
    """Validate a rule before generation.

    Args:
        rule: Rule to validate

    Raises:
        InvalidRuleError: If a required field is missing or a value is out of bounds
    """
    errors = _collect_errors(rule)
    if errors:
        code = "MISSING_FIELD" if all(e.endswith("is required") for e in errors) else "OUT_OF_RANGE"
        if any("must not be empty" in e for e in errors):
            code = "EMPTY_SET"
        raise InvalidRuleError(code, errors)
