"""Human-readable rule labels for task lists and import previews."""

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
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
NTH_NAMES = ["First", "Second", "Third", "Fourth", "Last"]


def ordinal(n: int) -> str:
    """1 -> "1st", 2 -> "2nd", 11 -> "11th", 23 -> "23rd"."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def day_name(day: int | None) -> str:
    if day is None or not 0 <= day <= 6:
        return "Unknown"
    return DAY_NAMES[day]


def month_name(month: int | None) -> str:
    if month is None or not 1 <= month <= 12:
        return "Unknown"
    return MONTH_NAMES[month - 1]


def _nth_name(nth: int | None) -> str:
    if nth is None or not 1 <= nth <= 5:
        return ""
    return NTH_NAMES[nth - 1]


def describe_rule(rule: RecurrenceRule) -> str:  # noqa: C901, PLR0911
    """Short label describing when a rule occurs.

    Examples:
        DailyRule(weekdays_only=True) -> "Every weekday"
        MonthlyRule(day_of_month=15) -> "Monthly (day 15)"
        NthWeekdayRule(n=2, day_of_week=2) -> "2nd Tuesday"
    """
    if isinstance(rule, DailyRule):
        if rule.weekdays_only:
            return "Every weekday"
        if rule.interval and rule.interval > 1:
            return f"Every {rule.interval} days"
        return "Daily"

    if isinstance(rule, WeeklyRule):
        if rule.days_of_week:
            days = ", ".join(day_name(d)[:3] for d in rule.days_of_week)
        else:
            days = day_name(rule.day_of_week)
        if rule.interval and rule.interval > 1:
            return f"Every {rule.interval} weeks ({days})"
        return f"Weekly ({days})"

    if isinstance(rule, MonthlyRule):
        if rule.use_nth_weekday:
            return f"{_nth_name(rule.nth_week)} {day_name(rule.nth_day_of_week)} monthly".strip()
        if rule.interval and rule.interval > 1:
            return f"Day {rule.day_of_month} every {rule.interval} months"
        return f"Monthly (day {rule.day_of_month})"

    if isinstance(rule, BimonthlyRule):
        return f"Bi-Monthly ({rule.month_parity} months)"

    if isinstance(rule, QuarterlyRule):
        return "Quarterly"

    if isinstance(rule, YearlyRule):
        if rule.use_nth_weekday:
            return f"{_nth_name(rule.nth_week)} {day_name(rule.nth_day_of_week)} of {month_name(rule.month)}".strip()
        if rule.interval and rule.interval > 1:
            return f"Every {rule.interval} years ({month_name(rule.month)} {rule.day_of_month})"
        return f"Yearly ({month_name(rule.month)} {rule.day_of_month})"

    if isinstance(rule, NthWeekdayRule):
        label = f"{ordinal(rule.n)} {day_name(rule.day_of_week)}"
        if rule.month is not None:
            label += f" of {month_name(rule.month)}"
        return label

    if isinstance(rule, MultiMonthRule):
        return f"Months: {', '.join(str(m) for m in rule.months)}"

    if isinstance(rule, MultiDateRule):
        return "Dates: " + ", ".join(f"{month_name(p.month)[:3]} {p.day}" for p in rule.dates)

    if isinstance(rule, MultiYearRule):
        return f"Every {rule.interval} years"

    if isinstance(rule, OneTimeRule):
        return f"One-time: {rule.date.isoformat()}"

    if isinstance(rule, AsNeededRule):
        return "As Needed"

    if isinstance(rule, AsOccursRule):
        return "As Occurs"

    return "Unknown"
