"""Starting rules for structured editing.

When a user switches a definition to another recurrence type in the editor,
the form starts from ``default_rule(type)``. Types without a dedicated form
start as "as needed".
"""

from datetime import date

from recurring_tasks.recurrence.enums import RANGED_TYPES, MonthParity, RangeEndType, RecurrenceType
from recurring_tasks.recurrence.models import (
    AsNeededRule,
    BimonthlyRule,
    DailyRule,
    MonthlyRule,
    QuarterlyRule,
    RecurrenceRange,
    RecurrenceRule,
    WeeklyRule,
    YearlyRule,
)


def default_rule(rule_type: RecurrenceType | str, range_: RecurrenceRange | None = None) -> RecurrenceRule:
    """Build the starting rule for a recurrence type.

    Args:
        rule_type: Target recurrence type
        range_: Optional range, attached only to types that support one

    Returns:
        A valid rule of the requested type (AsNeededRule for types without a form)
    """
    try:
        kind = RecurrenceType(rule_type)
    except ValueError:
        kind = RecurrenceType.AS_NEEDED

    rng = range_ if kind in RANGED_TYPES else None

    if kind == RecurrenceType.DAILY:
        return DailyRule(weekdays_only=False, interval=1, range=rng)
    if kind == RecurrenceType.WEEKLY:
        return WeeklyRule(day_of_week=1, days_of_week=[1], interval=1, range=rng)
    if kind == RecurrenceType.MONTHLY:
        return MonthlyRule(day_of_month=1, interval=1, range=rng)
    if kind == RecurrenceType.QUARTERLY:
        return QuarterlyRule(month_of_quarter=1, day_of_month=1)
    if kind == RecurrenceType.YEARLY:
        return YearlyRule(month=1, day_of_month=1, interval=1, range=rng)
    if kind == RecurrenceType.BIMONTHLY:
        return BimonthlyRule(month_parity=MonthParity.EVEN, day_of_month=1)
    return AsNeededRule()


def build_range(
    start_date: date | None = None,
    end_type: RangeEndType | str = RangeEndType.NEVER,
    end_date: date | None = None,
    occurrences: int | None = None,
) -> RecurrenceRange | None:
    """Build the optional range from editor inputs.

    Returns None for an unbounded rule with no start date. End values that do
    not belong to the chosen end type are dropped.
    """
    kind = RangeEndType(end_type)
    if start_date is None and kind == RangeEndType.NEVER:
        return None
    return RecurrenceRange(
        start_date=start_date,
        end_type=kind,
        end_date=end_date if kind == RangeEndType.DATE else None,
        occurrences=occurrences if kind == RangeEndType.OCCURRENCES else None,
    )
