"""Recurrence rule schemas.

Every supported recurrence pattern is its own frozen pydantic model, tagged by
a literal ``type`` field. ``RecurrenceRule`` is the discriminated union of all
variants and is the only shape the generator, parser and labeller accept.

Python attributes are snake_case; the persisted JSON uses camelCase keys
(``weekdaysOnly``, ``dayOfMonth``, ``nthWeek`` ...), produced by the alias
generator. Both spellings are accepted on input.

Field bounds declared here are the per-field contract. Cross-field rules
(e.g. ``useNthWeekday`` requires ``nthWeek``) live in ``validation``.
"""

from datetime import date as date_type
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from recurring_tasks.recurrence.enums import MonthParity, RangeEndType

DayOfWeek = Annotated[int, Field(ge=0, le=6, description="0 = Sunday ... 6 = Saturday")]
DayOfMonth = Annotated[int, Field(ge=1, le=31, description="Clamped to the month length at generation time")]
Month = Annotated[int, Field(ge=1, le=12)]
NthWeek = Annotated[int, Field(ge=1, le=5, description="1-4 = first-fourth, 5 = last")]
Interval = Annotated[int, Field(ge=1)]


class RuleModel(BaseModel):
    """Shared configuration for all rule value objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class RecurrenceRange(RuleModel):
    """Optional bound attached to daily, weekly, monthly and yearly rules.

    Attributes:
        start_date: First date the rule may produce (also the interval anchor)
        end_type: never | date | occurrences
        end_date: Last date the rule may produce (when end_type is "date")
        occurrences: Number of occurrences before the rule stops (when end_type is "occurrences")
    """

    start_date: date_type | None = None
    end_type: RangeEndType = RangeEndType.NEVER
    end_date: date_type | None = None
    occurrences: int | None = Field(None, ge=1)


class MonthDay(RuleModel):
    """A (month, day) pair repeated every year."""

    month: Month
    day: DayOfMonth


class DailyRule(RuleModel):
    """Every day (or every N days), optionally skipping Saturday and Sunday."""

    type: Literal["daily"] = "daily"
    weekdays_only: bool
    interval: Interval | None = None
    range: RecurrenceRange | None = None


class WeeklyRule(RuleModel):
    """One or more weekdays, every N weeks.

    ``day_of_week`` is the single-day form; ``days_of_week`` wins when it is non-empty.
    """

    type: Literal["weekly"] = "weekly"
    day_of_week: DayOfWeek
    days_of_week: list[DayOfWeek] | None = None
    interval: Interval | None = None
    range: RecurrenceRange | None = None


class MonthlyRule(RuleModel):
    """Fixed day of month, or the nth weekday of the month, every N months."""

    type: Literal["monthly"] = "monthly"
    day_of_month: DayOfMonth
    interval: Interval | None = None
    use_nth_weekday: bool | None = None
    nth_week: NthWeek | None = None
    nth_day_of_week: DayOfWeek | None = None
    range: RecurrenceRange | None = None


class BimonthlyRule(RuleModel):
    """Fixed day on every even (or every odd) month."""

    type: Literal["bimonthly"] = "bimonthly"
    month_parity: MonthParity
    day_of_month: DayOfMonth


class QuarterlyRule(RuleModel):
    """One day per calendar quarter (quarters start in Jan, Apr, Jul, Oct)."""

    type: Literal["quarterly"] = "quarterly"
    month_of_quarter: int = Field(..., ge=1, le=3)
    day_of_month: DayOfMonth


class YearlyRule(RuleModel):
    """Fixed date, or the nth weekday of a month, every N years."""

    type: Literal["yearly"] = "yearly"
    month: Month
    day_of_month: DayOfMonth
    interval: Interval | None = None
    use_nth_weekday: bool | None = None
    nth_week: NthWeek | None = None
    nth_day_of_week: DayOfWeek | None = None
    range: RecurrenceRange | None = None


class NthWeekdayRule(RuleModel):
    """The nth weekday of every month, or of one fixed month."""

    type: Literal["nthWeekday"] = "nthWeekday"
    n: NthWeek
    day_of_week: DayOfWeek
    month: Month | None = None


class MultiMonthRule(RuleModel):
    """Same day across an explicit set of months each year."""

    type: Literal["multiMonth"] = "multiMonth"
    months: list[Month] = Field(..., min_length=1)
    day_of_month: DayOfMonth


class MultiDateRule(RuleModel):
    """Explicit (month, day) pairs each year."""

    type: Literal["multiDate"] = "multiDate"
    dates: list[MonthDay] = Field(..., min_length=1)


class MultiYearRule(RuleModel):
    """One date every N years, anchored to base_year."""

    type: Literal["multiYear"] = "multiYear"
    interval: Interval
    base_year: int
    month: Month
    day_of_month: DayOfMonth


class OneTimeRule(RuleModel):
    """A single, non-recurring date."""

    type: Literal["oneTime"] = "oneTime"
    date: date_type


class AsNeededRule(RuleModel):
    """Never generates instances; created by hand when needed."""

    type: Literal["asNeeded"] = "asNeeded"


class AsOccursRule(RuleModel):
    """Never generates instances; created by hand when the event occurs."""

    type: Literal["asOccurs"] = "asOccurs"


RecurrenceRule = Annotated[
    DailyRule
    | WeeklyRule
    | MonthlyRule
    | BimonthlyRule
    | QuarterlyRule
    | YearlyRule
    | NthWeekdayRule
    | MultiMonthRule
    | MultiDateRule
    | MultiYearRule
    | OneTimeRule
    | AsNeededRule
    | AsOccursRule,
    Field(discriminator="type"),
]

RULE_CLASSES: tuple[type[RuleModel], ...] = (
    DailyRule,
    WeeklyRule,
    MonthlyRule,
    BimonthlyRule,
    QuarterlyRule,
    YearlyRule,
    NthWeekdayRule,
    MultiMonthRule,
    MultiDateRule,
    MultiYearRule,
    OneTimeRule,
    AsNeededRule,
    AsOccursRule,
)
