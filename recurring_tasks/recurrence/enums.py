"""Canonical enums for recurrence rules.

All enums are string-based so they serialize directly into the persisted
rule JSON (the ``type`` discriminator and the range/parity tags).

Weekday numbering follows the stored format: 0 = Sunday ... 6 = Saturday.
"""

from enum import StrEnum


# -----------------------------
# Rule discriminator
# -----------------------------
class RecurrenceType(StrEnum):
    """Tag stored in the ``type`` field of every rule."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    BIMONTHLY = "bimonthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    NTH_WEEKDAY = "nthWeekday"
    MULTI_MONTH = "multiMonth"
    MULTI_DATE = "multiDate"
    MULTI_YEAR = "multiYear"
    ONE_TIME = "oneTime"
    AS_NEEDED = "asNeeded"
    AS_OCCURS = "asOccurs"


# -----------------------------
# Bimonthly parity
# -----------------------------
class MonthParity(StrEnum):
    """Which months a bimonthly rule lands on."""

    EVEN = "even"
    ODD = "odd"


# -----------------------------
# Range end
# -----------------------------
class RangeEndType(StrEnum):
    """How a bounded rule stops producing occurrences."""

    NEVER = "never"
    DATE = "date"
    OCCURRENCES = "occurrences"


# Types that accept an optional RecurrenceRange
RANGED_TYPES = frozenset(
    {
        RecurrenceType.DAILY,
        RecurrenceType.WEEKLY,
        RecurrenceType.MONTHLY,
        RecurrenceType.YEARLY,
    }
)

SUNDAY = 0
SATURDAY = 6

# nth == LAST_NTH means "last <weekday> of the month"
FIRST_NTH = 1
LAST_NTH = 5
