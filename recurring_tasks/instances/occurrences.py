"""Occurrences - the generator's output bound to a task definition.

An Occurrence is the (definition_id, date) natural key that persistence turns
into a stateful task instance (pending / completed / skipped). Writers are
expected to use insert-if-absent semantics on that key; ``missing_occurrences``
computes the rows such a write would actually add.
"""

from collections.abc import Iterable
from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from recurring_tasks.config.settings import settings
from recurring_tasks.recurrence.errors import WindowTooLargeError
from recurring_tasks.recurrence.generator import generate
from recurring_tasks.recurrence.models import RecurrenceRule


class Occurrence(BaseModel):
    """A single dated occurrence of a task definition."""

    model_config = ConfigDict(frozen=True)

    task_definition_id: int = Field(..., description="Owning task definition")
    scheduled_date: date = Field(..., description="Calendar date of the occurrence")

    @property
    def key(self) -> tuple[int, date]:
        """Natural persistence key."""
        return (self.task_definition_id, self.scheduled_date)


def initial_window(today: date, years: int | None = None) -> tuple[date, date]:
    """Window populated when a definition is created: Jan 1 this year through Dec 31 of the last year.

    Args:
        today: Reference date
        years: Number of calendar years to cover (defaults to settings.initial_window_years)
    """
    span = years if years is not None else settings.initial_window_years
    return date(today.year, 1, 1), date(today.year + span - 1, 12, 31)


def year_window(year_start: int, year_end: int) -> tuple[date, date]:
    """Window covering whole calendar years [year_start, year_end]."""
    return date(year_start, 1, 1), date(year_end, 12, 31)


def check_window(window_start: date, window_end: date, max_years: int | None = None) -> None:
    """Reject windows wider than the configured bound.

    Generation cost grows with the window (a daily rule yields one date per day),
    so callers bound the window before generating.

    Raises:
        WindowTooLargeError: If the window touches more than max_years calendar years
    """
    limit = max_years if max_years is not None else settings.max_window_years
    years = window_end.year - window_start.year + 1
    if years > limit:
        raise WindowTooLargeError(years, limit)


def occurrences_for(
    task_definition_id: int,
    rule: RecurrenceRule | dict[str, Any] | str,
    window_start: date,
    window_end: date,
) -> list[Occurrence]:
    """Generate the occurrences of one definition inside a window."""
    check_window(window_start, window_end)
    return [
        Occurrence(task_definition_id=task_definition_id, scheduled_date=d)
        for d in generate(rule, window_start, window_end)
    ]


def missing_occurrences(
    task_definition_id: int,
    rule: RecurrenceRule | dict[str, Any] | str,
    window_start: date,
    window_end: date,
    existing_dates: Iterable[date],
) -> list[Occurrence]:
    """Occurrences in the window that are not already persisted.

    Re-running population over an already populated window returns nothing,
    which keeps repeated populations free of duplicate instances.
    """
    existing = set(existing_dates)
    return [
        occ
        for occ in occurrences_for(task_definition_id, rule, window_start, window_end)
        if occ.scheduled_date not in existing
    ]


def populate_new_definition(
    task_definition_id: int,
    rule: RecurrenceRule | dict[str, Any] | str,
    today: date,
) -> list[Occurrence]:
    """Occurrences written when a task definition is created (this year + next year)."""
    window_start, window_end = initial_window(today)
    return occurrences_for(task_definition_id, rule, window_start, window_end)
