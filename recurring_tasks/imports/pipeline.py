"""Task import pipeline.

Turns normalized spreadsheet rows into an ImportPlan: one task definition per
row, with its parsed rule and the occurrences for the requested year range.

Each row is handled independently; a row whose rule cannot be used is
reported as rejected and never aborts the rest of the batch. Rows whose
schedule text fell back to the default rule are kept but flagged, so the
preview can show them to the user. Writing the plan to storage is the
caller's job.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date

from recurring_tasks.config.settings import settings
from recurring_tasks.imports.rows import ImportRow
from recurring_tasks.instances.occurrences import check_window, year_window
from recurring_tasks.observability import log_import_row_rejected, log_import_summary
from recurring_tasks.parsing.schedule_parser import parse_schedule
from recurring_tasks.recurrence.errors import InvalidRuleError
from recurring_tasks.recurrence.generator import generate
from recurring_tasks.recurrence.labels import describe_rule
from recurring_tasks.recurrence.models import RecurrenceRule
from recurring_tasks.recurrence.serialization import rule_to_json


class EmptyImportError(ValueError):
    """Raised when an import is requested without any rows."""

    def __init__(self) -> None:
        super().__init__("No tasks provided")


@dataclass(frozen=True)
class PreviewRow:
    """How one row will be interpreted, shown before the import runs.

    Attributes:
        row_number: 1-based position in the input
        row: The normalized row
        rule: Parsed (or fallback) rule
        label: Human-readable rule label
        fell_back: True when the schedule text matched no pattern
    """

    row_number: int
    row: ImportRow
    rule: RecurrenceRule
    label: str
    fell_back: bool


@dataclass(frozen=True)
class ImportedDefinition:
    """A task definition ready to be written, with its generated dates."""

    row_number: int
    category: str
    title: str
    rule: RecurrenceRule
    fell_back: bool
    dates: list[date]

    @property
    def rule_type(self) -> str:
        return self.rule.type

    @property
    def rule_json(self) -> str:
        """Encoded rule, stored beside the definition."""
        return rule_to_json(self.rule)


@dataclass(frozen=True)
class RejectedRow:
    """A row skipped because its rule is invalid."""

    row_number: int
    title: str
    code: str
    details: list[str]


@dataclass
class ImportPlan:
    """Result of planning an import.

    Attributes:
        definitions: Definitions to create, in input order
        categories: Distinct category names, first spelling wins
        rejected: Rows that could not be imported
        batch_size: Definitions written per batch
    """

    definitions: list[ImportedDefinition] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    rejected: list[RejectedRow] = field(default_factory=list)
    batch_size: int = 10

    @property
    def occurrence_count(self) -> int:
        return sum(len(d.dates) for d in self.definitions)

    @property
    def fallbacks(self) -> list[ImportedDefinition]:
        return [d for d in self.definitions if d.fell_back]

    def batches(self) -> list[list[ImportedDefinition]]:
        """Definitions grouped for batched writes."""
        return [self.definitions[i : i + self.batch_size] for i in range(0, len(self.definitions), self.batch_size)]


def _distinct_categories(rows: Sequence[ImportRow]) -> list[str]:
    seen: dict[str, str] = {}
    for row in rows:
        if row.category and row.category.lower() not in seen:
            seen[row.category.lower()] = row.category
    return list(seen.values())


def preview_import(rows: Sequence[ImportRow], *, today: date | None = None) -> list[PreviewRow]:
    """Parse every row's schedule text for display before import.

    Args:
        rows: Normalized rows
        today: Reference date for "every N years" anchoring

    Returns:
        One PreviewRow per input row, in order
    """
    preview: list[PreviewRow] = []
    for number, row in enumerate(rows, start=1):
        result = parse_schedule(row.when, today=today)
        preview.append(
            PreviewRow(
                row_number=number,
                row=row,
                rule=result.rule,
                label=describe_rule(result.rule),
                fell_back=result.fell_back,
            )
        )
    return preview


def plan_import(
    rows: Sequence[ImportRow],
    year_start: int,
    year_end: int,
    *,
    today: date | None = None,
    batch_size: int | None = None,
) -> ImportPlan:
    """Parse rows and generate their occurrences for whole calendar years.

    Args:
        rows: Normalized rows
        year_start: First year to populate
        year_end: Last year to populate (inclusive)
        today: Reference date for "every N years" anchoring
        batch_size: Definitions per write batch (defaults to settings.import_batch_size)

    Returns:
        ImportPlan with definitions, categories and rejected rows

    Raises:
        EmptyImportError: If rows is empty
        WindowTooLargeError: If the year range exceeds the configured bound
    """
    if not rows:
        raise EmptyImportError()

    window_start, window_end = year_window(year_start, year_end)
    check_window(window_start, window_end)

    plan = ImportPlan(
        categories=_distinct_categories(rows),
        batch_size=batch_size or settings.import_batch_size,
    )

    for entry in preview_import(rows, today=today):
        try:
            dates = generate(entry.rule, window_start, window_end)
        except InvalidRuleError as e:
            log_import_row_rejected(entry.row_number, entry.row.title, e.code, e.details)
            plan.rejected.append(
                RejectedRow(row_number=entry.row_number, title=entry.row.title, code=e.code, details=e.details)
            )
            continue

        plan.definitions.append(
            ImportedDefinition(
                row_number=entry.row_number,
                category=entry.row.category,
                title=entry.row.title,
                rule=entry.rule,
                fell_back=entry.fell_back,
                dates=dates,
            )
        )

    log_import_summary(
        definitions=len(plan.definitions),
        occurrences=plan.occurrence_count,
        fallbacks=len(plan.fallbacks),
        rejected=len(plan.rejected),
        categories=len(plan.categories),
    )
    return plan
