"""Spreadsheet row normalization for task import.

Rows arrive as header -> value mappings read from the first sheet of an
uploaded workbook. Header spelling varies between spreadsheets, so each
column is looked up under several aliases.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

CATEGORY_COLUMNS = ("category", "Category")
TITLE_COLUMNS = ("Task", "task", "Title", "title")
WHEN_COLUMNS = ("When", "when", "Recurrence", "recurrence")


@dataclass(frozen=True)
class ImportRow:
    """One task row from an import spreadsheet.

    Attributes:
        category: Category name (may be empty)
        title: Task title
        when: Free-text schedule description
    """

    category: str
    title: str
    when: str


def _first_value(row: Mapping[str, Any], columns: tuple[str, ...]) -> str:
    for column in columns:
        value = row.get(column)
        if value not in (None, ""):
            return str(value).strip()
    return ""


def normalize_row(row: Mapping[str, Any]) -> ImportRow | None:
    """Map a raw spreadsheet row to an ImportRow.

    Returns:
        The normalized row, or None when the title or schedule text is missing
    """
    title = _first_value(row, TITLE_COLUMNS)
    when = _first_value(row, WHEN_COLUMNS)
    if not title or not when:
        return None
    return ImportRow(category=_first_value(row, CATEGORY_COLUMNS), title=title, when=when)


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> list[ImportRow]:
    """Normalize raw rows, dropping those without a title or schedule text."""
    out: list[ImportRow] = []
    for row in rows:
        normalized = normalize_row(row)
        if normalized is not None:
            out.append(normalized)
    return out
