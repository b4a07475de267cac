"""Recurrence observability.

Structured log events for generation, schedule parsing and batch import.
All context is passed as logger keyword arguments so it lands in the
record's ``extra`` dict.
"""

from datetime import date

from loguru import logger


def log_generation(
    *,
    rule_type: str,
    window_start: date,
    window_end: date,
    produced: int,
) -> None:
    """Log a completed generation call.

    Args:
        rule_type: Rule discriminator
        window_start: First date of the window
        window_end: Last date of the window
        produced: Number of dates produced
    """
    logger.debug(
        "[GENERATOR] Occurrences generated",
        rule_type=rule_type,
        window_start=window_start.isoformat(),
        window_end=window_end.isoformat(),
        produced=produced,
    )


def log_schedule_fallback(text: str, fallback_type: str) -> None:
    """Log schedule text that matched no pattern.

    Args:
        text: Original schedule text
        fallback_type: Type of the rule substituted for it
    """
    logger.warning(
        "[PARSER] Unrecognized schedule text, using fallback rule",
        text=text,
        fallback_type=fallback_type,
    )


def log_import_row_rejected(row_number: int, title: str, code: str, details: list[str]) -> None:
    """Log an import row whose rule could not be used."""
    logger.warning(
        "[IMPORT] Row rejected",
        row_number=row_number,
        title=title,
        code=code,
        details=details,
    )


def log_import_summary(
    *,
    definitions: int,
    occurrences: int,
    fallbacks: int,
    rejected: int,
    categories: int,
) -> None:
    """Log the outcome of planning a batch import.

    Args:
        definitions: Task definitions ready to be written
        occurrences: Occurrences generated across all definitions
        fallbacks: Rows whose schedule text fell back to the default rule
        rejected: Rows skipped because their rule was invalid
        categories: Distinct categories referenced by the import
    """
    logger.info(
        "[IMPORT] Import planned",
        definitions=definitions,
        occurrences=occurrences,
        fallbacks=fallbacks,
        rejected=rejected,
        categories=categories,
    )
