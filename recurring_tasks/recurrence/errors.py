"""Recurrence error types.

Standard error codes:
- SCHEMA_VIOLATION: Stored rule payload does not match any rule variant
- MISSING_FIELD: A field required by the rule's type (or range end) is absent
- OUT_OF_RANGE: A numeric field is outside its declared bounds
- EMPTY_SET: A set-valued field (months, dates, days of week) is empty
- WINDOW_TOO_LARGE: Requested generation window exceeds the configured bound
"""


class InvalidRuleError(ValueError):
    """Raised when a recurrence rule is structurally malformed.

    Raised before any date is computed, so generation never emits partial results.

    Attributes:
        code: Error code (e.g., "MISSING_FIELD", "OUT_OF_RANGE")
        details: List of error detail strings
    """

    def __init__(self, code: str, details: list[str]):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")


class WindowTooLargeError(ValueError):
    """Raised when a generation window spans more years than allowed.

    Attributes:
        years: Number of calendar years the window touches
        max_years: Configured upper bound
    """

    def __init__(self, years: int, max_years: int) -> None:
        self.years = years
        self.max_years = max_years
        super().__init__(f"WINDOW_TOO_LARGE: window spans {years} years (max {max_years})")
