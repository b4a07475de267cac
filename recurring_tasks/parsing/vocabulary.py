"""Word tables used by the schedule text parser.

Month names map to 1-12 in both full and three-letter forms. Weekday names
map to the stored numbering (0 = Sunday ... 6 = Saturday).
"""

MONTH_NAMES = [
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
]

MONTH_MAP: dict[str, int] = {name: i for i, name in enumerate(MONTH_NAMES, start=1)}
MONTH_MAP.update({name[:3]: i for name, i in list(MONTH_MAP.items())})
MONTH_MAP["sept"] = 9

WEEKDAY_MAP: dict[str, int] = {
    "sunday": 0,
    "monday": 1,
    "tuesday": 2,
    "wednesday": 3,
    "thursday": 4,
    "friday": 5,
    "saturday": 6,
}

ORDINAL_MAP: dict[str, int] = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "last": 5,
}

# Longest alternatives first so "september" wins over "sep"
MONTH_PATTERN = "|".join(sorted(MONTH_MAP, key=len, reverse=True))
FULL_MONTH_PATTERN = "|".join(MONTH_NAMES)
WEEKDAY_PATTERN = "|".join(WEEKDAY_MAP)
ORDINAL_PATTERN = "|".join(ORDINAL_MAP)


def month_number(token: str) -> int | None:
    """Month number for a full or abbreviated name, or None if unknown."""
    return MONTH_MAP.get(token.strip().lower())
