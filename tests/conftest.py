"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from datetime import date

import pytest
from loguru import logger


@pytest.fixture
def today() -> date:
    """Fixed reference date so "every N years" anchoring is reproducible."""
    return date(2026, 10, 19)


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test.

    Yields the list of record dicts; each has "level", "message" and "extra".
    """
    records: list[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
