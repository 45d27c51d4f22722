"""Unit test configuration.

Unit tests should be fast and isolated: the only database is in-memory SQLite.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect messages logged through loguru during a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message), level="DEBUG")
    yield messages
    logger.remove(handler_id)
