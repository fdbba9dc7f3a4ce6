"""Shared test fixtures."""

from collections.abc import Iterator
from typing import Any

import pytest
from loguru import logger

from ytermusic.core.search.local_index import LocalIndex
from tests.unit.fakes import LOCAL_ITEMS


@pytest.fixture
def local_index() -> LocalIndex:
    """Return a local index holding three cached tracks."""
    return LocalIndex(LOCAL_ITEMS)


@pytest.fixture
def log_records() -> Iterator[list[dict[str, Any]]]:
    """Capture loguru records emitted during the test."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
