"""Fixtures shared by the framework unit tests."""

from __future__ import annotations

from typing import Any, Dict, Generator, List

import pytest
from loguru import logger


@pytest.fixture
def log_records() -> Generator[List[Dict[str, Any]], None, None]:
    """Capture Loguru records emitted during the test."""
    records: List[Dict[str, Any]] = []
    handler_id = logger.add(
        lambda message: records.append(message.record),
        format="{message}",
        level="DEBUG",
    )
    yield records
    logger.remove(handler_id)


@pytest.fixture
def sleeps(monkeypatch) -> List[float]:
    """Replace the client's sleep with a recorder returning immediately."""
    calls: List[float] = []
    monkeypatch.setattr(
        "testsuites.api_testing.framework.http_client.time.sleep",
        calls.append,
    )
    return calls
