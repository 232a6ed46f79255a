"""
Repository-level pytest configuration.

Why this exists:
  - Configure the Loguru console sink once per test session
  - Expose the repository root to fixtures that need file paths

Configuration values live in testsuites/config/config.yaml and can be
overridden with environment variables (API_BASE_URL, API_RETRY_COUNT, ...).
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from testsuites.api_testing.framework import ConfigLoader, init_logger


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _configure_logging() -> Generator[None, None, None]:
    """Install the colorized console sink at the configured level."""
    init_logger(level=str(ConfigLoader().get("logging.level", "INFO")))
    yield
