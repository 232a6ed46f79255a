"""
================================================================================
Test Settings
================================================================================

Resolves the values the API client needs (base URL, timeout, retry policy,
latency budget) from ConfigLoader and replaces blank or out-of-range values
with hard-coded fallbacks.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
from loguru import logger

from .config_loader import ConfigLoader
from .http_client import DEFAULT_RETRY_DELAY_MS, ApiClient


FALLBACK_BASE_URL = "http://localhost:5000"
FALLBACK_TIMEOUT_MS = 10000
FALLBACK_MAX_RESPONSE_MS = 1000


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _positive(key: str, value: Any, fallback: int) -> int:
    number = _as_number(value)
    if number is None or number <= 0:
        if value is not None:
            logger.warning(f"Ignoring invalid {key}={value!r}, using {fallback}")
        return fallback
    return int(number)


def _non_negative(key: str, value: Any, fallback: int) -> int:
    number = _as_number(value)
    if number is None or number < 0:
        if value is not None:
            logger.warning(f"Ignoring invalid {key}={value!r}, using {fallback}")
        return fallback
    return int(number)


@dataclass(frozen=True)
class TestSettings:
    """
    Resolved client configuration.

    Attributes:
        base_url: Absolute URL of the API under test
        timeout_ms: Per-attempt request timeout
        retry_count: Extra attempts after the first one
        retry_delay_ms: Wait between attempts
        max_response_ms: Latency budget asserted by the "fast" tests
    """
    __test__ = False

    base_url: str
    timeout_ms: int = FALLBACK_TIMEOUT_MS
    retry_count: int = 0
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS
    max_response_ms: int = FALLBACK_MAX_RESPONSE_MS

    @classmethod
    def load(cls, config: Optional[ConfigLoader] = None) -> "TestSettings":
        """
        Build settings from the YAML file, environment and fallbacks.

        Environment overrides: API_BASE_URL, API_TIMEOUT_MS, API_RETRY_COUNT,
        API_RETRY_DELAY_MS, API_MAX_RESPONSE_MS.
        """
        if config is None:
            config = ConfigLoader()

        base_url = config.get("api.base_url", "")
        if not isinstance(base_url, str) or not base_url.strip():
            base_url = FALLBACK_BASE_URL

        return cls(
            base_url=base_url.strip(),
            timeout_ms=_positive(
                "api.timeout_ms", config.get("api.timeout_ms"), FALLBACK_TIMEOUT_MS
            ),
            retry_count=_non_negative(
                "api.retry_count", config.get("api.retry_count"), 0
            ),
            retry_delay_ms=_non_negative(
                "api.retry_delay_ms",
                config.get("api.retry_delay_ms"),
                DEFAULT_RETRY_DELAY_MS,
            ),
            max_response_ms=_positive(
                "api.max_response_ms",
                config.get("api.max_response_ms"),
                FALLBACK_MAX_RESPONSE_MS,
            ),
        )

    def client(self, transport: Optional[httpx.BaseTransport] = None) -> ApiClient:
        """Create an ApiClient bound to these settings."""
        return ApiClient(
            self.base_url,
            timeout_ms=self.timeout_ms,
            retry_count=self.retry_count,
            retry_delay_ms=self.retry_delay_ms,
            transport=transport,
        )


__all__ = [
    "TestSettings",
    "FALLBACK_BASE_URL",
    "FALLBACK_TIMEOUT_MS",
    "FALLBACK_MAX_RESPONSE_MS",
]
