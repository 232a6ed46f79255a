"""
================================================================================
API Testing Framework
================================================================================

Components used by the API test suites.

Modules:
    - http_client: Resilient HTTP client with retry, timing and Allure logging
    - diagnostic_logger: Serialized, colorized console logging of exchanges
    - response_result: Immutable result of a completed request
    - config_loader: YAML configuration with environment overrides
    - settings: Resolved client settings with fallbacks
    - post_builder: Fluent builder for /posts payloads

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .diagnostic_logger import DiagnosticLogger, init_logger
from .http_client import (
    ApiClient,
    AttemptOutcome,
    HttpClientError,
    RetryExhaustedError,
)
from .post_builder import PostBuilder
from .response_result import ResponseResult
from .settings import TestSettings

__all__ = [
    "ApiClient",
    "AttemptOutcome",
    "ConfigLoader",
    "ConfigurationError",
    "DiagnosticLogger",
    "HttpClientError",
    "PostBuilder",
    "ResponseResult",
    "RetryExhaustedError",
    "TestSettings",
    "init_logger",
]
