"""
================================================================================
Diagnostic Logger
================================================================================

Process-wide console logger for request/response/error events.

Features:
    - One lock serializes every emission so that the lines of a single
      request (or response) never interleave with another thread's lines
    - JSON payloads are pretty-printed, anything else is printed verbatim
    - Status codes drive the visual severity (2xx success, 4xx/5xx error,
      anything else warning)
    - Output goes through Loguru with colour markup

Usage:
    >>> DiagnosticLogger.log_request("POST", "/posts", '{"title": "hello"}')
    >>> DiagnosticLogger.log_response(201, '{"id": 1}', 12.4)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import sys
import threading
from typing import Optional

from loguru import logger


DEFAULT_LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | {message}"
)

_logger_initialized: bool = False


def init_logger(level: str = "INFO", format_str: Optional[str] = None) -> None:
    """
    Configure the Loguru console sink used by the harness.

    Safe to call more than once; only the first call has an effect.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format_str: Custom Loguru format string
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=format_str or DEFAULT_LOG_FORMAT,
        colorize=True,
    )
    _logger_initialized = True


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def _severity(status_code: int) -> str:
    """Map an HTTP status code to a Loguru level."""
    if 200 <= status_code < 300:
        return "SUCCESS"
    if status_code >= 400:
        return "ERROR"
    return "WARNING"


class DiagnosticLogger:
    """
    Serialized, colorized logger for HTTP exchanges.

    All methods are classmethods sharing one class-level lock, so the
    logger behaves as a process-wide singleton without needing an instance.
    """

    _lock = threading.Lock()

    @classmethod
    def log_request(
        cls,
        method: str,
        path: str,
        payload: Optional[str] = None,
    ) -> None:
        """Log an outgoing request. Blank payloads are not shown."""
        with cls._lock:
            log = logger.opt(colors=True)
            log.info("<cyan>→ {} {}</cyan>", method.upper(), path)
            if not _is_blank(payload):
                log.info("<cyan>   Body: {}</cyan>", cls.format_json(payload))

    @classmethod
    def log_response(cls, status_code: int, body: str, elapsed_ms: float) -> None:
        """Log a received response with status-dependent severity."""
        with cls._lock:
            log = logger.opt(colors=True)
            log.log(_severity(status_code), "← {} ({:.0f}ms)", status_code, elapsed_ms)
            if not _is_blank(body):
                log.log(
                    _severity(status_code),
                    "<dim>   Body: {}</dim>",
                    cls.format_json(body),
                )

    @classmethod
    def log_retry(
        cls,
        attempt: int,
        total_attempts: int,
        delay_ms: float,
        cause: BaseException,
    ) -> None:
        """Log a transient failure that is about to be retried."""
        with cls._lock:
            logger.opt(colors=True).warning(
                "<yellow>↻ Attempt {}/{} failed: {}. Retrying in {:.0f}ms</yellow>",
                attempt,
                total_attempts,
                cause,
                delay_ms,
            )

    @classmethod
    def log_error(cls, message: str, cause: Optional[BaseException] = None) -> None:
        """Log a terminal error, optionally followed by its cause."""
        with cls._lock:
            log = logger.opt(colors=True)
            log.error("<red>✗ {}</red>", message)
            if cause is not None:
                log.error("<red>   {}: {}</red>", type(cause).__name__, cause)

    @staticmethod
    def format_json(text: str) -> str:
        """
        Pretty-print text as JSON when it parses, otherwise return it unchanged.
        """
        try:
            return json.dumps(json.loads(text), ensure_ascii=False, indent=2)
        except (ValueError, TypeError, RecursionError):
            return text


__all__ = [
    "DiagnosticLogger",
    "init_logger",
]
