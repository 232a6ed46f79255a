"""
================================================================================
Response Result
================================================================================

Immutable record of one completed HTTP exchange, handed back to tests for
assertions.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ResponseResult:
    """
    Outcome of a completed request attempt.

    Attributes:
        status_code: HTTP status returned by the server (any value, 4xx/5xx included)
        body: Raw response text, may be empty or non-JSON
        elapsed_ms: Wall-clock duration of the network round trip in milliseconds
    """
    status_code: int
    body: str
    elapsed_ms: float


__all__ = [
    "ResponseResult",
]
