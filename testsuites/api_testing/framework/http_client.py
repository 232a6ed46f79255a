"""
================================================================================
Resilient HTTP Client with Allure Integration
================================================================================

HTTP client used by every API test suite:
    - One httpx session bound to a single base URL and timeout
    - Bounded retry with a fixed delay on transport failures and timeouts
    - Per-attempt latency measurement
    - Serialized console logging of every exchange
    - Allure step with request/response details and a cURL command

Any HTTP status (4xx/5xx included) is returned to the caller as a normal
ResponseResult so that negative tests can assert on it. Only network-level
failures are retried.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import allure
import httpx
from allure_commons.types import AttachmentType

from .diagnostic_logger import DiagnosticLogger
from .response_result import ResponseResult


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

DEFAULT_CONTENT_TYPE = "application/json"
DEFAULT_RETRY_COUNT = 0
DEFAULT_RETRY_DELAY_MS = 200


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class RetryExhaustedError(HttpClientError):
    """Raised when every allowed attempt failed with a transient error."""

    def __init__(
        self,
        method: str,
        path: str,
        attempts: int,
        last_error: Optional[BaseException],
    ) -> None:
        self.method = method
        self.path = path
        self.attempts = attempts
        self.last_error = last_error
        noun = "attempt" if attempts == 1 else "attempts"
        cause = f"{type(last_error).__name__}: {last_error}" if last_error else "unknown error"
        super().__init__(f"{method} {path} failed after {attempts} {noun}. Last error: {cause}")


class AttemptOutcome(Enum):
    """Classification of a single network attempt."""
    SUCCESS = "success"
    TRANSPORT_ERROR = "transport_error"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class AttemptResult:
    """Tagged result of one attempt: a response or the transient error."""
    outcome: AttemptOutcome
    response: Optional[ResponseResult] = None
    error: Optional[Exception] = None


class ApiClient:
    """
    HTTP client bound to one base URL with retry on transient failures.

    Features:
        - Transport errors and timeouts are retried up to ``retry_count`` extra
          times, sleeping ``retry_delay_ms`` between attempts (never after the last)
        - Non-2xx responses are NOT errors and are never retried
        - ``Accept: application/json`` sent on every request
        - Full Allure reporting with cURL command generation

    Usage:
        >>> with ApiClient("http://localhost:5000", timeout_ms=5000, retry_count=2) as api:
        ...     res = api.send("GET", "/posts/1")
        ...     assert res.status_code == 200
    """

    def __init__(
        self,
        base_url: str,
        timeout_ms: float,
        retry_count: int = DEFAULT_RETRY_COUNT,
        retry_delay_ms: float = DEFAULT_RETRY_DELAY_MS,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize the client and its HTTP session.

        Args:
            base_url: Absolute http(s) URL all request paths are resolved against
            timeout_ms: Per-attempt timeout in milliseconds
            retry_count: Extra attempts allowed after the first one
            retry_delay_ms: Wait between consecutive attempts in milliseconds
            transport: Optional httpx transport (used by tests to stub the network)

        Raises:
            HttpClientError: On an invalid base URL or out-of-range settings
        """
        if timeout_ms <= 0:
            raise HttpClientError(f"Timeout must be positive, got {timeout_ms}ms")
        if retry_count < 0:
            raise HttpClientError(f"Retry count must not be negative, got {retry_count}")
        if retry_delay_ms < 0:
            raise HttpClientError(f"Retry delay must not be negative, got {retry_delay_ms}ms")

        self.base_url = self._validate_base_url(base_url)
        self.timeout_ms = timeout_ms
        self.retry_count = int(retry_count)
        self.retry_delay_ms = retry_delay_ms

        self.session: Optional[httpx.Client] = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout_ms / 1000),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.session:
            self.session.close()
            self.session = None

    def send(
        self,
        method: str,
        path: str,
        payload: Optional[str] = None,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> ResponseResult:
        """
        Send a request, retrying transport failures and timeouts.

        A ``None`` payload sends no body and no Content-Type header. Any string,
        the empty string included, is sent verbatim with the Content-Type set.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH)
            path: Request path relative to base_url
            payload: Raw request body text
            content_type: Media type declared for the body

        Returns:
            ResponseResult of the first attempt that got any HTTP response

        Raises:
            RetryExhaustedError: When every attempt failed with a transient error
            HttpClientError: On a non-transient failure such as an undecodable body
        """
        if self.session is None:
            raise HttpClientError("ApiClient has been closed")

        method = method.upper()
        DiagnosticLogger.log_request(method, path, payload)

        total_attempts = self.retry_count + 1
        last_error: Optional[Exception] = None

        for attempt in range(total_attempts):
            try:
                result = self._attempt(method, path, payload, content_type)
            except httpx.HTTPError as e:
                error = HttpClientError(f"{method} {path} failed: {type(e).__name__}: {e}")
                DiagnosticLogger.log_error(str(error), e)
                raise error from e

            if result.outcome is AttemptOutcome.SUCCESS:
                response = result.response
                DiagnosticLogger.log_response(
                    response.status_code, response.body, response.elapsed_ms
                )
                self._log_to_allure(method, path, payload, content_type, response)
                return response

            last_error = result.error
            if attempt < self.retry_count:
                DiagnosticLogger.log_retry(
                    attempt + 1, total_attempts, self.retry_delay_ms, last_error
                )
                time.sleep(self.retry_delay_ms / 1000)

        error = RetryExhaustedError(method, path, total_attempts, last_error)
        DiagnosticLogger.log_error(str(error), last_error)
        raise error from last_error

    def _attempt(
        self,
        method: str,
        path: str,
        payload: Optional[str],
        content_type: str,
    ) -> AttemptResult:
        """
        Run one network round trip and classify its outcome.

        The whole attempt, body download included, shares one deadline of
        ``timeout_ms``. httpx only bounds each connect/read/write step, so the
        body is streamed and the deadline checked between chunks.

        Raises:
            httpx.HTTPError: For failures that are not transport-level
        """
        request = self.session.build_request(
            method,
            path,
            content=payload.encode("utf-8") if payload is not None else None,
            headers=self._body_headers(payload, content_type),
        )

        started = time.perf_counter()
        deadline = started + self.timeout_ms / 1000
        try:
            response = self.session.send(request, stream=True)
            try:
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    if time.perf_counter() > deadline:
                        raise httpx.ReadTimeout(
                            f"Attempt exceeded the {self.timeout_ms:.0f}ms timeout",
                            request=request,
                        )
            finally:
                response.close()
        except httpx.TimeoutException as e:
            return AttemptResult(AttemptOutcome.TIMEOUT, error=e)
        except httpx.TransportError as e:
            return AttemptResult(AttemptOutcome.TRANSPORT_ERROR, error=e)
        elapsed_ms = (time.perf_counter() - started) * 1000

        body = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
        return AttemptResult(
            AttemptOutcome.SUCCESS,
            response=ResponseResult(response.status_code, body, elapsed_ms),
        )

    @staticmethod
    def _body_headers(payload: Optional[str], content_type: str) -> Dict[str, str]:
        if payload is None:
            return {}
        if ";" in content_type:
            # Caller supplied its own parameters
            return {"Content-Type": content_type}
        return {"Content-Type": f"{content_type}; charset=utf-8"}

    @staticmethod
    def _validate_base_url(base_url: str) -> str:
        """Reject anything that is not an absolute http(s) URL."""
        if not isinstance(base_url, str) or not base_url.strip():
            raise HttpClientError("Base URL must be a non-empty string")

        try:
            url = httpx.URL(base_url.strip())
        except httpx.InvalidURL as e:
            raise HttpClientError(f"Invalid base URL {base_url!r}: {e}") from e

        if url.scheme not in ("http", "https") or not url.host:
            raise HttpClientError(
                f"Base URL must be an absolute http(s) URL, got {base_url!r}"
            )
        return base_url.strip()

    def _log_to_allure(
        self,
        method: str,
        path: str,
        payload: Optional[str],
        content_type: str,
        response: ResponseResult,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL
            - Request body (if present)
            - cURL command for reproduction
            - Response status and latency
            - Response body (truncated if too long)
        """
        full_url = f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
        status_emoji = "✅" if response.status_code < 400 else "❌"
        step_title = f"{status_emoji} {method} {path} → {response.status_code}"

        with allure.step(step_title):
            allure.attach(
                full_url,
                name="🔗 Request URL",
                attachment_type=AttachmentType.TEXT
            )

            if payload:
                allure.attach(
                    DiagnosticLogger.format_json(payload),
                    name="📤 Request Body",
                    attachment_type=AttachmentType.TEXT
                )

            headers = {"Accept": "application/json", **self._body_headers(payload, content_type)}
            allure.attach(
                self._build_curl(method, full_url, headers, payload),
                name="🔧 cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_emoji} {response.status_code} ({response.elapsed_ms:.0f}ms)",
                name="📥 Response Status",
                attachment_type=AttachmentType.TEXT
            )

            response_content = DiagnosticLogger.format_json(response.body) or "<empty>"
            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="📥 Response Body",
                attachment_type=AttachmentType.TEXT
            )

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        payload: Optional[str],
    ) -> str:
        """
        Build cURL command for request reproduction.

        An empty-string payload is kept as ``-d ''`` so the command sends an
        empty body, matching what the client actually sent.
        """
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if payload is not None:
            escaped = payload.replace("'", "'\\''")
            parts.append(f"-d '{escaped}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


__all__ = [
    "ApiClient",
    "AttemptOutcome",
    "AttemptResult",
    "HttpClientError",
    "RetryExhaustedError",
    "DEFAULT_CONTENT_TYPE",
    "DEFAULT_RETRY_DELAY_MS",
]
