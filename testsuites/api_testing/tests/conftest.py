"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the API test suites.

Fixtures:
    - settings: Resolved TestSettings (base URL points at the demo API when
      demo.autostart is enabled)
    - demo_base_url: Demo API started in-process under uvicorn, or None
    - api_ready: Health check run once before the suites
    - api: ApiClient bound to the settings, closed after each test

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import dataclasses
import socket
import threading
import time
from typing import Generator, Optional

import allure
import pytest
import uvicorn
from loguru import logger

from demo_api import create_app

from ..framework import ApiClient, ConfigLoader, HttpClientError, TestSettings


# Seconds to wait for the in-process demo API to accept connections
SERVER_START_TIMEOUT = 10.0


def _free_port(host: str) -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind((host, 0))
        return sock.getsockname()[1]


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """Provide configuration loader instance."""
    return ConfigLoader()


@pytest.fixture(scope="session")
def demo_base_url(config: ConfigLoader) -> Generator[Optional[str], None, None]:
    """
    Start the demo API in a background thread when demo.autostart is enabled.

    A free port is picked per session so parallel xdist workers never collide.
    Yields None when the suites should target the configured api.base_url.
    """
    if not config.get("demo.autostart", True):
        yield None
        return

    host = str(config.get("demo.host", "127.0.0.1"))
    port = _free_port(host)
    server = uvicorn.Server(
        uvicorn.Config(create_app(), host=host, port=port, log_level="warning")
    )
    thread = threading.Thread(target=server.run, name="demo-api", daemon=True)
    thread.start()

    deadline = time.monotonic() + SERVER_START_TIMEOUT
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            raise RuntimeError(f"Demo API failed to start on {host}:{port}")
        time.sleep(0.05)

    logger.info(f"Demo API running at http://{host}:{port}")
    yield f"http://{host}:{port}"

    server.should_exit = True
    thread.join(timeout=5)


@pytest.fixture(scope="session")
def settings(config: ConfigLoader, demo_base_url: Optional[str]) -> TestSettings:
    """Resolved client settings for the API suites."""
    resolved = TestSettings.load(config)
    if demo_base_url:
        resolved = dataclasses.replace(resolved, base_url=demo_base_url)
    return resolved


@pytest.fixture(scope="session", autouse=True)
def api_ready(settings: TestSettings) -> None:
    """Fail fast when the API under test does not answer /health with 200."""
    with settings.client() as client:
        try:
            health = client.send("GET", "/health")
        except HttpClientError as e:
            raise RuntimeError(
                "API is not reachable. Make sure the API is running."
            ) from e

    if health.status_code != 200:
        raise RuntimeError(
            f"API health check failed with status {health.status_code}"
        )


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture
def api(settings: TestSettings) -> Generator[ApiClient, None, None]:
    """
    Provide an ApiClient configured from settings.

    Usage:
        def test_example(api):
            res = api.send("GET", "/posts/1")
            assert res.status_code == 200
    """
    with settings.client() as client:
        yield client


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )
