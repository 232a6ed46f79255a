"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project-wide markers and tags collected items by suite.

================================================================================
"""

import os

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - cosmetic or informational checks"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "mutation: Negative tests with malformed or unsupported input"
    )
    config.addinivalue_line(
        "markers", "performance: Latency budget checks"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: Tests that talk to the API under test"
    )
    config.addinivalue_line(
        "markers", "unit: Framework unit tests (no network)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "health: Tests related to the health endpoint"
    )
    config.addinivalue_line(
        "markers", "posts: Tests related to the posts resource"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add suite markers based on the test's directory."""
    for item in items:
        path = str(item.fspath)
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)
        if f"{os.sep}unit{os.sep}" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Posts API Automation Testing Framework",
        "=" * 60,
        "",
    ]
