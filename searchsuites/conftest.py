"""
================================================================================
Suite Pytest Configuration
================================================================================

Registers the markers shared by the unit, API and UI suites and tags
collected tests with their domain marker.

================================================================================
"""

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

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests against a live browser or endpoint"
    )
    config.addinivalue_line(
        "markers", "unit: Offline tests of the framework itself"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: API-specific tests"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )


def pytest_collection_modifyitems(config, items):
    """Add domain markers based on the directory a test lives in."""
    for item in items:
        path = str(item.fspath)
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        if "unit" in path.replace("\\", "/").split("/"):
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Search UI Automation Suites",
        "=" * 60,
        "",
    ]
