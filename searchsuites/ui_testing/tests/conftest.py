"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixtures for the end-to-end search tests.

Key Features:
- One browser session per test run, opened and navigated once, closed at
  teardown
- Page Object fixtures bound to that session
- Screenshot capture on test failure

================================================================================
"""

from typing import Generator

import pytest

from searchsuites.common import ConfigLoader, RunSettings, get_logger
from searchsuites.ui_testing.framework.browser_manager import BrowserSession
from searchsuites.ui_testing.pages.search_page import SearchPage


# ================================================================================
# Session Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def run_settings() -> RunSettings:
    """Settings resolved once from config/config.yaml and the environment."""
    ConfigLoader.reset()
    return RunSettings.from_config(ConfigLoader())


@pytest.fixture(scope="session")
def browser_session(run_settings: RunSettings) -> Generator[BrowserSession, None, None]:
    """
    Session-scoped browser fixture.

    Opens the configured browser, navigates to the active environment and
    closes the browser after the last test.
    """
    session = BrowserSession(settings=run_settings)
    session.open()
    session.navigate(run_settings.login_url)
    yield session
    session.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def search_page(browser_session: BrowserSession) -> SearchPage:
    """Provides the SearchPage bound to the shared browser session."""
    return SearchPage.for_session(browser_session)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Capture a screenshot when a UI test fails.

    The screenshot lands in the run's screenshot folder and is attached to
    the Allure report.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when == "call" and report.failed:
        session = getattr(item, "funcargs", {}).get("browser_session")
        if session is None:
            page = getattr(item, "funcargs", {}).get("search_page")
            session = page.actions.session if page is not None else None
        if session is not None:
            path = session.capture_screenshot("pytest", item.name)
            if path is None:
                get_logger("pytest").warning(f"Failed to capture screenshot for {item.name}")
