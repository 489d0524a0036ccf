"""
================================================================================
Unit Test Fixtures
================================================================================

In-memory stand-ins for the Playwright objects the framework talks to, so
the action wrapper, session and page objects can be tested without a
browser.

    FakePage.elements maps a rendered selector (Locator.to_selector()) to a
    list of FakeElement. Tests mutate it to shape the page.

================================================================================
"""

from pathlib import Path
from typing import Dict, List, Optional

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from searchsuites.common import ConfigLoader, Environment, RunSettings, reset_logger


QA_URL = "https://qa.search.example"
STAGE_URL = "https://stage.search.example"


class FakeElement:
    """One element on the fake page."""

    def __init__(self, text: str = "", visible: bool = True, click_error: Optional[Exception] = None):
        self.text = text
        self.visible = visible
        self.click_error = click_error
        self.style: Optional[str] = None
        self.value = ""
        self.clicks = 0
        self.hovered = False
        self.scrolled = False


class FakeMatches:
    """Stand-in for a Playwright Locator; element methods act on the first match."""

    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def _elements(self) -> List[FakeElement]:
        return self.page.elements.get(self.selector, [])

    @property
    def _element(self) -> FakeElement:
        if not self._elements:
            raise PlaywrightTimeoutError(f"Timeout waiting for {self.selector}")
        return self._elements[0]

    @property
    def first(self) -> "FakeMatches":
        return self

    def count(self) -> int:
        self.page.presence_checks += 1
        return len(self._elements)

    def all(self) -> List["FakeMatches"]:
        return [FakeMatches(self.page, self.selector) for _ in self._elements]

    def is_visible(self) -> bool:
        return bool(self._elements) and self._elements[0].visible

    def click(self, timeout=None) -> None:
        element = self._element
        if element.click_error is not None:
            raise element.click_error
        element.clicks += 1

    def clear(self, timeout=None) -> None:
        self._element.value = ""

    def fill(self, value: str, timeout=None) -> None:
        self._element.value = value

    def hover(self, timeout=None) -> None:
        self._element.hovered = True

    def scroll_into_view_if_needed(self, timeout=None) -> None:
        self._element.scrolled = True

    def inner_text(self, timeout=None) -> str:
        return self._element.text

    def get_attribute(self, name: str, timeout=None) -> Optional[str]:
        if self.page.highlight_error is not None:
            raise self.page.highlight_error
        return self._element.style

    def evaluate(self, expression: str, arg=None, timeout=None) -> None:
        if self.page.highlight_error is not None:
            raise self.page.highlight_error
        self._element.style = arg

    def wait_for(self, state: str = "visible", timeout=None) -> None:
        self.page.waits.append((self.selector, state, timeout))
        elements = self._elements
        if state == "attached":
            ok = bool(elements)
        elif state == "visible":
            ok = bool(elements) and elements[0].visible
        elif state == "hidden":
            ok = not elements or not elements[0].visible
        else:
            ok = not elements
        if not ok:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector} to be {state}")


class FakeKeyboard:
    def __init__(self):
        self.pressed: List[str] = []

    def press(self, key: str) -> None:
        self.pressed.append(key)


class FakePage:
    """Stand-in for a Playwright Page."""

    def __init__(self):
        self.elements: Dict[str, List[FakeElement]] = {}
        self.keyboard = FakeKeyboard()
        self.visited: List[str] = []
        self.goto_error: Optional[Exception] = None
        self.highlight_error: Optional[Exception] = None
        self.presence_checks = 0
        self.waits: list = []
        self.screenshots: List[str] = []

    def add(self, locator, *elements: FakeElement) -> None:
        self.elements.setdefault(locator.to_selector(), []).extend(elements)

    def locator(self, selector: str) -> FakeMatches:
        return FakeMatches(self, selector)

    def goto(self, url: str) -> None:
        if self.goto_error is not None:
            raise self.goto_error
        self.visited.append(url)

    def title(self) -> str:
        return "Fake Search"

    def screenshot(self, path: str, full_page: bool = False) -> bytes:
        Path(path).write_bytes(b"\x89PNG")
        self.screenshots.append(path)
        return b"\x89PNG"

    def close(self) -> None:
        pass


class FakeSession:
    """Stand-in for an open BrowserSession."""

    def __init__(self, settings: RunSettings, page: FakePage):
        self.settings = settings
        self.page = page
        self.captured: List[tuple] = []

    def capture_screenshot(self, context: str = "", operation: str = "") -> Path:
        self.captured.append((context, operation))
        return Path(f"{context}_{operation}.png")

    def navigate(self, url: str) -> None:
        self.page.goto(url)


# ================================================================================
# Fake Playwright launcher chain (sync_playwright().start().chromium.launch())
# ================================================================================

class FakeContext:
    def __init__(self, browser: "FakeBrowser", options: dict):
        self.browser = browser
        self.options = options
        self.closed = False
        self.page = FakePage()

    def new_page(self) -> FakePage:
        return self.page

    def close(self) -> None:
        self.closed = True
        if self.browser.context_close_error is not None:
            raise self.browser.context_close_error


class FakeBrowser:
    def __init__(self, options: dict):
        self.options = options
        self.closed = False
        self.context_close_error: Optional[Exception] = None
        self.contexts: List[FakeContext] = []

    def new_context(self, **options) -> FakeContext:
        context = FakeContext(self, options)
        self.contexts.append(context)
        return context

    def close(self) -> None:
        self.closed = True


class FakeBrowserType:
    def __init__(self, name: str, launch_error: Optional[Exception] = None):
        self.name = name
        self.launch_error = launch_error
        self.launched: List[FakeBrowser] = []

    def launch(self, **options) -> FakeBrowser:
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(options)
        self.launched.append(browser)
        return browser


class FakePlaywright:
    def __init__(self):
        self.chromium = FakeBrowserType("chromium")
        self.firefox = FakeBrowserType("firefox")
        self.started = 0
        self.stopped = 0

    def start(self) -> "FakePlaywright":
        self.started += 1
        return self

    def stop(self) -> None:
        self.stopped += 1


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(autouse=True)
def _isolated_logging(monkeypatch, tmp_path):
    """Send harness logs to a temporary file for each test."""
    monkeypatch.setenv("LOGGING_FILE", str(tmp_path / "logs" / "debug.log"))
    ConfigLoader.reset()
    reset_logger()
    yield
    reset_logger()
    ConfigLoader.reset()


@pytest.fixture
def settings() -> RunSettings:
    return RunSettings(
        browser="chrome",
        environment=Environment.QA,
        environments={
            Environment.QA: QA_URL,
            Environment.STAGE: STAGE_URL,
            Environment.DEV: "",
        },
        headless=True,
        wait_timeout=2,
        action_timeout=100,
        highlight=True,
    )


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def fake_session(settings, fake_page) -> FakeSession:
    return FakeSession(settings, fake_page)


@pytest.fixture
def fake_playwright(monkeypatch) -> FakePlaywright:
    """Patch sync_playwright() in the browser manager with the fake chain."""
    playwright = FakePlaywright()
    monkeypatch.setattr(
        "searchsuites.ui_testing.framework.browser_manager.sync_playwright",
        lambda: playwright,
    )
    return playwright


__all__ = [
    "FakeElement",
    "FakePage",
    "FakeSession",
    "PlaywrightError",
    "PlaywrightTimeoutError",
    "QA_URL",
    "STAGE_URL",
]
