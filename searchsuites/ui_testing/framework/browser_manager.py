"""
================================================================================
Browser Manager
================================================================================

Lifecycle of the single browser session used by a test run.

Features:
    - Browser selection from configuration (CHROME, FIREFOX)
    - Optional browser executables from <repo-root>/drivers/
    - Maximized 1920x1080 window (fixed viewport on Firefox)
    - Per-run screenshot directory (screenshots/run_<timestamp>/)
    - Navigation restricted to the configured environments

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import allure
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Error as PlaywrightError,
    Page,
    Playwright,
    sync_playwright,
)

from searchsuites.common.config_loader import PROJECT_ROOT, RunSettings
from searchsuites.common.log_setup import get_logger

from .errors import (
    NavigationFailedError,
    UnsupportedTargetError,
    format_exception,
)


DRIVER_FOLDER = "drivers"
SCREENSHOT_FOLDER = "screenshots"


class BrowserKind(Enum):
    """
    Supported browsers.

    Each member maps to a Playwright launcher and the file name of an
    optional browser executable under the drivers folder.
    """

    CHROME = ("chromium", "chrome")
    FIREFOX = ("firefox", "firefox")

    def __init__(self, launcher: str, executable: str) -> None:
        self.launcher = launcher
        self.executable = executable

    @classmethod
    def parse(cls, value: Union[str, "BrowserKind"]) -> "BrowserKind":
        """
        Resolve a browser kind from its case-insensitive name.

        Raises:
            UnsupportedTargetError: If the name is not a supported browser
        """
        if isinstance(value, cls):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise UnsupportedTargetError(
                f"Unsupported browser type: {value}", name=str(value)
            ) from None


class SessionState(Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class BrowserSession:
    """
    Owns one browser session for a test run.

    Usage:
        session = BrowserSession()
        session.open()
        session.navigate(session.settings.login_url)
        ...
        session.close()

        # Or
        with BrowserSession() as session:
            session.navigate(session.settings.login_url)
    """

    # Extra launch options per browser kind
    LAUNCH_OPTIONS: Dict[BrowserKind, Dict[str, Any]] = {
        BrowserKind.CHROME: {"args": ["--start-maximized", "--window-size=1920,1080"]},
        BrowserKind.FIREFOX: {},
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "ignore_https_errors": True,
    }

    # Chrome sizes the page to its maximized window; Firefox has no
    # maximize switch and gets a fixed viewport of the same size
    VIEWPORT_OPTIONS: Dict[BrowserKind, Dict[str, Any]] = {
        BrowserKind.CHROME: {"no_viewport": True},
        BrowserKind.FIREFOX: {"viewport": {"width": 1920, "height": 1080}},
    }

    def __init__(
        self,
        settings: Optional[RunSettings] = None,
        log=None,
        project_root: Path = PROJECT_ROOT,
    ):
        """
        Initialize browser session.

        Args:
            settings: Run settings. Loaded from configuration if None.
            log: Bound logger. Defaults to the shared harness logger.
            project_root: Root holding the drivers/ and screenshots/ folders.
        """
        self.settings = settings or RunSettings.from_config()
        self.log = log or get_logger(type(self).__name__)
        self.project_root = Path(project_root)

        self.state = SessionState.UNOPENED
        self.browser_kind: Optional[BrowserKind] = None
        self.artifact_dir: Optional[Path] = None

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def __enter__(self) -> "BrowserSession":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.state is SessionState.OPEN:
            self.close()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self, browser: Union[str, BrowserKind, None] = None) -> Page:
        """
        Launch the browser and open a maximized page.

        Args:
            browser: Browser kind or its name. Defaults to settings.browser.

        Returns:
            The session's Page

        Raises:
            UnsupportedTargetError: If the browser kind is not supported
        """
        kind = BrowserKind.parse(browser if browser is not None else self.settings.browser)

        if self.state is not SessionState.UNOPENED:
            raise RuntimeError(f"Session cannot be opened from state {self.state.value}")

        self.log.info(f"Opening browser: {kind.name}")
        try:
            self.artifact_dir = self._create_artifact_dir()
            self._playwright = sync_playwright().start()
            launcher = getattr(self._playwright, kind.launcher)

            launch_options = {
                **self.LAUNCH_OPTIONS.get(kind, {}),
                "headless": self.settings.headless,
            }
            executable = self.driver_path(kind)
            if executable.exists():
                launch_options["executable_path"] = str(executable)
                self.log.debug(f"Using browser executable: {executable}")

            self._browser = launcher.launch(**launch_options)
            self._context = self._browser.new_context(
                **self.DEFAULT_CONTEXT_OPTIONS, **self.VIEWPORT_OPTIONS.get(kind, {})
            )
            self._page = self._context.new_page()
        except Exception as e:
            self.log.error(format_exception(e))
            self._release()
            raise

        self.browser_kind = kind
        self.state = SessionState.OPEN
        self.log.debug(
            f"Browser started: {kind.launcher} (headless={self.settings.headless})"
        )
        return self._page

    def close(self) -> None:
        """Close the page, context and browser, and stop Playwright."""
        if self.state is not SessionState.OPEN:
            raise RuntimeError(f"Session cannot be closed from state {self.state.value}")

        self.log.info("Closing the session and the browser.")
        try:
            self._release()
        finally:
            self.state = SessionState.CLOSED
        self.log.debug("Browser closed")

    def _release(self) -> None:
        """Close context and browser, then stop Playwright, even if a step raises."""
        context, browser, playwright = self._context, self._browser, self._playwright
        self._context = self._browser = self._playwright = None
        self._page = None
        try:
            if context:
                context.close()
        finally:
            try:
                if browser:
                    browser.close()
            finally:
                if playwright:
                    playwright.stop()

    # =========================================================================
    # Navigation
    # =========================================================================

    def navigate(self, url: str) -> None:
        """
        Open a configured environment URL.

        Raises:
            UnsupportedTargetError: If `url` is not a configured environment
            NavigationFailedError: If the browser fails to load `url`
        """
        environment = self.settings.environment_for(url)
        if environment is None:
            raise UnsupportedTargetError(f"Unsupported environment: {url}", name=url)

        page = self.page
        self.log.info(f"Testing on {environment.name} environment")
        self.log.info(f"Opening: {url}")
        try:
            page.goto(url)
        except PlaywrightError as e:
            self.log.error("failed")
            self.log.error(str(e))
            self.capture_screenshot(type(self).__name__, "navigate")
            raise NavigationFailedError(
                f"Unable to open URL {url}", name=url
            ) from e

    # =========================================================================
    # Artifacts
    # =========================================================================

    def capture_screenshot(self, context: str = "", operation: str = "") -> Optional[Path]:
        """
        Save a screenshot of the current page into the run's artifact folder.

        Never raises; failures are logged and None is returned.

        Args:
            context: Name of the class where the failure occurred
            operation: Name of the operation that failed

        Returns:
            Path to the saved screenshot, or None
        """
        self.log.info("Screenshot begins.")
        try:
            if self._page is None or self.artifact_dir is None:
                raise RuntimeError("No open page to capture")

            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filepath = self.artifact_dir / f"{context}_{operation}_{timestamp}.png"
            self.artifact_dir.mkdir(parents=True, exist_ok=True)
            self._page.screenshot(path=str(filepath))

            allure.attach.file(
                str(filepath),
                name=f"{context}_{operation}",
                attachment_type=allure.attachment_type.PNG,
            )
        except Exception as e:
            self.log.error("Screenshot failure!")
            self.log.error(format_exception(e))
            return None

        self.log.info(f"Screenshot saved in path: {filepath}")
        return filepath

    def driver_path(self, kind: BrowserKind) -> Path:
        """Path of the optional browser executable for `kind`."""
        return self.project_root / DRIVER_FOLDER / kind.executable

    def _create_artifact_dir(self) -> Path:
        directory = (
            self.project_root
            / SCREENSHOT_FOLDER
            / f"run_{datetime.now().strftime('%Y-%m-%d_%H_%M_%S')}"
        )
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def page(self) -> Page:
        """The live page handle."""
        if self.state is not SessionState.OPEN or self._page is None:
            raise RuntimeError("Browser not started. Call open() first.")
        return self._page

    @property
    def window_title(self) -> str:
        return self.page.title()


__all__ = [
    "BrowserKind",
    "BrowserSession",
    "SessionState",
]
