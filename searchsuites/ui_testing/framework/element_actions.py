# ================================================================================
# Element Actions Module
# ================================================================================
#
# This module wraps Playwright element interactions with a uniform failure
# policy so that page objects never touch the page directly.
#
# Every element action:
#   - logs its intent with a human-readable element name
#   - resolves the Locator against the session's page
#   - highlights the element it touched (best-effort)
#   - on failure: logs, saves a screenshot into the run folder, then either
#     raises an AutomationError chained to the Playwright error, or returns
#     the action's sentinel value when raise_on_failure=False
#
# Waits block on Playwright's Locator.wait_for() for at most `timeout`
# seconds (default: ui.wait_timeout, 60).
#
# ================================================================================

import time
from functools import wraps
from typing import Any, Callable, List, Optional, Type

import allure
from playwright.sync_api import Locator as PageLocator, Page

from searchsuites.common.config_loader import RunSettings
from searchsuites.common.log_setup import get_logger

from .errors import (
    AutomationError,
    ElementNotFoundError,
    ElementNotInteractableError,
    WaitTimeoutError,
    format_exception,
)
from .locator import Locator, bind_locator


def wrapped_action(
    sentinel: Any = False,
    failure: Type[AutomationError] = ElementNotInteractableError,
):
    """
    Decorator applying the raise-or-sentinel failure policy to an action.

    The decorated method gains two keyword-only flags:
        raise_on_failure: Raise the failure (default True)
        log_error_on_failure: Log the formatted cause when not raising (default True)

    Args:
        sentinel: Value returned on a non-raising failure. Callables are
                  invoked to build a fresh value (e.g. `list`).
        failure: AutomationError subclass wrapping non-taxonomy errors
    """
    def decorator(func: Callable):
        operation = func.__name__

        @wraps(func)
        def wrapper(
            self,
            locator: Locator,
            name: str,
            *args,
            raise_on_failure: bool = True,
            log_error_on_failure: bool = True,
            **kwargs,
        ):
            try:
                return func(self, locator, name, *args, **kwargs)
            except Exception as e:
                log = self.log.patch(lambda record: record.update(function=operation))
                log.error(f"'{name}' failed.")
                self.screenshot(operation)

                if isinstance(e, AutomationError):
                    if raise_on_failure:
                        raise
                    error = e
                else:
                    error = failure(f"{operation} on '{name}' failed: {e}", name=name)
                    error.__cause__ = e
                    if raise_on_failure:
                        raise error from e

                if log_error_on_failure:
                    log.error(format_exception(error))
                return sentinel() if callable(sentinel) else sentinel

        return wrapper
    return decorator


class ActionWrapper:
    """
    Uniform, loggable element actions over one browser session.

    Example:
        actions = ActionWrapper(session, context="SearchPage")
        actions.type_text(SEARCH_BOX, "ducks", "SEARCH_BOX")
        actions.click(SUBMIT, "SUBMIT", raise_on_failure=False)
    """

    SHORT_DELAY = 3
    LONG_DELAY = 10

    def __init__(
        self,
        session,
        context: Optional[str] = None,
        settings: Optional[RunSettings] = None,
        log=None,
    ):
        """
        Initialize ActionWrapper with an open browser session.

        Args:
            session: BrowserSession providing `page` and `capture_screenshot`
            context: Owner name used in log lines and screenshot file names
            settings: Run settings. Defaults to the session's settings.
            log: Bound logger. Defaults to the shared harness logger.
        """
        self.session = session
        self.context = context or type(self).__name__
        self.settings = settings or session.settings
        self.log = log or get_logger(self.context)

    @property
    def page(self) -> Page:
        return self.session.page

    # =========================================================================
    # Element actions
    # =========================================================================

    @wrapped_action(sentinel=False)
    @allure.step("Click: {name}")
    def click(self, locator: Locator, name: str) -> bool:
        """
        Click on an element.

        Returns:
            True if the element was clicked
        """
        self.log.info(f"on '{name}'.")
        self.log.debug(str(locator))
        element = self._find(locator, name)
        self.highlight(element, border_color="yellow", font_color="red",
                       thickness="2.5px", style="dashed")
        element.click(timeout=self.settings.action_timeout)
        self.log.info("success.")
        return True

    @wrapped_action(sentinel=None, failure=ElementNotFoundError)
    @allure.step("Get element: {name}")
    def get_element(self, locator: Locator, name: str) -> PageLocator:
        """
        Get the first element matching a locator.

        Returns:
            Playwright Locator pointing at the first match
        """
        self.log.info(f"{name}")
        return self._find(locator, name)

    @wrapped_action(sentinel=list, failure=ElementNotFoundError)
    @allure.step("Get elements: {name}")
    def get_elements(self, locator: Locator, name: str) -> List[PageLocator]:
        """
        Get every element matching a locator.

        Returns:
            List of Playwright Locators, empty if nothing matches
        """
        self.log.info(f"{name}")
        elements = self._resolve(locator).all()
        self.log.info(f"found {len(elements)}.")
        return elements

    @wrapped_action(sentinel=False)
    @allure.step("Is displayed: {name}")
    def is_displayed(self, locator: Locator, name: str) -> bool:
        """
        Is an element displayed on the page?

        A present but hidden element counts as a failure.
        """
        self.log.info(f"Verifying element {name}")
        self.log.debug(str(locator))
        element = self._find(locator, name)
        if not element.is_visible():
            self.log.info("Element is no longer displayed.")
            raise ElementNotInteractableError(f"Element {name} is not displayed.", name=name)

        self.highlight(element, border_color="green", font_color="red",
                       thickness="2px", style="solid")
        self.log.info("true")
        return True

    @wrapped_action(sentinel=False)
    @allure.step("Scroll into view: {name}")
    def scroll_into_view(self, locator: Locator, name: str) -> bool:
        """Scroll the page until the element is in view."""
        self.log.info(f"Scrolling to {name}")
        self.log.debug(str(locator))
        element = self._find(locator, name)
        element.scroll_into_view_if_needed(timeout=self.settings.action_timeout)
        self.highlight(element, border_color="green", font_color="blue",
                       thickness="2.5px", style="solid")
        self.log.info("success.")
        return True

    @wrapped_action(sentinel=False)
    @allure.step("Hover: {name}")
    def hover(self, locator: Locator, name: str) -> bool:
        """Move the mouse over an element."""
        self.log.info(f"{name}")
        self.log.debug(str(locator))
        element = self._find(locator, name)
        element.hover(timeout=self.settings.action_timeout)
        self.highlight(element, border_color="green", font_color="blue",
                       thickness="2.5px", style="solid")
        return True

    @wrapped_action(sentinel=False)
    @allure.step("Type into: {name}")
    def type_text(self, locator: Locator, name: str, text: str) -> bool:
        """
        Replace the content of an input with `text`.

        Returns:
            True if the text was entered
        """
        self.log.info(f"'{text}' to '{name}'")
        self.log.debug(str(locator))
        element = self._find(locator, name)
        element.clear(timeout=self.settings.action_timeout)
        element.fill(text, timeout=self.settings.action_timeout)
        self.highlight(element, border_color="green", font_color="blue",
                       thickness="2.5px", style="solid")
        self.log.info("success.")
        return True

    @wrapped_action(sentinel=None)
    @allure.step("Get text: {name}")
    def get_text(self, locator: Locator, name: str) -> str:
        """
        Get the visible text of a displayed element.

        Returns:
            The element's inner text
        """
        self.log.info(f"of element {name}")
        self.log.debug(str(locator))
        element = self._find(locator, name)
        if not element.is_visible():
            self.log.info("Element is no longer displayed.")
            raise ElementNotInteractableError(f"Element {name} is not displayed.", name=name)

        self.highlight(element, border_color="blue", font_color="red",
                       thickness="2px", style="dashed")
        text = element.inner_text(timeout=self.settings.action_timeout)
        self.log.info(f"Text is: '{text}'")
        return text

    # =========================================================================
    # Waits
    # =========================================================================

    @wrapped_action(sentinel=False, failure=WaitTimeoutError)
    @allure.step("Wait for present: {name}")
    def wait_for_present(self, locator: Locator, name: str, timeout: Optional[float] = None) -> bool:
        """Wait until an element is attached to the DOM."""
        self.log.info(f": {name}")
        element = self._resolve(locator).first
        element.wait_for(state="attached", timeout=self._timeout_ms(timeout))
        self.highlight(element, border_color="yellow", font_color="blue",
                       thickness="2px", style="solid")
        self.log.info("successful.")
        return True

    @wrapped_action(sentinel=False, failure=WaitTimeoutError)
    @allure.step("Wait until visible: {name}")
    def wait_until_visible(self, locator: Locator, name: str, timeout: Optional[float] = None) -> bool:
        """Wait until an element is displayed."""
        self.log.info(f": {name}")
        element = self._resolve(locator).first
        element.wait_for(state="visible", timeout=self._timeout_ms(timeout))
        self.highlight(element, border_color="yellow", font_color="blue",
                       thickness="2px", style="solid")
        self.log.info("successful.")
        return True

    @wrapped_action(sentinel=True, failure=WaitTimeoutError)
    @allure.step("Wait until gone: {name}")
    def wait_until_gone(self, locator: Locator, name: str, timeout: Optional[float] = None) -> bool:
        """
        Wait until an element is hidden or removed.

        Returns immediately when the element is not displayed to begin with.
        A non-raising timeout is still reported as True after the failure is
        logged and captured.
        """
        self.log.info(f": '{name}'")
        if not self._is_visible_now(locator):
            self.log.info(f": '{name}' is not displayed.")
            return True

        self._resolve(locator).first.wait_for(state="hidden", timeout=self._timeout_ms(timeout))
        self.log.info(f": '{name}' is success.")
        return True

    # =========================================================================
    # Page-level helpers
    # =========================================================================

    def navigate(self, url: str) -> None:
        """Open a configured environment URL in the session."""
        self.session.navigate(url)

    def press_enter(self) -> bool:
        """Press the ENTER key on the focused element."""
        self.log.info(".")
        self.page.keyboard.press("Enter")
        self.log.info("success.")
        return True

    def get_window_title(self) -> str:
        """Title of the current page."""
        self.log.info("begin.")
        return self.page.title()

    def bind_locator(self, locator: Locator, replace_text: str) -> Locator:
        """Return `locator` with its placeholder replaced by `replace_text`."""
        self.log.info(f"with '{replace_text}'")
        self.log.info(str(locator))
        return bind_locator(locator, replace_text)

    def screenshot(self, operation: str = ""):
        """Save a screenshot tagged with this wrapper's context and `operation`."""
        return self.session.capture_screenshot(self.context, operation)

    def highlight(
        self,
        element: PageLocator,
        duration: float = 0,
        border_color: str = "yellow",
        font_color: str = "black",
        thickness: str = "2px",
        style: str = "solid",
        raise_on_failure: bool = False,
        ignore_js_error: bool = True,
    ) -> bool:
        """
        Outline an element on the page.

        Highlighting is cosmetic: errors are logged and reported through the
        return value unless `raise_on_failure` is set.

        Args:
            element: Element to outline
            duration: Seconds before the original style is restored (0 keeps it)
        """
        if not self.settings.highlight:
            return True
        try:
            original_style = element.get_attribute("style", timeout=self.settings.action_timeout)
            element.evaluate(
                "(el, style) => el.setAttribute('style', style)",
                f"border: {thickness} {style} {border_color}; "
                f"color: {font_color}; font-weight: bold;",
                timeout=self.settings.action_timeout,
            )
            if duration > 0:
                time.sleep(duration)
                element.evaluate(
                    "(el, style) => style === null"
                    " ? el.removeAttribute('style') : el.setAttribute('style', style)",
                    original_style,
                    timeout=self.settings.action_timeout,
                )
            return True
        except Exception as e:
            self.log.error("failed.")
            self.log.error(str(e))
            if raise_on_failure:
                raise
            return ignore_js_error

    def delay_for(self, seconds: float) -> None:
        self.log.info(f"Sleeping for {seconds} secs")
        time.sleep(seconds)

    def short_delay(self) -> None:
        self.delay_for(self.SHORT_DELAY)

    def long_delay(self) -> None:
        self.delay_for(self.LONG_DELAY)

    # =========================================================================
    # Internals
    # =========================================================================

    def _resolve(self, locator: Locator) -> PageLocator:
        return self.page.locator(locator.to_selector())

    def _find(self, locator: Locator, name: str) -> PageLocator:
        matches = self._resolve(locator)
        if matches.count() == 0:
            raise ElementNotFoundError(
                f"Unable to locate element '{name}' ({locator})", name=name
            )
        return matches.first

    def _is_visible_now(self, locator: Locator) -> bool:
        matches = self._resolve(locator)
        return matches.count() > 0 and matches.first.is_visible()

    def _timeout_ms(self, seconds: Optional[float]) -> float:
        if seconds is None:
            seconds = self.settings.wait_timeout
        return seconds * 1000


__all__ = [
    "ActionWrapper",
    "wrapped_action",
]
