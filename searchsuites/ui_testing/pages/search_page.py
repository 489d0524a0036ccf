"""
================================================================================
Search Page Object
================================================================================

Search engine flows built on the ActionWrapper.

Every flow returns a plain value (title string, bool, count). Failures are
logged, captured as a screenshot and turned into the flow's empty value
("" / False / 0), so a broken step shows up as a failed assertion in the
test rather than an error.

================================================================================
"""

from __future__ import annotations

from typing import Mapping, Optional

import allure

from searchsuites.common.log_setup import get_logger
from searchsuites.ui_testing.framework.element_actions import ActionWrapper
from searchsuites.ui_testing.framework.errors import format_exception
from searchsuites.ui_testing.framework.locator import Locator

from .search_locators import SEARCH_LOCATORS


class SearchPage:
    """Search results page object."""

    def __init__(
        self,
        actions: ActionWrapper,
        locators: Mapping[str, Locator] = SEARCH_LOCATORS,
        log=None,
    ):
        """
        Args:
            actions: Action wrapper bound to an open session
            locators: Locator registry (logical name -> Locator)
            log: Bound logger. Defaults to the shared harness logger.
        """
        self.actions = actions
        self.locators = locators
        self.log = log or get_logger(type(self).__name__)

    @classmethod
    def for_session(cls, session, **kwargs) -> "SearchPage":
        """Build a SearchPage whose actions are tagged with this class name."""
        return cls(ActionWrapper(session, context=cls.__name__), **kwargs)

    def open(self, url: Optional[str] = None) -> "SearchPage":
        """Navigate to `url`, defaulting to the active environment."""
        self.actions.navigate(url or self.actions.settings.login_url)
        return self

    @allure.step("Search for '{text}'")
    def search_for(self, text: str = "Hello") -> str:
        """
        Search for `text` and return the title of the complementary result.

        Returns:
            The result title, or "" if any step failed
        """
        self.log.info(f"'{text}' started.")
        try:
            search_box = self.locators["search_box"]
            result_title = self.locators["complementary_result_title"]

            self.actions.wait_for_present(search_box, "SEARCH_BOX")
            self.actions.is_displayed(search_box, "SEARCH_BOX")
            self.actions.type_text(search_box, "SEARCH_BOX", text)
            self.actions.press_enter()
            self.actions.wait_until_visible(result_title, "COMPLEMENTARY_RESULT_TITLE")
            title = self.actions.get_text(result_title, "COMPLEMENTARY_RESULT_TITLE")
        except Exception as e:
            self._record_failure("search_for", e)
            return ""

        self.log.info("ends.")
        return title

    @allure.step("Verify result link '{link_text}'")
    def verify_result_link_present(self, link_text: str = "Hello") -> bool:
        """
        Check that a web result titled `link_text` and the Wikipedia
        description link are both displayed.
        """
        self.log.info(f"'{link_text}' started.")
        try:
            result_link = self.actions.bind_locator(self.locators["web_result_link"], link_text)
            self.actions.is_displayed(result_link, f"WEB_RESULT_LINK '{link_text}'")
            self.actions.is_displayed(self.locators["wikipedia_link"], "WIKIPEDIA_LINK")
        except Exception as e:
            self._record_failure("verify_result_link_present", e)
            return False

        self.log.info("ends.")
        return True

    @allure.step("Count result links: {kind}")
    def count_result_links(self, kind: str = "wiki_link") -> int:
        """
        Count the elements matching the registry locator `kind`.

        Returns:
            Number of matches, or 0 if the lookup failed
        """
        self.log.info(f"'{kind}' started.")
        try:
            count = len(self.actions.get_elements(self.locators[kind], kind.upper()))
        except Exception as e:
            self._record_failure("count_result_links", e)
            return 0

        self.log.info(f"ends with {count}.")
        return count

    def _record_failure(self, flow: str, error: Exception) -> None:
        self.log.error(f"{flow}: failed.")
        self.log.error(format_exception(error))
        self.actions.screenshot(flow)


__all__ = [
    "SearchPage",
]
