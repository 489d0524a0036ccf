"""
Locators for the search engine results page.

WEB_RESULT_LINK is a template: bind it with the link text before use.
"""

from types import MappingProxyType
from typing import Mapping

from searchsuites.ui_testing.framework.locator import PLACEHOLDER, Locator, Strategy


SEARCH_BOX = Locator(Strategy.CSS, 'textarea[name="q"], input[name="q"]')

COMPLEMENTARY_RESULT_TITLE = Locator(
    Strategy.XPATH,
    '//div[@id="wp-tabs-container"]//*[@data-attrid="title"]/span',
)

WEB_RESULT_LINK = Locator(
    Strategy.XPATH,
    "//h1[contains(text(),'Search Results')]/following-sibling::div"
    f"//h3/span[text()='{PLACEHOLDER}']",
    token=PLACEHOLDER,
)

WIKIPEDIA_LINK = Locator(
    Strategy.XPATH,
    "//h3[text()='Description']/following-sibling::span/a[text()='Wikipedia']",
)

WIKI_LINK = Locator(Strategy.XPATH, "//a[text()='Wikipedia']")


SEARCH_LOCATORS: Mapping[str, Locator] = MappingProxyType({
    "search_box": SEARCH_BOX,
    "complementary_result_title": COMPLEMENTARY_RESULT_TITLE,
    "web_result_link": WEB_RESULT_LINK,
    "wikipedia_link": WIKIPEDIA_LINK,
    "wiki_link": WIKI_LINK,
})


__all__ = [
    "SEARCH_BOX",
    "COMPLEMENTARY_RESULT_TITLE",
    "WEB_RESULT_LINK",
    "WIKIPEDIA_LINK",
    "WIKI_LINK",
    "SEARCH_LOCATORS",
]
