"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the search engine under test.

Each page module pairs:
    - A locator registry (logical name -> Locator)
    - A page class composing ActionWrapper calls into flows

================================================================================
"""

from .search_locators import SEARCH_LOCATORS
from .search_page import SearchPage

__all__ = [
    "SEARCH_LOCATORS",
    "SearchPage",
]
