"""
================================================================================
Locator Value Type
================================================================================

Immutable strategy + selector pairs used by the action wrapper.

A locator may carry a placeholder token (``<REPLACE>`` by default) that is
substituted at call time, e.g. to target a result link by its text:

    >>> link = Locator(Strategy.XPATH, "//h3/span[text()='<REPLACE>']", token=PLACEHOLDER)
    >>> link.bind("Duck - Wikipedia").selector
    "//h3/span[text()='Duck - Wikipedia']"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


PLACEHOLDER = "<REPLACE>"


class Strategy(str, Enum):
    """Selector strategies understood by Playwright's selector engine."""

    CSS = "css"
    XPATH = "xpath"
    ID = "id"
    NAME = "name"
    TEXT = "text"


@dataclass(frozen=True)
class Locator:
    """
    Element locator.

    Attributes:
        strategy: How `selector` is interpreted
        selector: Selector string, never empty
        token: Placeholder contained in `selector`, if the locator is a template
    """
    strategy: Strategy
    selector: str
    token: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.selector:
            raise ValueError("Locator selector must not be empty")
        if self.token == "":
            raise ValueError("Locator placeholder must not be empty")
        if self.token is not None and self.token not in self.selector:
            raise ValueError(
                f"Placeholder {self.token!r} not found in selector {self.selector!r}"
            )

    @property
    def is_template(self) -> bool:
        return self.token is not None

    def bind(self, text: str) -> "Locator":
        """Return a new locator with the placeholder replaced by `text`."""
        return bind_locator(self, text)

    def to_selector(self) -> str:
        """Render the Playwright selector string."""
        if self.strategy is Strategy.CSS:
            return f"css={self.selector}"
        if self.strategy is Strategy.XPATH:
            return f"xpath={self.selector}"
        if self.strategy is Strategy.ID:
            return f'css=[id={css_string(self.selector)}]'
        if self.strategy is Strategy.NAME:
            return f'css=[name={css_string(self.selector)}]'
        return f"text={self.selector}"

    def __str__(self) -> str:
        return f"{self.strategy.value}: {self.selector}"


def bind_locator(locator: Locator, text: str) -> Locator:
    """
    Substitute the placeholder of a template locator.

    The input locator is left untouched; the returned locator is no longer
    a template.

    Raises:
        ValueError: If `locator` has no placeholder token
    """
    if locator.token is None:
        raise ValueError(f"Locator has no placeholder to bind: {locator}")

    selector = locator.selector
    if locator.strategy is Strategy.XPATH:
        # A quoted placeholder is swapped for a literal that survives quotes in `text`
        for quote in ("'", '"'):
            selector = selector.replace(
                f"{quote}{locator.token}{quote}", xpath_string(text)
            )
    return replace(
        locator,
        selector=selector.replace(locator.token, text),
        token=None,
    )


def xpath_string(text: str) -> str:
    """
    Quote `text` as an XPath 1.0 string literal.

    XPath has no escape sequences, so text holding both quote kinds is
    split into a concat() of single-quoted parts.

        xpath_string("Duck's")  ->  "Duck's"
        xpath_string("a'b\"c")  ->  concat('a', "'", 'b"c')
    """
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    parts = ", \"'\", ".join(f"'{part}'" for part in text.split("'"))
    return f"concat({parts})"


def css_string(text: str) -> str:
    """Quote `text` as a double-quoted CSS attribute value."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


__all__ = [
    "PLACEHOLDER",
    "Strategy",
    "Locator",
    "bind_locator",
    "css_string",
    "xpath_string",
]
