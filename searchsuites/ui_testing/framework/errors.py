"""
================================================================================
Automation Errors
================================================================================

Failure taxonomy surfaced by the UI framework. Page objects catch these
without knowing Playwright's exception hierarchy; the Playwright error is
always kept as ``__cause__``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import traceback
from typing import Optional


class AutomationError(Exception):
    """Base exception for UI automation failures."""

    def __init__(self, message: str, name: Optional[str] = None) -> None:
        super().__init__(message)
        self.name = name

    @property
    def cause(self) -> Optional[BaseException]:
        """The underlying error this failure was raised from."""
        return self.__cause__


class ElementNotFoundError(AutomationError):
    """Raised when a locator matches no element."""
    pass


class ElementNotInteractableError(AutomationError):
    """Raised when an element exists but the action on it failed."""
    pass


class WaitTimeoutError(AutomationError):
    """Raised when a wait condition is not met within its timeout."""
    pass


class NavigationFailedError(AutomationError):
    """Raised when navigating the session to a URL fails."""
    pass


class UnsupportedTargetError(AutomationError):
    """Raised for an unknown browser kind or environment."""
    pass


def format_exception(exc: BaseException, tail: int = 3) -> str:
    """
    Render an exception for log output.

    Includes the chained cause and the last `tail` traceback frames.
    """
    lines = [f"{type(exc).__name__}: {exc}"]
    cause = exc.__cause__
    if cause is not None:
        lines.append(f"  caused by {type(cause).__name__}: {cause}")
    frames = traceback.extract_tb(exc.__traceback__)[-tail:]
    for frame in frames:
        lines.append(f"  at {frame.filename}:{frame.lineno} in {frame.name}")
    return "\n".join(lines)


__all__ = [
    "AutomationError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "WaitTimeoutError",
    "NavigationFailedError",
    "UnsupportedTargetError",
    "format_exception",
]
