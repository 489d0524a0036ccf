"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework.

Components:
    - locator: Immutable strategy + selector values with placeholder binding
    - errors: Failure taxonomy shared by every UI component
    - browser_manager: Browser session lifecycle and screenshot folder
    - element_actions: Uniform raise-or-sentinel element actions and waits

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import (
    AutomationError,
    ElementNotFoundError,
    ElementNotInteractableError,
    NavigationFailedError,
    UnsupportedTargetError,
    WaitTimeoutError,
    format_exception,
)
from .locator import PLACEHOLDER, Locator, Strategy, bind_locator
from .browser_manager import BrowserKind, BrowserSession, SessionState
from .element_actions import ActionWrapper

__all__ = [
    "AutomationError",
    "ElementNotFoundError",
    "ElementNotInteractableError",
    "NavigationFailedError",
    "UnsupportedTargetError",
    "WaitTimeoutError",
    "format_exception",
    "PLACEHOLDER",
    "Locator",
    "Strategy",
    "bind_locator",
    "BrowserKind",
    "BrowserSession",
    "SessionState",
    "ActionWrapper",
]
