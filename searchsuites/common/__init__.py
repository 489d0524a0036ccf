"""
================================================================================
Common Utilities
================================================================================

Shared configuration and logging setup for the UI and API suites.

Exports:
    - ConfigLoader: Singleton YAML + environment configuration
    - RunSettings: Frozen settings for one test run
    - Environment: Named test environments (QA, STAGE, DEV)
    - init_logger / get_logger: Loguru console + file sink

Usage:
    from searchsuites.common import RunSettings, get_logger

    settings = RunSettings.from_config()
    log = get_logger("MyComponent")

================================================================================
"""

from .config_loader import (
    PROJECT_ROOT,
    ConfigLoader,
    ConfigurationError,
    Environment,
    RunSettings,
)
from .log_setup import get_logger, init_logger, reset_logger

__all__ = [
    "PROJECT_ROOT",
    "ConfigLoader",
    "ConfigurationError",
    "Environment",
    "RunSettings",
    "get_logger",
    "init_logger",
    "reset_logger",
]
