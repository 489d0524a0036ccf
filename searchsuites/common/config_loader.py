"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - YAML configuration loading (config/config.yaml)
    - Environment variable override (UI_BROWSER overrides ui.browser)
    - Dot notation path access
    - Named test environments (QA, STAGE, DEV)
    - Frozen run settings resolved once at load time

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

# Default configuration file path
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "config.yaml"

DEFAULT_WAIT_TIMEOUT = 60
DEFAULT_ACTION_TIMEOUT = 5000
DEFAULT_POSTS_URI = "https://jsonplaceholder.typicode.com/posts"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


class ConfigLoader:
    """
    Process-wide view of config/config.yaml.

    A value is looked up as an environment variable first (the dotted key
    upper-cased with dots turned into underscores, so `ui.browser` reads
    `UI_BROWSER`), then in the YAML file, then falls back to the caller's
    default. Environment strings are coerced to the type of that default.

    Usage:
        >>> ConfigLoader().get("ui.wait_timeout", 60)
        60
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        # One loader per process; later constructor arguments are ignored
        if cls._instance is None:
            instance = super().__new__(cls)
            instance.config_path = Path(config_path or DEFAULT_CONFIG_PATH)
            instance._data = instance._read(instance.config_path)
            cls._instance = instance
        return cls._instance

    @staticmethod
    def _read(path: Path) -> Dict[str, Any]:
        if not path.exists():
            logger.warning(f"No configuration at {path}; using environment and defaults")
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"Top level of {path} must be a mapping")
        logger.debug(f"Configuration read from {path}")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value at dotted `key` (e.g. "ui.environments.qa").

        Returns `default` when neither the environment nor the file sets it.
        """
        raw = os.environ.get(key.upper().replace(".", "_"))
        if raw is not None:
            return self._coerce(raw, default)

        node: Any = self._data
        for part in key.split("."):
            node = node.get(part) if isinstance(node, dict) else None
            if node is None:
                return default
        return node

    @staticmethod
    def _coerce(raw: str, default: Any) -> Any:
        if isinstance(default, bool):
            return raw.strip().lower() in ("true", "1", "yes", "on")
        for kind in (int, float):
            if isinstance(default, kind):
                try:
                    return kind(raw)
                except ValueError:
                    return raw
        return raw

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded file so the next ConfigLoader() reads it again."""
        cls._instance = None


class Environment(str, Enum):
    """Named test environments a session may navigate to."""

    QA = "qa"
    STAGE = "stage"
    DEV = "dev"


@dataclass(frozen=True)
class RunSettings:
    """
    Settings for one test run, resolved once from ConfigLoader.

    Attributes:
        browser: Browser kind name (validated when a session opens)
        environment: Active environment
        environments: Endpoint per environment (empty string = not configured)
        headless: Launch the browser without a window
        wait_timeout: Default wait timeout in seconds
        action_timeout: Per-action timeout in milliseconds
        highlight: Outline elements touched by the action wrapper
        posts_uri: URI of the JSON API smoke test
    """
    browser: str = "chrome"
    environment: Environment = Environment.QA
    environments: Dict[Environment, str] = field(default_factory=dict)
    headless: bool = False
    wait_timeout: int = DEFAULT_WAIT_TIMEOUT
    action_timeout: int = DEFAULT_ACTION_TIMEOUT
    highlight: bool = True
    posts_uri: str = DEFAULT_POSTS_URI

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "RunSettings":
        """
        Build settings from configuration.

        Raises:
            UnsupportedTargetError: If ui.environment names an unknown environment
        """
        from searchsuites.ui_testing.framework.errors import UnsupportedTargetError

        if config is None:
            config = ConfigLoader()

        env_name = str(config.get("ui.environment", "qa")).lower()
        try:
            environment = Environment(env_name)
        except ValueError:
            raise UnsupportedTargetError(
                f"Unsupported environment: {env_name}", name=env_name
            ) from None

        environments = {
            env: str(config.get(f"ui.environments.{env.value}", "") or "")
            for env in Environment
        }

        return cls(
            browser=str(config.get("ui.browser", "chrome")),
            environment=environment,
            environments=environments,
            headless=bool(config.get("ui.headless", False)),
            wait_timeout=int(config.get("ui.wait_timeout", DEFAULT_WAIT_TIMEOUT)),
            action_timeout=int(config.get("ui.action_timeout", DEFAULT_ACTION_TIMEOUT)),
            highlight=bool(config.get("ui.highlight", True)),
            posts_uri=str(config.get("api.posts_uri", DEFAULT_POSTS_URI)),
        )

    @property
    def login_url(self) -> str:
        """Endpoint of the active environment."""
        return self.environments.get(self.environment, "")

    def environment_for(self, url: str) -> Optional[Environment]:
        """Return the environment whose endpoint is exactly `url`, if any."""
        if not url:
            return None
        for env, endpoint in self.environments.items():
            if endpoint and endpoint == url:
                return env
        return None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "Environment",
    "RunSettings",
    "PROJECT_ROOT",
]
