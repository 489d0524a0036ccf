"""
Repository-level pytest configuration.

Provides safe defaults for local and CI runs:
  - Browser runs headless unless UI_HEADLESS is already set
    (run_tests.py --headed sets it to false)
  - Values already provided by the user/CI always win
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """Set environment defaults if not already provided by the user/CI."""
    defaults = {
        "UI_HEADLESS": "true",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
