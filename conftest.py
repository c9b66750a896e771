"""
Repository-level pytest configuration.

Keeps local runs predictable:
  - Pin the toolkit environment variables to known defaults
  - Reset the configuration singleton around every test
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest

from webui_toolkit.common import GlobalConfig


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _toolkit_env_defaults() -> Generator[None, None, None]:
    """
    Set environment defaults if not already provided by the user/CI.
    """
    defaults = {
        "WEBUI_LOG_LEVEL": "DEBUG",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield


@pytest.fixture(autouse=True)
def _fresh_config() -> Generator[None, None, None]:
    """Every test starts from a freshly loaded GlobalConfig."""
    GlobalConfig.reset()
    yield
    GlobalConfig.reset()
