"""Pytest configuration helpers for the Mortydex project.

The ``pytest`` plugin system automatically imports ``tests.conftest``. We use
that behavior to ensure the repository root is present on ``sys.path`` before
any test modules import application code.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from tests import _ensure_repo_on_path

_ensure_repo_on_path()

from mortydex.settings import get_settings  # noqa: E402
from mortydex.utils.request_context import clear_request_id  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop the cached settings so environment tweaks apply per test."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    clear_request_id()
