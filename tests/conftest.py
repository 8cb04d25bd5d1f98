"""Fixtures for level-overlay tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from level_overlay.config import Settings
from level_overlay.overlay.bar_store import BarStore


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def bar_store() -> BarStore:
    return BarStore(max_bars=5)


@pytest.fixture
def mock_renderer() -> MagicMock:
    renderer = MagicMock()
    renderer.render = MagicMock()
    return renderer
