"""Shared pytest fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("BASE_URL", "http://localhost:8080")

from ureduce.config import get_settings  # noqa: E402
from ureduce.main import create_app  # noqa: E402


@pytest.fixture(autouse=True)
def configure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the environment so a developer's .env cannot leak into tests."""

    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("BASE_URL", "http://localhost:8080")
    monkeypatch.delenv("USE_REDIRECT_PATH", raising=False)
    get_settings.cache_clear()


@pytest.fixture
def app():
    return create_app()
