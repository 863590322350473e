"""Shared fixtures: isolated settings and logging per test."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

import core.config as config
from core.config import get_settings
from core.logging_setup import reset_logging


@pytest.fixture
def user_config_dir(tmp_path: Path) -> Path:
    return tmp_path / "user-config"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, user_config_dir: Path) -> Iterator[None]:
    """Each test sees default settings: no .env in cwd or user dir, no HTTP_GLUE_* vars."""
    for key in list(os.environ):
        if key.upper().startswith("HTTP_GLUE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(config, "get_user_config_dir", lambda: user_config_dir)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_logging()


@pytest.fixture
def fallback_latin1(monkeypatch: pytest.MonkeyPatch) -> str:
    """Force a known fallback encoding so results do not depend on the host locale."""
    monkeypatch.setenv("HTTP_GLUE_FALLBACK_ENCODING", "latin-1")
    get_settings.cache_clear()
    return "latin-1"
