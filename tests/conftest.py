"""Shared test fixtures for the easyrest test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from easyrest.config.settings import EasyRestSettings
from easyrest.demo.store import migrate_database


# ---------------------------------------------------------------------------
# Keep the host environment out of EasyRestSettings
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_easyrest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove EASYREST_* variables so defaults are what tests see."""
    for name in (
        "HOST",
        "PORT",
        "LOG_LEVEL",
        "JSON_LOGS",
        "DATABASE_PATH",
        "ABORT_ON_SERIALIZATION_ERROR",
    ):
        monkeypatch.delenv(f"EASYREST_{name}", raising=False)


# ---------------------------------------------------------------------------
# Settings / database fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def database_path(tmp_path: Path) -> str:
    path = str(tmp_path / "people.db")
    migrate_database(path)
    return path


@pytest.fixture
def settings(database_path: str) -> EasyRestSettings:
    """Test settings pointing at a migrated temporary database."""
    return EasyRestSettings(database_path=database_path, json_logs=False)


