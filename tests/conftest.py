# Rev 0.1.0

"""Pytest fixtures for diy_projects"""
from __future__ import annotations
import pytest
from pathlib import Path

from diy_projects.repositories.db import Database
from diy_projects.tools.schema import apply_schema
from diy_projects.utils.config import DbConfig


@pytest.fixture(autouse=True)
def xdg_dirs(tmp_path: Path, monkeypatch):
    # keep settings/logs/default db out of the real home dir
    for var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME"):
        monkeypatch.setenv(var, str(tmp_path / var.lower()))
    monkeypatch.delenv("DIY_PROJECTS_LOG_LEVEL", raising=False)


@pytest.fixture()
def db_config(tmp_path: Path) -> DbConfig:
    return DbConfig(driver="sqlite", path=tmp_path / "test.db")


@pytest.fixture()
def db(db_config: DbConfig) -> Database:
    database = Database(db_config)
    apply_schema(database)
    return database


@pytest.fixture()
def seeded_db(db_config: DbConfig) -> Database:
    database = Database(db_config)
    apply_schema(database, seed=True)
    return database


@pytest.fixture()
def count_rows():
    def _count(db: Database, table: str) -> int:
        with db.connection() as conn:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    return _count
