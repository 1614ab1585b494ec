# Rev 0.1.0

"""Paths and XDG helpers
- Uses XDG Base Directory spec for config, logs and the default sqlite file
- Bundled SQL scripts live in the package's data/ folder
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "diy_projects"


def _xdg(var: str, fallback: Path) -> Path:
    return Path(os.environ.get(var) or fallback).expanduser()


def data_dir() -> Path:
    return _xdg("XDG_DATA_HOME", Path.home() / ".local" / "share") / APP_NAME


def state_dir() -> Path:
    return _xdg("XDG_STATE_HOME", Path.home() / ".local" / "state") / APP_NAME


def logs_dir() -> Path:
    return state_dir() / "logs"


def config_dir() -> Path:
    return _xdg("XDG_CONFIG_HOME", Path.home() / ".config") / APP_NAME


def default_db_path() -> Path:
    return data_dir() / "projects.db"


# Package-relative locations
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
SQL_DIR = PACKAGE_ROOT / "data"
SEED_SQL = SQL_DIR / "seed.sql"


def schema_sql(driver: str) -> Path:
    return SQL_DIR / f"schema_{driver}.sql"
