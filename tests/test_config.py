# tests/test_config.py
from __future__ import annotations

import json
from pathlib import Path

from diy_projects.utils import config
from diy_projects.utils.config import DbConfig, load_settings, save_settings


def test_defaults_when_no_settings_file(tmp_path: Path):
    settings = load_settings(tmp_path / "missing.json")
    assert settings["database"]["driver"] == "sqlite"
    assert settings["database"]["port"] == 3306
    assert settings["database"]["tls_enabled"] is False
    assert settings["logging"]["level"] == "INFO"


def test_settings_merge_per_section(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"database": {"driver": "mysql", "host": "db.local"}}))

    settings = load_settings(path)

    assert settings["database"]["driver"] == "mysql"
    assert settings["database"]["host"] == "db.local"
    assert settings["database"]["schema"] == "projects"
    assert settings["logging"]["level"] == "INFO"


def test_invalid_settings_fall_back_to_defaults(tmp_path: Path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    settings = load_settings(path)
    assert settings["database"]["driver"] == "sqlite"
    assert "Ignoring unreadable settings" in caplog.text


def test_defaults_are_not_shared_between_loads(tmp_path: Path):
    first = load_settings(tmp_path / "missing.json")
    first["database"]["host"] = "changed"
    assert load_settings(tmp_path / "missing.json")["database"]["host"] == "localhost"


def test_save_then_load(tmp_path: Path):
    path = tmp_path / "nested" / "settings.json"
    save_settings({"logging": {"level": "DEBUG"}}, path)
    assert load_settings(path)["logging"]["level"] == "DEBUG"


def test_default_settings_file_under_xdg_config(tmp_path: Path):
    assert config.settings_file() == tmp_path / "xdg_config_home" / "diy_projects" / "settings.json"


def test_db_config_from_settings():
    cfg = DbConfig.from_settings({"database": {"driver": "MySQL", "port": "3307", "tls_enabled": 1, "path": "~/p.db"}})
    assert cfg.driver == "mysql"
    assert cfg.port == 3307
    assert cfg.tls_enabled is True
    assert cfg.path == Path("~/p.db").expanduser()
    assert cfg.user == "projects" and cfg.password == "projects"


def test_db_config_default_sqlite_path(tmp_path: Path):
    cfg = DbConfig.from_settings({})
    assert cfg.path == tmp_path / "xdg_data_home" / "diy_projects" / "projects.db"


def test_describe_hides_password():
    cfg = DbConfig(driver="mysql", password="s3cret")
    assert "s3cret" not in cfg.describe()
    assert cfg.describe() == "mysql://projects@localhost:3306/projects?tls=False"


def test_settings_that_are_not_an_object_fall_back_to_defaults(tmp_path: Path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("[]")
    settings = load_settings(path)
    assert settings == load_settings(tmp_path / "missing.json")
    assert "Ignoring unreadable settings" in caplog.text
