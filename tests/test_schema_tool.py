# tests/test_schema_tool.py
from __future__ import annotations

from pathlib import Path

import pytest

from diy_projects.repositories.db import Database
from diy_projects.tools import schema
from diy_projects.utils.config import DbConfig


def test_init_and_verify(tmp_path: Path, capsys):
    db_file = tmp_path / "cli.db"

    assert schema.main(["init", "--db", str(db_file)]) == 0
    assert schema.main(["verify", "--db", str(db_file)]) == 0

    out = capsys.readouterr().out
    assert "schema_sqlite.sql" in out
    assert "Verification passed" in out


def test_init_with_seed_loads_sample_project(tmp_path: Path):
    db_file = tmp_path / "seeded.db"
    assert schema.main(["init", "--seed", "--db", str(db_file)]) == 0

    db = Database(DbConfig(path=db_file))
    with db.connection() as conn:
        assert conn.execute("SELECT project_name FROM project").fetchall()[0][0] == "Hang a door"
        assert conn.execute("SELECT COUNT(*) FROM category").fetchone()[0] == 3


def test_init_is_repeatable(tmp_path: Path):
    db_file = tmp_path / "again.db"
    assert schema.main(["init", "--seed", "--db", str(db_file)]) == 0
    assert schema.main(["init", "--seed", "--db", str(db_file)]) == 0
    db = Database(DbConfig(path=db_file))
    with db.connection() as conn:
        assert conn.execute("SELECT COUNT(*) FROM project").fetchone()[0] == 1


def test_verify_reports_missing_tables(tmp_path: Path, capsys):
    db_file = tmp_path / "empty.db"
    assert schema.main(["verify", "--db", str(db_file)]) == 2
    assert "Missing tables: project, category, step, material, project_category" in capsys.readouterr().out


def test_init_reports_connection_failure(tmp_path: Path, capsys):
    assert schema.main(["init", "--db", str(tmp_path)]) == 1
    assert "Unable to connect" in capsys.readouterr().err


def test_unknown_command_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        schema.main(["rebuild"])
    assert exc.value.code == 2
    assert "invalid choice" in capsys.readouterr().err
