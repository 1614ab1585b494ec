# File: diy_projects/tools/schema.py
# Rev 0.1.0
# Usage examples:
#   python -m diy_projects.tools.schema init
#   python -m diy_projects.tools.schema init --seed
#   python -m diy_projects.tools.schema verify --db /path/to/projects.db
#
# Notes:
# - Store comes from the settings file (see utils/config.py); --db forces a sqlite file
# - init drops and recreates every table from data/schema_<driver>.sql
# - --seed loads data/seed.sql (the "Hang a door" sample project)

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ..exceptions import DbError
from ..repositories.db import Database
from ..utils.config import DbConfig, load_settings
from ..utils.paths import SEED_SQL, schema_sql

REQUIRED_TABLES = ["project", "category", "step", "material", "project_category"]


def apply_schema(db: Database, seed: bool = False) -> list[Path]:
    applied = [schema_sql(db.dialect.name)]
    if seed:
        applied.append(SEED_SQL)
    for path in applied:
        db.run_script(path)
    return applied


def missing_tables(db: Database) -> list[str]:
    with db.connection() as conn:
        cur = conn.cursor()
        if db.dialect.name == "sqlite":
            cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
        else:
            cur.execute("SHOW TABLES")
        names = {next(iter(r.values())) if isinstance(r, dict) else r[0] for r in cur.fetchall()}
        cur.close()
    return [t for t in REQUIRED_TABLES if t not in names]


def cmd_init(db: Database, seed: bool) -> int:
    for path in apply_schema(db, seed=seed):
        print(f"→ Applied: {path.name}")
    print(f"✓ Schema ready on {db.config.describe()}")
    return 0


def cmd_verify(db: Database) -> int:
    missing = missing_tables(db)
    if missing:
        print("❌ Missing tables:", ", ".join(missing))
        return 2
    print("✓ Verification passed.")
    return 0


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="diy-projects-schema", description="Static schema runner for diy_projects")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("--config", type=Path, default=None, help="Settings JSON (default: XDG config dir)")
        sp.add_argument("--db", type=Path, default=None, help="SQLite file to use instead of the configured store")

    s_init = sub.add_parser("init", help="Drop and recreate all tables")
    add_common(s_init)
    s_init.add_argument("--seed", action="store_true", help="Load sample data after creating tables")

    s_verify = sub.add_parser("verify", help="Check that every table exists")
    add_common(s_verify)

    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    config = DbConfig.from_settings(load_settings(ns.config))
    if ns.db is not None:
        config = replace(config, driver="sqlite", path=ns.db)
    db = Database(config)
    commands = {
        "init": lambda: cmd_init(db, ns.seed),
        "verify": lambda: cmd_verify(db),
    }
    try:
        return commands[ns.cmd]()
    except DbError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
