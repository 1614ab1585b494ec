# Rev 0.1.0

# diy_projects/main.py
from __future__ import annotations
import argparse
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .app_context import AppContext
from .ui.projects_app import ProjectsApp
from .utils.config import DbConfig, load_settings
from .utils.logging_setup import get_logger, setup_logging


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="diy-projects", description="Track do-it-yourself projects")
    p.add_argument("--config", type=Path, default=None, help="Settings JSON (default: XDG config dir)")
    p.add_argument("--db", type=Path, default=None, help="SQLite file to use instead of the configured store")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return p.parse_args(argv)


def build_config(ns: argparse.Namespace) -> tuple[DbConfig, dict]:
    settings = load_settings(ns.config)
    config = DbConfig.from_settings(settings)
    if ns.db is not None:
        config = replace(config, driver="sqlite", path=ns.db)
    return config, settings


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    config, settings = build_config(ns)
    setup_logging(ns.log_level or settings["logging"].get("level"))
    get_logger("main").info("Starting with %s", config.describe())

    # --- DI wiring ---
    ctx = AppContext.create(config)
    ProjectsApp(ctx.project_service).process_user_selections()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
