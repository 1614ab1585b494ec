# Rev 0.1.0

# diy_projects – logging setup
from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .paths import logs_dir

APP_NAME = "diy_projects"
LOG_LEVEL_ENV = "DIY_PROJECTS_LOG_LEVEL"

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{APP_NAME}.{name}")


def setup_logging(level_name: Optional[str] = None, log_dir: Optional[Path] = None) -> Path:
    # Level via env (DEBUG/INFO/WARNING/ERROR), then argument, default INFO
    level_name = (os.environ.get(LOG_LEVEL_ENV) or level_name or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    log_dir = log_dir or logs_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / f"{APP_NAME}.log"

    root = logging.getLogger()
    root.setLevel(level)

    # File: rotate at 5MB, keep 7 backups
    fh = RotatingFileHandler(logfile, maxBytes=5_000_000, backupCount=7, encoding="utf-8")
    fh.setFormatter(logging.Formatter(FMT, DATEFMT))
    fh.setLevel(level)
    root.addHandler(fh)

    # Console: stderr and WARNING+ only, stdout belongs to the menu
    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(logging.Formatter(FMT, DATEFMT))
    ch.setLevel(max(level, logging.WARNING))
    root.addHandler(ch)

    # Uncaught exceptions → log as ERROR
    def _excepthook(exctype, value, tb):
        logging.getLogger("unhandled").exception("Uncaught exception", exc_info=(exctype, value, tb))
        # keep default behavior
        sys.__excepthook__(exctype, value, tb)
    sys.excepthook = _excepthook

    get_logger("logging").info("Logging initialized at %s; file: %s", level_name, logfile)
    return logfile
