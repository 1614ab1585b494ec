# diy_projects/utils/config.py
# Rev 0.1.0
from __future__ import annotations
import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.types import DriverName
from .logging_setup import get_logger
from .paths import config_dir, default_db_path

_log = get_logger("config")


def settings_file() -> Path:
    return config_dir() / "settings.json"


_DEFAULTS: Dict[str, Any] = {
    "database": {
        "driver": "sqlite",
        "path": None,           # sqlite only; None → XDG data dir
        "host": "localhost",
        "port": 3306,
        "schema": "projects",
        "user": "projects",
        "password": "projects",
        "tls_enabled": False,
    },
    "logging": {
        "level": "INFO",
    },
}


def _merged(data: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(_DEFAULTS)
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(out.get(section), dict):
            out[section].update(values)
        else:
            out[section] = values
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            return _merged(data)
        except (OSError, ValueError) as e:
            _log.warning("Ignoring unreadable settings %s: %s", path, e)
            return copy.deepcopy(_DEFAULTS)
    return copy.deepcopy(_DEFAULTS)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


@dataclass(frozen=True)
class DbConfig:
    """Connection settings passed to Database at startup."""
    driver: DriverName = "sqlite"
    host: str = "localhost"
    port: int = 3306
    schema: str = "projects"
    user: str = "projects"
    password: str = "projects"
    tls_enabled: bool = False
    path: Optional[Path] = None

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "DbConfig":
        db = {**_DEFAULTS["database"], **settings.get("database", {})}
        path = db.get("path")
        return cls(
            driver=str(db["driver"]).lower(),
            host=db["host"],
            port=int(db["port"]),
            schema=db["schema"],
            user=db["user"],
            password=db["password"],
            tls_enabled=bool(db["tls_enabled"]),
            path=Path(path).expanduser() if path else default_db_path(),
        )

    def describe(self) -> str:
        """Connection target without the password, for logs."""
        if self.driver == "sqlite":
            return f"sqlite:{self.path}"
        return f"{self.driver}://{self.user}@{self.host}:{self.port}/{self.schema}?tls={self.tls_enabled}"
