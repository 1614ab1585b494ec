# Rev 0.1.0

"""Connection handling for the projects store.
- One connection per call: `with db.connection() as conn:` closes it on every path
- sqlite: foreign_keys=ON, WAL, DECIMAL/TIME/TIMESTAMP columns converted to Python types
- mysql: PyMySQL with dict rows, TLS disabled unless configured
"""
from __future__ import annotations
import re
import sqlite3
from contextlib import contextmanager
from datetime import datetime, time
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterator, List

import pymysql
import pymysql.cursors

from ..exceptions import DbError
from ..utils.config import DbConfig
from ..utils.logging_setup import get_logger

CENTS = Decimal("0.01")

# DECIMAL(7,2) columns come back as Decimal with two places
sqlite3.register_adapter(Decimal, str)
sqlite3.register_converter("DECIMAL", lambda b: Decimal(b.decode()).quantize(CENTS))
sqlite3.register_adapter(time, lambda t: t.isoformat())
sqlite3.register_converter("TIME", lambda b: time.fromisoformat(b.decode()))
sqlite3.register_adapter(datetime, lambda d: d.isoformat(" "))
sqlite3.register_converter("TIMESTAMP", lambda b: datetime.fromisoformat(b.decode()))
sqlite3.register_converter("DATETIME", lambda b: datetime.fromisoformat(b.decode()))


class SQLiteDialect:
    name = "sqlite"
    errors = (sqlite3.Error,)
    last_insert_id_sql = "SELECT last_insert_rowid() AS last_id FROM {table} LIMIT 1"

    def connect(self, config: DbConfig) -> sqlite3.Connection:
        path = Path(config.path)
        path.parent.mkdir(parents=True, exist_ok=True)
        # isolation_level=None: autocommit until begin() issues BEGIN
        conn = sqlite3.connect(
            path,
            detect_types=sqlite3.PARSE_DECLTYPES | sqlite3.PARSE_COLNAMES,
            isolation_level=None,
        )
        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA foreign_keys=ON;")
        except sqlite3.Error:
            conn.close()
            raise
        return conn

    def render(self, sql: str) -> str:
        return sql

    def begin(self, conn: sqlite3.Connection) -> None:
        conn.execute("BEGIN")

    def run_script(self, conn: sqlite3.Connection, sql: str) -> None:
        conn.executescript(sql)


class MySQLDialect:
    name = "mysql"
    errors = (pymysql.MySQLError,)
    last_insert_id_sql = "SELECT LAST_INSERT_ID() AS last_id FROM {table} LIMIT 1"

    def connect(self, config: DbConfig) -> pymysql.connections.Connection:
        return pymysql.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.schema,
            ssl_disabled=not config.tls_enabled,
            cursorclass=pymysql.cursors.DictCursor,
            charset="utf8mb4",
            autocommit=True,
        )

    def render(self, sql: str) -> str:
        return sql.replace("?", "%s")

    def begin(self, conn: Any) -> None:
        conn.autocommit(False)
        conn.begin()

    def run_script(self, conn: Any, sql: str) -> None:
        with conn.cursor() as cur:
            for stmt in split_statements(sql):
                cur.execute(stmt)


DIALECTS = {
    "sqlite": SQLiteDialect,
    "mysql": MySQLDialect,
}


def dialect_for(driver: str):
    try:
        return DIALECTS[driver]()
    except KeyError:
        raise DbError(f"Unsupported database driver: {driver!r}") from None


_COMMENT = re.compile(r"^\s*--.*$", re.MULTILINE)


def split_statements(sql: str) -> List[str]:
    """Split a plain SQL script on ';' (no procedures, no ';' inside literals)."""
    body = _COMMENT.sub("", sql)
    return [s.strip() for s in body.split(";") if s.strip()]


class Database:
    def __init__(self, config: DbConfig) -> None:
        self.config = config
        self.dialect = dialect_for(config.driver)
        self._log = get_logger("DB")

    def connect(self):
        target = self.config.describe()
        self._log.debug("Connecting to %s", target)
        try:
            conn = self.dialect.connect(self.config)
        except self.dialect.errors as e:
            self._log.error("Connection to %s failed: %s", target, e)
            raise DbError(f"Unable to connect to {target}: {e}") from e
        self._log.debug("Connection to %s successful", target)
        return conn

    @contextmanager
    def connection(self) -> Iterator[Any]:
        conn = self.connect()
        try:
            yield conn
        finally:
            conn.close()

    def run_script(self, path: Path) -> None:
        sql = Path(path).read_text(encoding="utf-8")
        with self.connection() as conn:
            try:
                self.dialect.run_script(conn, sql)
            except self.dialect.errors as e:
                raise DbError(f"Script {Path(path).name} failed: {e}") from e
        self._log.info("Applied %s to %s", Path(path).name, self.config.describe())
