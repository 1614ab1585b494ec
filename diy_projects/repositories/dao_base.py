# Rev 0.1.0

"""Shared DAO plumbing.

Transaction boundaries, typed statement parameters, generated-key lookup
and the generic row → entity mapper used by every DAO.
"""
from __future__ import annotations
import dataclasses
import re
import types
import typing
from contextlib import closing, contextmanager
from dataclasses import dataclass, field
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple, Type, TypeVar

from ..models.types import ParamKind
from ..utils.logging_setup import get_logger
from .db import Database

T = TypeVar("T")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DaoError(RuntimeError):
    """Raised by DaoBase helpers; DAOs wrap it into DbError."""


@dataclass(frozen=True)
class Parameter:
    kind: ParamKind
    value: Any = None


@dataclass
class Statement:
    """SQL text with '?' markers and the parameters bound to it (1-based)."""
    sql: str
    parameters: Dict[int, Parameter] = field(default_factory=dict)

    def values(self) -> Tuple[Any, ...]:
        count = self.sql.count("?")
        missing = [i for i in range(1, count + 1) if i not in self.parameters]
        if missing:
            raise DaoError(f"No value bound for parameter(s) {missing}")
        return tuple(self.parameters[i].value for i in range(1, count + 1))


# declared Python type → parameter kind; matched by identity, so bool is not int
_KIND_BY_TYPE: Dict[type, ParamKind] = {
    int: ParamKind.INTEGER,
    str: ParamKind.STRING,
    float: ParamKind.DOUBLE,
    Decimal: ParamKind.DECIMAL,
    time: ParamKind.OTHER,
}


def _expect(*types_: type) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, types_):
            raise DaoError(f"Value {value!r} is not a {types_[0].__name__}")
        return value
    return check


def _as_double(value: Any) -> float:
    return float(_expect(float, int)(value))


_BINDERS: Dict[ParamKind, Callable[[Any], Any]] = {
    ParamKind.INTEGER: _expect(int),
    ParamKind.DECIMAL: _expect(Decimal),
    ParamKind.DOUBLE: _as_double,
    ParamKind.STRING: _expect(str),
    ParamKind.OTHER: lambda v: v,
}


def camel_to_snake(identifier: str) -> str:
    """rowInsertTime → row_insert_time. Names without capitals pass through."""
    return "".join(f"_{ch.lower()}" if ch.isupper() else ch for ch in identifier)


def column_for(f: dataclasses.Field) -> str:
    return f.metadata.get("column") or camel_to_snake(f.name)


def _unwrap_optional(hint: Any) -> Any:
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is getattr(types, "UnionType", None):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
        return tuple(typing.get_origin(a) or a for a in args)
    return typing.get_origin(hint) or hint


def _coerce(value: Any, target: Any) -> Any:
    if target is time and isinstance(value, timedelta):
        # MySQL TIME arrives as a duration since midnight
        return (datetime.min + value).time()
    if target is datetime and isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class DaoBase:
    """Base for DAOs bound to one Database."""

    def __init__(self, db: Database) -> None:
        self._db = db
        self._log = get_logger(type(self).__name__)

    @property
    def dialect(self):
        return self._db.dialect

    # ---------- transactions ----------

    def start_transaction(self, conn) -> None:
        self.dialect.begin(conn)

    def commit_transaction(self, conn) -> None:
        conn.commit()

    def rollback_transaction(self, conn) -> None:
        conn.rollback()

    @contextmanager
    def transaction(self, conn) -> Iterator[Any]:
        """BEGIN; COMMIT on normal exit, ROLLBACK and re-raise otherwise."""
        self.start_transaction(conn)
        try:
            yield conn
        except BaseException:
            self._log.warning("Rolling back transaction")
            self.rollback_transaction(conn)
            raise
        self.commit_transaction(conn)

    # ---------- statements ----------

    def bind(self, stmt: Statement, index: int, value: Any, declared_type: type) -> None:
        kind = _KIND_BY_TYPE.get(declared_type)
        if kind is None:
            name = getattr(declared_type, "__name__", repr(declared_type))
            raise DaoError(f"Unsupported class type: {name}")
        if value is None:
            stmt.parameters[index] = Parameter(kind, None)
            return
        binder = _BINDERS.get(kind)
        if binder is None:
            raise DaoError(f"Unknown parameter type: {declared_type.__name__}")
        stmt.parameters[index] = Parameter(kind, binder(value))

    def execute(self, conn, stmt: Statement):
        cur = conn.cursor()
        cur.execute(self.dialect.render(stmt.sql), stmt.values())
        return cur

    def query(self, conn, stmt: Statement, entity: Type[T]) -> list[T]:
        with closing(self.execute(conn, stmt)) as cur:
            return [self.extract(row, entity) for row in cur.fetchall()]

    def last_inserted_id(self, conn, table: str) -> int:
        if not _IDENTIFIER.match(table):
            raise DaoError(f"Invalid table name: {table!r}")
        with closing(conn.cursor()) as cur:
            cur.execute(self.dialect.last_insert_id_sql.format(table=table))
            row = cur.fetchone()
        if row is None:
            raise DaoError("Unable to retrieve the primary key value. No result set!")
        return int(row["last_id"])

    def next_sequence_number(self, conn, id_: int, table: str, id_column: str) -> int:
        """Rows in `table` whose `id_column` equals `id_`, plus one (next step_order)."""
        for name in (table, id_column):
            if not _IDENTIFIER.match(name):
                raise DaoError(f"Invalid identifier: {name!r}")
        stmt = Statement(f"SELECT COUNT(*) AS n FROM {table} WHERE {id_column} = ?")
        self.bind(stmt, 1, id_, int)
        with closing(self.execute(conn, stmt)) as cur:
            row = cur.fetchone()
        return int(row["n"]) + 1 if row is not None else 1

    # ---------- row mapping ----------

    def extract(self, row: Mapping[str, Any], entity: Type[T]) -> T:
        """Build an `entity` from the row the caller is positioned on.

        Each dataclass field reads the column named by its `column` metadata,
        or its name converted to snake_case. Columns missing from the row, or
        NULL, leave the field at its constructor default.
        """
        try:
            obj = entity()
            hints = typing.get_type_hints(entity)
            columns = set(row.keys())
            for f in dataclasses.fields(entity):
                col = column_for(f)
                if col not in columns:
                    continue
                value = row[col]
                if value is None:
                    continue
                target = _unwrap_optional(hints.get(f.name, Any))
                if not isinstance(target, tuple):
                    value = _coerce(value, target)
                if target is not Any and not isinstance(value, target):
                    raise TypeError(
                        f"column {col} holds {type(value).__name__}, field {f.name} expects {target}"
                    )
                setattr(obj, f.name, value)
            return obj
        except Exception as e:
            raise DaoError(f"Unable to create object of type {entity.__name__}") from e
