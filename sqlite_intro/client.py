"""SQLite metadata client.

Usage:
    client  = SqliteClient("app.db")
    version = client.get_version()
    funcs   = client.list_functions()
    client.close()

Each ``list_*`` method reads one of SQLite's introspection table-valued
pragmas. ``pragma_module_list``, ``pragma_pragma_list`` and
``pragma_function_list`` are available by default since SQLite 3.30 (and
before that only with SQLITE_INTROSPECTION_PRAGMAS); builds compiled with
SQLITE_OMIT_INTROSPECTION_PRAGMAS lack them, and those calls raise
SourceUnavailable.
"""

import sqlite3
from pathlib import Path
from typing import Any

from sqlite_intro.models import FunctionInfo, Identifiers

MEMORY = ":memory:"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class IntrospectionError(Exception):
    """Base exception for all introspection errors."""


class SourceUnavailable(IntrospectionError):
    """Raised when the database cannot be opened or a metadata query fails."""


class MalformedRow(IntrospectionError):
    """Raised when a metadata row does not match the shape of its section."""

    def __init__(self, section: str, row: Any, reason: str) -> None:
        self.section = section
        self.row = row
        self.reason = reason
        super().__init__(f"{section}: malformed row {row!r} ({reason})")


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class SqliteClient:
    """Thin read-only wrapper around a sqlite3 connection."""

    def __init__(self, database: str, timeout: float = 5.0, read_only: bool = True) -> None:
        self.database = database
        self._timeout = timeout
        self._read_only = read_only
        self._conn: sqlite3.Connection | None = None

    def __enter__(self) -> "SqliteClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def get_version(self) -> str:
        return self._query_one("SELECT sqlite_version()")[0]

    def get_identifiers(self) -> Identifiers:
        row = self._query_one(
            "SELECT application_id, user_version, schema_version "
            "FROM pragma_application_id(), pragma_user_version(), pragma_schema_version()"
        )
        return Identifiers(*row)

    def list_modules(self) -> list[str]:
        return [r[0] for r in self._query("SELECT name FROM pragma_module_list()")]

    def list_settings(self) -> list[str]:
        return [r[0] for r in self._query("SELECT name FROM pragma_pragma_list()")]

    def list_compile_options(self) -> list[str]:
        return [r[0] for r in self._query("SELECT compile_options FROM pragma_compile_options()")]

    def list_functions(self) -> list[FunctionInfo]:
        rows = self._query(
            "SELECT name, builtin, type, enc, narg, flags FROM pragma_function_list()"
        )
        return [FunctionInfo(*r) for r in rows]

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        if self._conn is not None:
            return self._conn

        try:
            if self.database == MEMORY or not self._read_only:
                conn = sqlite3.connect(self.database, timeout=self._timeout)
            else:
                # mode=ro refuses to create the file when it does not exist
                uri = Path(self.database).resolve().as_uri() + "?mode=ro"
                conn = sqlite3.connect(uri, timeout=self._timeout, uri=True)
        except sqlite3.Error as exc:
            raise SourceUnavailable(
                f"Unable to open SQLite database '{self.database}': {exc}"
            ) from exc

        self._conn = conn
        return conn

    def _query(self, sql: str) -> list[tuple]:
        conn = self._connect()
        try:
            rows = conn.execute(sql).fetchall()
        except sqlite3.Error as exc:
            raise SourceUnavailable(
                f"Query failed against '{self.database}': {exc}"
            ) from exc
        return rows

    def _query_one(self, sql: str) -> tuple:
        rows = self._query(sql)
        if not rows:
            raise SourceUnavailable(f"Query returned no row against '{self.database}': {sql}")
        return rows[0]
