"""
Async database access helpers (raw SQL) using aiosqlite.

`Database` owns the single shared connection. FastAPI opens it on startup,
stores it on `app.state` and closes it on shutdown (see `api/main.py`).
Repositories receive it through their constructor.

SQL parameter style:
- sqlite uses positional placeholders: ?, ?, ?, ...
"""

from __future__ import annotations

import os
import sqlite3
from typing import Any

import aiosqlite

DEFAULT_DATABASE_PATH = "./recipes.db"

# SQLite INTEGER is a signed 64-bit value.
MAX_ROW_ID = 2**63 - 1

_UNIQUE_ERROR_CODES = {
    getattr(sqlite3, "SQLITE_CONSTRAINT_UNIQUE", 2067),
    getattr(sqlite3, "SQLITE_CONSTRAINT_PRIMARYKEY", 1555),
}


# Store failures are explicit and separable from other runtime errors.
class DatabaseError(RuntimeError):
    pass


class UniqueViolationError(DatabaseError):
    pass


def database_path() -> str:
    return os.environ.get("DATABASE_PATH", DEFAULT_DATABASE_PATH).strip() or DEFAULT_DATABASE_PATH


def row_id(identifier: str) -> int | None:
    """
    Parse an ASCII decimal identifier that fits a rowid, else None.
    """
    if not (identifier.isascii() and identifier.isdigit()):
        return None
    value = int(identifier)
    return value if value <= MAX_ROW_ID else None


def _translate(exc: Exception) -> DatabaseError:
    if isinstance(exc, sqlite3.IntegrityError):
        if getattr(exc, "sqlite_errorcode", None) in _UNIQUE_ERROR_CODES:
            return UniqueViolationError(str(exc))
    return DatabaseError(str(exc))


class Database:
    def __init__(self, path: str | None = None) -> None:
        self.path = path or database_path()
        self._conn: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        if self._conn is not None:
            return None
        # Autocommit: every statement is its own transaction.
        self._conn = await aiosqlite.connect(self.path, isolation_level=None)
        self._conn.row_factory = aiosqlite.Row
        await self._conn.execute("PRAGMA foreign_keys = ON")

    async def close(self) -> None:
        if self._conn is None:
            return None
        await self._conn.close()
        self._conn = None

    def connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise RuntimeError("Database is not connected. Call connect() on startup.")
        return self._conn

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        try:
            async with self.connection().execute(sql, args) as cursor:
                row = await cursor.fetchone()
        except (sqlite3.Error, OverflowError) as exc:
            raise _translate(exc) from exc
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        try:
            async with self.connection().execute(sql, args) as cursor:
                rows = await cursor.fetchall()
        except (sqlite3.Error, OverflowError) as exc:
            raise _translate(exc) from exc
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> int:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the affected row count.
        """
        try:
            async with self.connection().execute(sql, args) as cursor:
                return cursor.rowcount
        except (sqlite3.Error, OverflowError) as exc:
            raise _translate(exc) from exc
