"""
Startup DDL.

Tables are created if absent. The `document_id` column was added after the
first release, so it is also attempted as an additive migration; an existing
column is not an error.
"""

from __future__ import annotations

import logging

from .db import Database, DatabaseError

logger = logging.getLogger(__name__)

TABLES = (
    """
    CREATE TABLE IF NOT EXISTS recipes (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      document_id TEXT,
      title TEXT NOT NULL,
      prep_time INTEGER NOT NULL,
      difficulty INTEGER NOT NULL,
      budget INTEGER NOT NULL,
      description TEXT NOT NULL DEFAULT ''
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ingredients (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      document_id TEXT,
      name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS recipe_ingredients (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      recipe_id INTEGER NOT NULL,
      ingredient_id INTEGER NOT NULL,
      FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE,
      FOREIGN KEY (ingredient_id) REFERENCES ingredients(id) ON DELETE CASCADE,
      UNIQUE (recipe_id, ingredient_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS users (
      id INTEGER PRIMARY KEY AUTOINCREMENT,
      username TEXT NOT NULL UNIQUE,
      email TEXT NOT NULL UNIQUE,
      password TEXT NOT NULL,
      created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    )
    """,
)

DOCUMENT_ID_TABLES = ("recipes", "ingredients")


async def _add_document_id_column(database: Database, table: str) -> None:
    try:
        await database.execute(f"ALTER TABLE {table} ADD COLUMN document_id TEXT")
    except DatabaseError as exc:
        # SQLite reports an existing column as a plain SQLITE_ERROR; only the message tells it apart.
        if "duplicate column" not in str(exc).lower():
            raise
        return None
    logger.info("column_added table=%s column=document_id", table)


async def init_schema(database: Database) -> None:
    for ddl in TABLES:
        await database.execute(ddl)

    for table in DOCUMENT_ID_TABLES:
        await _add_document_id_column(database, table)
        await database.execute(
            f"CREATE UNIQUE INDEX IF NOT EXISTS ux_{table}_document_id ON {table} (document_id)"
        )
