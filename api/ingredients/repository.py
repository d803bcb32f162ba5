"""
Ingredient persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database, row_id

INGREDIENT_COLUMNS = "id, document_id, name"


class IngredientRepository:
    def __init__(self, database: Database) -> None:
        self.db = database

    async def list_ingredients(self, *, limit: int, offset: int, name: str | None = None) -> list[dict[str, Any]]:
        if name is None:
            return await self.db.fetch_all(
                f"""
                SELECT {INGREDIENT_COLUMNS}
                FROM ingredients
                ORDER BY id ASC
                LIMIT ? OFFSET ?
                """,
                limit,
                offset,
            )
        return await self.db.fetch_all(
            f"""
            SELECT {INGREDIENT_COLUMNS}
            FROM ingredients
            WHERE name = ?
            ORDER BY id ASC
            LIMIT ? OFFSET ?
            """,
            name,
            limit,
            offset,
        )

    async def count_ingredients(self, *, name: str | None = None) -> int:
        if name is None:
            row = await self.db.fetch_one("SELECT count(*) AS total FROM ingredients")
        else:
            row = await self.db.fetch_one("SELECT count(*) AS total FROM ingredients WHERE name = ?", name)
        return int(row["total"]) if row is not None else 0

    async def resolve(self, identifier: str) -> dict[str, Any] | None:
        """
        Find an ingredient by numeric id first, then by documentId.
        """
        identifier = (identifier or "").strip()
        numeric_id = row_id(identifier)
        if numeric_id is not None:
            row = await self.db.fetch_one(
                f"SELECT {INGREDIENT_COLUMNS} FROM ingredients WHERE id = ?",
                numeric_id,
            )
            if row is not None:
                return row
        return await self.db.fetch_one(
            f"SELECT {INGREDIENT_COLUMNS} FROM ingredients WHERE document_id = ?",
            identifier,
        )

    async def create_ingredient(self, *, name: str) -> dict[str, Any]:
        row = await self.db.fetch_one(
            "INSERT INTO ingredients (name) VALUES (?) RETURNING id",
            name,
        )
        if row is None:
            raise RuntimeError("Failed to insert ingredient.")

        ingredient_id = int(row["id"])
        created = await self.db.fetch_one(
            f"""
            UPDATE ingredients
            SET document_id = ?
            WHERE id = ?
            RETURNING {INGREDIENT_COLUMNS}
            """,
            f"ingredient_{ingredient_id}",
            ingredient_id,
        )
        if created is None:
            raise RuntimeError("Failed to set ingredient documentId.")
        return created

    async def update_ingredient(self, ingredient_id: int, *, name: str) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"""
            UPDATE ingredients
            SET name = ?,
                document_id = COALESCE(document_id, 'ingredient_' || id)
            WHERE id = ?
            RETURNING {INGREDIENT_COLUMNS}
            """,
            name,
            ingredient_id,
        )

    async def delete_ingredient(self, identifier: str) -> bool:
        """
        Delete by numeric id first, then by documentId. Join rows cascade.
        """
        identifier = (identifier or "").strip()
        numeric_id = row_id(identifier)
        if numeric_id is not None:
            if await self.db.execute("DELETE FROM ingredients WHERE id = ?", numeric_id) > 0:
                return True
        return await self.db.execute("DELETE FROM ingredients WHERE document_id = ?", identifier) > 0
