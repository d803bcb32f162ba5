"""
Recipe persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database, row_id

RECIPE_COLUMNS = "id, document_id, title, prep_time, difficulty, budget, description"


class RecipeRepository:
    def __init__(self, database: Database) -> None:
        self.db = database

    async def list_recipes(
        self,
        *,
        limit: int,
        offset: int,
        budget: int | None = None,
    ) -> list[dict[str, Any]]:
        if budget is None:
            return await self.db.fetch_all(
                f"""
                SELECT {RECIPE_COLUMNS}
                FROM recipes
                ORDER BY id ASC
                LIMIT ? OFFSET ?
                """,
                limit,
                offset,
            )
        return await self.db.fetch_all(
            f"""
            SELECT {RECIPE_COLUMNS}
            FROM recipes
            WHERE budget = ?
            ORDER BY id ASC
            LIMIT ? OFFSET ?
            """,
            budget,
            limit,
            offset,
        )

    async def count_recipes(self, *, budget: int | None = None) -> int:
        if budget is None:
            row = await self.db.fetch_one("SELECT count(*) AS total FROM recipes")
        else:
            row = await self.db.fetch_one(
                "SELECT count(*) AS total FROM recipes WHERE budget = ?",
                budget,
            )
        return int(row["total"]) if row is not None else 0

    async def get_by_id(self, recipe_id: int) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"SELECT {RECIPE_COLUMNS} FROM recipes WHERE id = ?",
            recipe_id,
        )

    async def get_by_document_id(self, document_id: str) -> dict[str, Any] | None:
        return await self.db.fetch_one(
            f"SELECT {RECIPE_COLUMNS} FROM recipes WHERE document_id = ?",
            document_id,
        )

    async def resolve(self, identifier: str) -> dict[str, Any] | None:
        """
        Find a recipe by numeric id first, then by documentId.
        """
        identifier = (identifier or "").strip()
        numeric_id = row_id(identifier)
        if numeric_id is not None:
            row = await self.get_by_id(numeric_id)
            if row is not None:
                return row
        return await self.get_by_document_id(identifier)

    async def create_recipe(
        self,
        *,
        title: str,
        prep_time: int,
        difficulty: int,
        budget: int,
        description: str,
    ) -> dict[str, Any]:
        row = await self.db.fetch_one(
            """
            INSERT INTO recipes (title, prep_time, difficulty, budget, description)
            VALUES (?, ?, ?, ?, ?)
            RETURNING id
            """,
            title,
            prep_time,
            difficulty,
            budget,
            description,
        )
        if row is None:
            raise RuntimeError("Failed to insert recipe.")

        recipe_id = int(row["id"])
        created = await self.db.fetch_one(
            f"""
            UPDATE recipes
            SET document_id = ?
            WHERE id = ?
            RETURNING {RECIPE_COLUMNS}
            """,
            f"recipe_{recipe_id}",
            recipe_id,
        )
        if created is None:
            raise RuntimeError("Failed to set recipe documentId.")
        return created

    async def update_recipe(self, recipe_id: int, fields: dict[str, Any]) -> dict[str, Any] | None:
        """
        Persist a fully merged recipe; older rows get their documentId written back.
        """
        return await self.db.fetch_one(
            f"""
            UPDATE recipes
            SET title = ?,
                prep_time = ?,
                difficulty = ?,
                budget = ?,
                description = ?,
                document_id = COALESCE(document_id, 'recipe_' || id)
            WHERE id = ?
            RETURNING {RECIPE_COLUMNS}
            """,
            fields["title"],
            fields["prep_time"],
            fields["difficulty"],
            fields["budget"],
            fields["description"],
            recipe_id,
        )

    async def delete_recipe(self, identifier: str) -> bool:
        """
        Delete by numeric id first, then by documentId. Join rows cascade.
        """
        identifier = (identifier or "").strip()
        numeric_id = row_id(identifier)
        if numeric_id is not None:
            if await self.db.execute("DELETE FROM recipes WHERE id = ?", numeric_id) > 0:
                return True
        return await self.db.execute("DELETE FROM recipes WHERE document_id = ?", identifier) > 0
