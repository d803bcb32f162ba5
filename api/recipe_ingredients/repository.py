"""
Recipe <-> ingredient link persistence.

Everything here is keyed by numeric ids; documentId resolution belongs to the
resource repositories.
"""

from __future__ import annotations

from typing import Any

from core.db import Database


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


class RecipeIngredientRepository:
    def __init__(self, database: Database) -> None:
        self.db = database

    async def ingredients_for_recipe(self, recipe_id: int) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            """
            SELECT i.id, i.name, ri.id AS recipe_ingredient_id
            FROM ingredients i
            INNER JOIN recipe_ingredients ri ON i.id = ri.ingredient_id
            WHERE ri.recipe_id = ?
            ORDER BY ri.id ASC
            """,
            recipe_id,
        )

    async def recipes_for_ingredient(self, ingredient_id: int) -> list[dict[str, Any]]:
        return await self.db.fetch_all(
            """
            SELECT r.id, r.title, r.prep_time, r.difficulty, r.budget, r.description
            FROM recipes r
            INNER JOIN recipe_ingredients ri ON r.id = ri.recipe_id
            WHERE ri.ingredient_id = ?
            ORDER BY ri.id ASC
            """,
            ingredient_id,
        )

    async def ingredients_for_recipes(self, recipe_ids: list[int]) -> dict[int, list[dict[str, Any]]]:
        """
        Batch lookup used by `populate`: recipe id -> linked ingredient rows.
        """
        grouped: dict[int, list[dict[str, Any]]] = {rid: [] for rid in recipe_ids}
        if not recipe_ids:
            return grouped
        rows = await self.db.fetch_all(
            f"""
            SELECT ri.recipe_id AS owner_id, i.id, i.document_id, i.name
            FROM ingredients i
            INNER JOIN recipe_ingredients ri ON i.id = ri.ingredient_id
            WHERE ri.recipe_id IN ({_placeholders(len(recipe_ids))})
            ORDER BY ri.id ASC
            """,
            *recipe_ids,
        )
        for row in rows:
            grouped[int(row.pop("owner_id"))].append(row)
        return grouped

    async def recipes_for_ingredients(self, ingredient_ids: list[int]) -> dict[int, list[dict[str, Any]]]:
        """
        Batch lookup used by `populate`: ingredient id -> linked recipe rows.
        """
        grouped: dict[int, list[dict[str, Any]]] = {iid: [] for iid in ingredient_ids}
        if not ingredient_ids:
            return grouped
        rows = await self.db.fetch_all(
            f"""
            SELECT ri.ingredient_id AS owner_id,
                   r.id, r.document_id, r.title, r.prep_time, r.difficulty, r.budget, r.description
            FROM recipes r
            INNER JOIN recipe_ingredients ri ON r.id = ri.recipe_id
            WHERE ri.ingredient_id IN ({_placeholders(len(ingredient_ids))})
            ORDER BY ri.id ASC
            """,
            *ingredient_ids,
        )
        for row in rows:
            grouped[int(row.pop("owner_id"))].append(row)
        return grouped

    async def link(self, recipe_id: int, ingredient_id: int) -> dict[str, Any]:
        """
        Insert one join row. Raises `UniqueViolationError` if the pair exists.
        """
        row = await self.db.fetch_one(
            """
            INSERT INTO recipe_ingredients (recipe_id, ingredient_id)
            VALUES (?, ?)
            RETURNING id, recipe_id, ingredient_id
            """,
            recipe_id,
            ingredient_id,
        )
        if row is None:
            raise RuntimeError("Failed to insert recipe ingredient.")
        return row

    async def unlink(self, recipe_id: int, ingredient_id: int) -> int:
        return await self.db.execute(
            """
            DELETE FROM recipe_ingredients
            WHERE recipe_id = ? AND ingredient_id = ?
            """,
            recipe_id,
            ingredient_id,
        )

    async def unlink_all(self, recipe_id: int) -> int:
        return await self.db.execute(
            "DELETE FROM recipe_ingredients WHERE recipe_id = ?",
            recipe_id,
        )
