"""
Recipe-ingredient link business logic.

Batch linking is deliberately non-atomic: every pair is inserted as its own
statement and the inserts are issued concurrently, so a conflict on one pair
does not roll back the pairs that already landed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import HTTPException

from core.db import DatabaseError, UniqueViolationError

from . import schemas
from .repository import RecipeIngredientRepository

logger = logging.getLogger(__name__)

ALREADY_LINKED = "This ingredient is already associated with this recipe"
ALREADY_LINKED_MANY = "One or more ingredients are already associated with this recipe"


def _internal_error() -> HTTPException:
    return HTTPException(status_code=500, detail="Internal server error")


def _coerce_ids(raw: Any) -> list[int]:
    if not isinstance(raw, list):
        raise HTTPException(status_code=400, detail="ingredientIds must be an array")
    ids: list[int] = []
    for value in raw:
        if isinstance(value, int) and not isinstance(value, bool):
            ids.append(value)
        elif isinstance(value, str) and value.strip().isdecimal():
            ids.append(int(value))
        else:
            raise HTTPException(status_code=400, detail="ingredientIds must contain integers")
    return ids


async def list_ingredients(
    repository: RecipeIngredientRepository, recipe_id: int
) -> list[schemas.RecipeIngredientRead]:
    try:
        rows = await repository.ingredients_for_recipe(recipe_id)
    except DatabaseError as exc:
        logger.exception("list_recipe_ingredients_failed recipe_id=%s", recipe_id)
        raise _internal_error() from exc
    return [
        schemas.RecipeIngredientRead(
            id=int(row["id"]),
            name=str(row["name"]),
            recipe_ingredient_id=int(row["recipe_ingredient_id"]),
        )
        for row in rows
    ]


async def list_recipes(
    repository: RecipeIngredientRepository, ingredient_id: int
) -> list[schemas.LinkedRecipeRead]:
    try:
        rows = await repository.recipes_for_ingredient(ingredient_id)
    except DatabaseError as exc:
        logger.exception("list_ingredient_recipes_failed ingredient_id=%s", ingredient_id)
        raise _internal_error() from exc
    return [
        schemas.LinkedRecipeRead(
            id=int(row["id"]),
            title=row["title"],
            prep_time=row["prep_time"],
            difficulty=row["difficulty"],
            budget=row["budget"],
            description=row.get("description") or "",
        )
        for row in rows
    ]


async def link_one(
    repository: RecipeIngredientRepository, recipe_id: int, ingredient_id: int
) -> schemas.LinkResponse:
    try:
        row = await repository.link(recipe_id, ingredient_id)
    except UniqueViolationError as exc:
        raise HTTPException(status_code=400, detail=ALREADY_LINKED) from exc
    except DatabaseError as exc:
        logger.exception("link_failed recipe_id=%s ingredient_id=%s", recipe_id, ingredient_id)
        raise _internal_error() from exc

    return schemas.LinkResponse(
        id=int(row["id"]),
        recipe_id=int(row["recipe_id"]),
        ingredient_id=int(row["ingredient_id"]),
        message="Ingredient added to recipe successfully",
    )


async def link_many(
    repository: RecipeIngredientRepository, recipe_id: int, raw_ids: Any
) -> schemas.LinkManyResponse:
    ingredient_ids = _coerce_ids(raw_ids)

    results = await asyncio.gather(
        *(repository.link(recipe_id, ingredient_id) for ingredient_id in ingredient_ids),
        return_exceptions=True,
    )
    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        linked = len(results) - len(failures)
        if any(isinstance(f, UniqueViolationError) for f in failures):
            logger.info(
                "link_many_conflict recipe_id=%s linked=%s failed=%s",
                recipe_id,
                linked,
                len(failures),
            )
            raise HTTPException(status_code=400, detail=ALREADY_LINKED_MANY) from failures[0]
        logger.error(
            "link_many_failed recipe_id=%s linked=%s failed=%s",
            recipe_id,
            linked,
            len(failures),
            exc_info=failures[0],
        )
        raise _internal_error() from failures[0]

    return schemas.LinkManyResponse(
        message=f"{len(ingredient_ids)} ingredients added to recipe successfully",
        recipe_id=recipe_id,
        added_ingredient_ids=ingredient_ids,
    )


async def unlink_one(repository: RecipeIngredientRepository, recipe_id: int, ingredient_id: int) -> None:
    try:
        await repository.unlink(recipe_id, ingredient_id)
    except DatabaseError as exc:
        logger.exception("unlink_failed recipe_id=%s ingredient_id=%s", recipe_id, ingredient_id)
        raise _internal_error() from exc


async def unlink_all(repository: RecipeIngredientRepository, recipe_id: int) -> None:
    try:
        await repository.unlink_all(recipe_id)
    except DatabaseError as exc:
        logger.exception("unlink_all_failed recipe_id=%s", recipe_id)
        raise _internal_error() from exc
