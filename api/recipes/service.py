"""
Recipe business logic.

Scope:
- presence checks on create, merge-on-update
- documentId resolution (numeric id first, then documentId)
- Strapi-style envelope shaping, with optional ingredient population
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException

from core import strapi
from core.db import DatabaseError
from recipe_ingredients.repository import RecipeIngredientRepository

from . import schemas
from .repository import RecipeRepository

logger = logging.getLogger(__name__)

KIND = "recipe"
RELATION = "ingredients"


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Recipe not found")


def _internal_error() -> HTTPException:
    return HTTPException(status_code=500, detail="Internal server error")


def _require_data(payload: schemas.RecipeWriteRequest) -> schemas.RecipeData:
    if payload.data is None:
        raise HTTPException(status_code=400, detail="Request must include data object")
    return payload.data


def _ingredient_entity(row: dict[str, Any]) -> dict[str, Any]:
    return strapi.entity("ingredient", row, {"name": row["name"]})


def to_entity(row: dict[str, Any], ingredients: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    attributes = schemas.RecipeAttributes.from_row(row).to_json()
    if ingredients is not None:
        attributes[RELATION] = strapi.relation([_ingredient_entity(i) for i in ingredients])
    return strapi.entity(KIND, row, attributes)


async def _populated(
    rows: list[dict[str, Any]],
    links: RecipeIngredientRepository,
    populate: str | None,
) -> list[dict[str, Any]]:
    if not strapi.wants_population(populate, RELATION):
        return [to_entity(row) for row in rows]
    grouped = await links.ingredients_for_recipes([int(row["id"]) for row in rows])
    return [to_entity(row, grouped.get(int(row["id"]), [])) for row in rows]


async def list_recipes(
    repository: RecipeRepository,
    links: RecipeIngredientRepository,
    *,
    page: int = 1,
    page_size: int = 25,
    populate: str | None = None,
    budget: int | None = None,
) -> dict[str, Any]:
    try:
        total = await repository.count_recipes(budget=budget)
        rows = await repository.list_recipes(
            limit=page_size,
            offset=strapi.offset(page, page_size),
            budget=budget,
        )
        items = await _populated(rows, links, populate)
    except DatabaseError as exc:
        logger.exception("list_recipes_failed page=%s page_size=%s", page, page_size)
        raise _internal_error() from exc

    return strapi.collection(items, page=page, page_size=page_size, total=total)


async def get_recipe(
    repository: RecipeRepository,
    links: RecipeIngredientRepository,
    identifier: str,
    *,
    populate: str | None = None,
) -> dict[str, Any]:
    try:
        row = await repository.resolve(identifier)
        if row is None:
            raise _not_found()
        (item,) = await _populated([row], links, populate)
    except DatabaseError as exc:
        logger.exception("get_recipe_failed identifier=%s", identifier)
        raise _internal_error() from exc
    return strapi.single(item)


async def create_recipe(repository: RecipeRepository, payload: schemas.RecipeWriteRequest) -> dict[str, Any]:
    data = _require_data(payload)
    if data.missing_required():
        raise HTTPException(
            status_code=400,
            detail="Missing required fields: " + ", ".join(schemas.REQUIRED_FIELDS),
        )

    try:
        row = await repository.create_recipe(
            title=data.title,
            prep_time=data.prep_time,
            difficulty=data.difficulty,
            budget=data.budget,
            description=data.description or "",
        )
    except DatabaseError as exc:
        logger.exception("create_recipe_failed title=%s", data.title)
        raise _internal_error() from exc

    logger.info("recipe_created id=%s document_id=%s", row["id"], row["document_id"])
    return strapi.single(to_entity(row))


async def update_recipe(
    repository: RecipeRepository,
    identifier: str,
    payload: schemas.RecipeWriteRequest,
) -> dict[str, Any]:
    data = _require_data(payload)

    try:
        current = await repository.resolve(identifier)
        if current is None:
            raise _not_found()
        merged = {**current, **data.provided()}
        row = await repository.update_recipe(int(current["id"]), merged)
    except DatabaseError as exc:
        logger.exception("update_recipe_failed identifier=%s", identifier)
        raise _internal_error() from exc

    if row is None:
        # Deleted between the lookup and the update.
        raise _not_found()
    return strapi.single(to_entity(row))


async def delete_recipe(repository: RecipeRepository, identifier: str) -> None:
    try:
        deleted = await repository.delete_recipe(identifier)
    except DatabaseError as exc:
        logger.exception("delete_recipe_failed identifier=%s", identifier)
        raise _internal_error() from exc
    if not deleted:
        raise _not_found()
