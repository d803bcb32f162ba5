"""
Ingredient business logic. Mirrors `recipes.service` with a single `name` field.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException

from core import strapi
from core.db import DatabaseError
from recipe_ingredients.repository import RecipeIngredientRepository
from recipes.schemas import RecipeAttributes

from . import schemas
from .repository import IngredientRepository

logger = logging.getLogger(__name__)

KIND = "ingredient"
RELATION = "recipes"


def _not_found() -> HTTPException:
    return HTTPException(status_code=404, detail="Ingredient not found")


def _internal_error() -> HTTPException:
    return HTTPException(status_code=500, detail="Internal server error")


def _require_data(payload: schemas.IngredientWriteRequest) -> schemas.IngredientData:
    if payload.data is None:
        raise HTTPException(status_code=400, detail="Request must include data object")
    return payload.data


def _recipe_entity(row: dict[str, Any]) -> dict[str, Any]:
    return strapi.entity("recipe", row, RecipeAttributes.from_row(row).to_json())


def to_entity(row: dict[str, Any], recipes: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    attributes: dict[str, Any] = {"name": row["name"]}
    if recipes is not None:
        attributes[RELATION] = strapi.relation([_recipe_entity(r) for r in recipes])
    return strapi.entity(KIND, row, attributes)


async def _populated(
    rows: list[dict[str, Any]],
    links: RecipeIngredientRepository,
    populate: str | None,
) -> list[dict[str, Any]]:
    if not strapi.wants_population(populate, RELATION):
        return [to_entity(row) for row in rows]
    grouped = await links.recipes_for_ingredients([int(row["id"]) for row in rows])
    return [to_entity(row, grouped.get(int(row["id"]), [])) for row in rows]


async def list_ingredients(
    repository: IngredientRepository,
    links: RecipeIngredientRepository,
    *,
    page: int = 1,
    page_size: int = 25,
    populate: str | None = None,
    name: str | None = None,
) -> dict[str, Any]:
    try:
        total = await repository.count_ingredients(name=name)
        rows = await repository.list_ingredients(
            limit=page_size,
            offset=strapi.offset(page, page_size),
            name=name,
        )
        items = await _populated(rows, links, populate)
    except DatabaseError as exc:
        logger.exception("list_ingredients_failed page=%s page_size=%s", page, page_size)
        raise _internal_error() from exc

    return strapi.collection(items, page=page, page_size=page_size, total=total)


async def get_ingredient(
    repository: IngredientRepository,
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
        logger.exception("get_ingredient_failed identifier=%s", identifier)
        raise _internal_error() from exc
    return strapi.single(item)


async def create_ingredient(
    repository: IngredientRepository, payload: schemas.IngredientWriteRequest
) -> dict[str, Any]:
    data = _require_data(payload)
    name = data.resolved_name()
    if not (name or "").strip():
        raise HTTPException(status_code=400, detail="Missing required field: name")

    try:
        row = await repository.create_ingredient(name=name)
    except DatabaseError as exc:
        logger.exception("create_ingredient_failed name=%s", name)
        raise _internal_error() from exc

    logger.info("ingredient_created id=%s document_id=%s", row["id"], row["document_id"])
    return strapi.single(to_entity(row))


async def update_ingredient(
    repository: IngredientRepository,
    identifier: str,
    payload: schemas.IngredientWriteRequest,
) -> dict[str, Any]:
    data = _require_data(payload)

    try:
        current = await repository.resolve(identifier)
        if current is None:
            raise _not_found()
        name = data.resolved_name()
        if name is None:
            name = current["name"]
        row = await repository.update_ingredient(int(current["id"]), name=name)
    except DatabaseError as exc:
        logger.exception("update_ingredient_failed identifier=%s", identifier)
        raise _internal_error() from exc

    if row is None:
        raise _not_found()
    return strapi.single(to_entity(row))


async def delete_ingredient(repository: IngredientRepository, identifier: str) -> None:
    try:
        deleted = await repository.delete_ingredient(identifier)
    except DatabaseError as exc:
        logger.exception("delete_ingredient_failed identifier=%s", identifier)
        raise _internal_error() from exc
    if not deleted:
        raise _not_found()
