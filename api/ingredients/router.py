"""
Ingredient API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from auth import dependencies as auth_dependencies
from core.db import Database
from core.dependencies import get_database
from recipe_ingredients.repository import RecipeIngredientRepository

from . import schemas, service
from .repository import IngredientRepository

router = APIRouter(
    prefix="/api/ingredients",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


def get_repository(database: Database = Depends(get_database)) -> IngredientRepository:
    return IngredientRepository(database)


def get_link_repository(database: Database = Depends(get_database)) -> RecipeIngredientRepository:
    return RecipeIngredientRepository(database)


@router.get("")
async def list_ingredients(
    page: int = Query(1, ge=1),
    page_size: int = Query(25, alias="pageSize", ge=1),
    populate: str | None = Query(default=None),
    name: str | None = Query(default=None, alias="filters[name][$eq]"),
    repository: IngredientRepository = Depends(get_repository),
    links: RecipeIngredientRepository = Depends(get_link_repository),
) -> dict:
    return await service.list_ingredients(
        repository,
        links,
        page=page,
        page_size=page_size,
        populate=populate,
        name=name,
    )


@router.get("/{identifier}")
async def get_ingredient(
    identifier: str,
    populate: str | None = Query(default=None),
    repository: IngredientRepository = Depends(get_repository),
    links: RecipeIngredientRepository = Depends(get_link_repository),
) -> dict:
    return await service.get_ingredient(repository, links, identifier, populate=populate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_ingredient(
    payload: schemas.IngredientWriteRequest,
    repository: IngredientRepository = Depends(get_repository),
) -> dict:
    return await service.create_ingredient(repository, payload)


@router.put("/{identifier}")
async def update_ingredient(
    identifier: str,
    payload: schemas.IngredientWriteRequest,
    repository: IngredientRepository = Depends(get_repository),
) -> dict:
    return await service.update_ingredient(repository, identifier, payload)


@router.delete("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ingredient(
    identifier: str,
    repository: IngredientRepository = Depends(get_repository),
) -> Response:
    await service.delete_ingredient(repository, identifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
