"""
Recipe API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from auth import dependencies as auth_dependencies
from core.db import Database
from core.dependencies import get_database
from recipe_ingredients.repository import RecipeIngredientRepository

from . import schemas, service
from .repository import RecipeRepository

router = APIRouter(
    prefix="/api/recipes",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


def get_repository(database: Database = Depends(get_database)) -> RecipeRepository:
    return RecipeRepository(database)


def get_link_repository(database: Database = Depends(get_database)) -> RecipeIngredientRepository:
    return RecipeIngredientRepository(database)


@router.get("")
async def list_recipes(
    page: int = Query(1, ge=1),
    page_size: int = Query(25, alias="pageSize", ge=1),
    populate: str | None = Query(default=None),
    budget: int | None = Query(default=None, alias="filters[budget][$eq]"),
    repository: RecipeRepository = Depends(get_repository),
    links: RecipeIngredientRepository = Depends(get_link_repository),
) -> dict:
    return await service.list_recipes(
        repository,
        links,
        page=page,
        page_size=page_size,
        populate=populate,
        budget=budget,
    )


@router.get("/{identifier}")
async def get_recipe(
    identifier: str,
    populate: str | None = Query(default=None),
    repository: RecipeRepository = Depends(get_repository),
    links: RecipeIngredientRepository = Depends(get_link_repository),
) -> dict:
    return await service.get_recipe(repository, links, identifier, populate=populate)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    payload: schemas.RecipeWriteRequest,
    repository: RecipeRepository = Depends(get_repository),
) -> dict:
    return await service.create_recipe(repository, payload)


@router.put("/{identifier}")
async def update_recipe(
    identifier: str,
    payload: schemas.RecipeWriteRequest,
    repository: RecipeRepository = Depends(get_repository),
) -> dict:
    return await service.update_recipe(repository, identifier, payload)


@router.delete("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    identifier: str,
    repository: RecipeRepository = Depends(get_repository),
) -> Response:
    await service.delete_recipe(repository, identifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
