"""
Recipe-ingredient link API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from auth import dependencies as auth_dependencies
from core.db import Database
from core.dependencies import get_database

from . import schemas, service
from .repository import RecipeIngredientRepository

router = APIRouter(
    prefix="/api/recipe-ingredients",
    dependencies=[Depends(auth_dependencies.get_current_user)],
)


def get_repository(database: Database = Depends(get_database)) -> RecipeIngredientRepository:
    return RecipeIngredientRepository(database)


@router.get("/recipe/{recipe_id}/ingredients")
async def recipe_ingredients(
    recipe_id: int,
    repository: RecipeIngredientRepository = Depends(get_repository),
) -> list[schemas.RecipeIngredientRead]:
    return await service.list_ingredients(repository, recipe_id)


@router.get("/ingredient/{ingredient_id}/recipes")
async def ingredient_recipes(
    ingredient_id: int,
    repository: RecipeIngredientRepository = Depends(get_repository),
) -> list[schemas.LinkedRecipeRead]:
    return await service.list_recipes(repository, ingredient_id)


@router.post("/recipe/{recipe_id}/ingredient/{ingredient_id}", status_code=status.HTTP_201_CREATED)
async def link_ingredient(
    recipe_id: int,
    ingredient_id: int,
    repository: RecipeIngredientRepository = Depends(get_repository),
) -> schemas.LinkResponse:
    return await service.link_one(repository, recipe_id, ingredient_id)


@router.post("/recipe/{recipe_id}/ingredients", status_code=status.HTTP_201_CREATED)
async def link_ingredients(
    recipe_id: int,
    payload: schemas.LinkManyRequest,
    repository: RecipeIngredientRepository = Depends(get_repository),
) -> schemas.LinkManyResponse:
    return await service.link_many(repository, recipe_id, payload.ingredient_ids)


@router.delete("/recipe/{recipe_id}/ingredient/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_ingredient(
    recipe_id: int,
    ingredient_id: int,
    repository: RecipeIngredientRepository = Depends(get_repository),
) -> Response:
    await service.unlink_one(repository, recipe_id, ingredient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/recipe/{recipe_id}/ingredients", status_code=status.HTTP_204_NO_CONTENT)
async def unlink_ingredients(
    recipe_id: int,
    repository: RecipeIngredientRepository = Depends(get_repository),
) -> Response:
    await service.unlink_all(repository, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
