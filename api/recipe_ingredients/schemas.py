"""
Pydantic schemas for recipe-ingredient link endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class LinkManyRequest(BaseModel):
    # Left untyped so a non-array gets the dedicated 400 message from the service.
    ingredient_ids: Any = Field(default=None, alias="ingredientIds")


class RecipeIngredientRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    recipe_ingredient_id: int = Field(alias="recipeIngredientId")


class LinkedRecipeRead(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    prep_time: int = Field(alias="prepTime")
    difficulty: int
    budget: int
    description: str = ""


class LinkResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    recipe_id: int = Field(alias="recipeId")
    ingredient_id: int = Field(alias="ingredientId")
    message: str


class LinkManyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    recipe_id: int = Field(alias="recipeId")
    added_ingredient_ids: list[int] = Field(alias="addedIngredientIds")
