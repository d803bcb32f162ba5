"""
Pydantic schemas for recipe endpoints.

Request payloads use the `{"data": {...}}` wrapper. Every field is optional
at the schema level; create-time presence rules live in the service so the
client gets a single message naming the required fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

REQUIRED_FIELDS = ("title", "prepTime", "difficulty", "budget")


class RecipeData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    prep_time: int | None = Field(default=None, alias="prepTime")
    difficulty: int | None = None
    budget: int | None = None
    description: str | None = None

    def missing_required(self) -> list[str]:
        missing = []
        if not (self.title or "").strip():
            missing.append("title")
        if self.prep_time is None:
            missing.append("prepTime")
        if self.difficulty is None:
            missing.append("difficulty")
        if self.budget is None:
            missing.append("budget")
        return missing

    def provided(self) -> dict[str, Any]:
        """
        Column -> value for every field the client actually sent (nulls dropped).
        """
        return self.model_dump(exclude_none=True)


class RecipeWriteRequest(BaseModel):
    data: RecipeData | None = None


class RecipeAttributes(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    prep_time: int = Field(alias="prepTime")
    difficulty: int
    budget: int
    description: str = ""

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "RecipeAttributes":
        return cls(
            title=row["title"],
            prep_time=row["prep_time"],
            difficulty=row["difficulty"],
            budget=row["budget"],
            description=row.get("description") or "",
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
