"""
Pydantic schemas for ingredient endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel


class IngredientData(BaseModel):
    name: str | None = None
    # Historical field name, still accepted from older clients.
    nom: str | None = None

    def resolved_name(self) -> str | None:
        """
        First present wins: `name`, then `nom`.
        """
        if self.name is not None:
            return self.name
        return self.nom


class IngredientWriteRequest(BaseModel):
    data: IngredientData | None = None
