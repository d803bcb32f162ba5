"""
Strapi-style response shaping.

Entities are wrapped as `{"id", "documentId", "attributes"}`, collections
carry `meta.pagination`, and populated relations are nested as
`{"data": [...]}` inside the parent's attributes.
"""

from __future__ import annotations

import math
from typing import Any

POPULATE_ALL = "*"


def document_id(kind: str, row: dict[str, Any]) -> str:
    """
    Return the stored documentId, or synthesize `<kind>_<id>` for older rows.
    """
    return row.get("document_id") or f"{kind}_{row['id']}"


def wants_population(populate: str | None, relation: str) -> bool:
    value = (populate or "").strip()
    return value in (POPULATE_ALL, relation)


def entity(kind: str, row: dict[str, Any], attributes: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": int(row["id"]),
        "documentId": document_id(kind, row),
        "attributes": attributes,
    }


def relation(entities: list[dict[str, Any]]) -> dict[str, Any]:
    return {"data": entities}


def page_count(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def pagination(*, page: int, page_size: int, total: int) -> dict[str, int]:
    return {
        "page": page,
        "pageSize": page_size,
        "pageCount": page_count(total, page_size),
        "total": total,
    }


def offset(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def collection(entities: list[dict[str, Any]], *, page: int, page_size: int, total: int) -> dict[str, Any]:
    return {
        "data": entities,
        "meta": {"pagination": pagination(page=page, page_size=page_size, total=total)},
    }


def single(item: dict[str, Any]) -> dict[str, Any]:
    return {"data": item}
