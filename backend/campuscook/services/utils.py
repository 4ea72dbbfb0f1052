# campuscook/services/utils.py
# Small helpers shared by the domain services: id parsing, rating math,
# document -> response shaping.

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId

from campuscook.core.errors import ValidationError
from campuscook.models.schemas import AuthorOut, RecipeOut


def parse_object_id(value: Any, what: str = "recipe") -> ObjectId:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {what} ID format")


def round_rating(value: float) -> float:
    # half-up to one decimal (4.25 -> 4.3); round() would give 4.2
    return math.floor(value * 10 + 0.5) / 10


def average_rating(values: Iterable[int]) -> tuple[float, int]:
    """(mean rounded to 1 decimal, count). No ratings -> (0, 0)."""
    vals = list(values)
    if not vals:
        return 0, 0
    return round_rating(sum(vals) / len(vals)), len(vals)


def author_out(user: Optional[Mapping[str, Any]], fallback_id: Any = None) -> Optional[AuthorOut]:
    if user is None:
        # author account deleted after the recipe was written
        return AuthorOut(id=str(fallback_id)) if fallback_id is not None else None
    return AuthorOut(id=str(user["_id"]), name=user.get("name"), email=user.get("email"))


def recipe_out(doc: Mapping[str, Any], author: Optional[Mapping[str, Any]] = None, **extra: Any) -> RecipeOut:
    return RecipeOut(
        id=str(doc["_id"]),
        title=doc.get("title", ""),
        description=doc.get("description"),
        ingredients=list(doc.get("ingredients") or []),
        steps=list(doc.get("steps") or []),
        prep_time=doc.get("prep_time"),
        difficulty=doc.get("difficulty"),
        category=doc.get("category", ""),
        image_url=doc.get("image_url"),
        author=author_out(author, doc.get("author_id")),
        createdAt=doc.get("created_at"),
        updatedAt=doc.get("updated_at"),
        **extra,
    )
