# campuscook/db/models/recipe.py
from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from bson import ObjectId
from pydantic import Field

from campuscook.db.models.base import MongoDoc, utcnow


class RecipeDoc(MongoDoc):
    title: str
    description: Optional[str] = None
    ingredients: List[str]
    steps: List[str]
    prep_time: Optional[int] = None
    difficulty: Optional[Literal["easy", "medium", "hard"]] = None
    category: str  # Category.name
    image_url: Optional[str] = None
    author_id: ObjectId
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
