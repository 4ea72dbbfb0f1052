# campuscook/db/models/rating.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from bson import ObjectId
from pydantic import Field

from campuscook.db.models.base import MongoDoc, utcnow


class RatingDoc(MongoDoc):
    # (user_id, recipe_id) is unique
    user_id: ObjectId
    recipe_id: ObjectId
    rating: int = Field(..., ge=1, le=5)
    review: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
