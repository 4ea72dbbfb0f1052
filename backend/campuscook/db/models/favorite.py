# campuscook/db/models/favorite.py
from __future__ import annotations

from datetime import datetime

from bson import ObjectId
from pydantic import Field

from campuscook.db.models.base import MongoDoc, utcnow


class FavoriteDoc(MongoDoc):
    # (user_id, recipe_id) is unique
    user_id: ObjectId
    recipe_id: ObjectId
    created_at: datetime = Field(default_factory=utcnow)
