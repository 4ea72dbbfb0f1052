# campuscook/db/models/category.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from campuscook.db.models.base import MongoDoc, utcnow


class CategoryDoc(MongoDoc):
    name: str  # unique; recipes reference categories by name
    description: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
