# campuscook/db/models/user.py
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from campuscook.db.models.base import MongoDoc, utcnow


class UserDoc(MongoDoc):
    name: str
    email: str  # stored lower-cased; unique index
    password_hash: str
    role: Literal["user", "admin"] = "user"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
