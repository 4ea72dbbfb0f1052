# campuscook/db/models/base.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    # Mongo keeps millisecond precision; trim so the written value equals the one read back
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class MongoDoc(BaseModel):
    """Stored document. `_id` is exposed as `id`; None until inserted."""

    model_config = ConfigDict(arbitrary_types_allowed=True, populate_by_name=True)

    id: Optional[ObjectId] = Field(default=None, alias="_id")

    def to_mongo(self) -> Dict[str, Any]:
        data = self.model_dump(exclude={"id"})
        if self.id is not None:
            data["_id"] = self.id
        return data
