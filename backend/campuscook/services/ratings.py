# campuscook/services/ratings.py
# One rating per (user, recipe): a repeat submission overwrites the first.

from __future__ import annotations

import logging
from typing import Tuple

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from campuscook.core.errors import NotFoundError
from campuscook.core.security import Identity
from campuscook.db.init import RATINGS, RECIPES
from campuscook.db.models.base import utcnow
from campuscook.db.models.rating import RatingDoc
from campuscook.models.schemas import (
    RatingIn,
    RatingListOut,
    RatingOut,
    RatingUserOut,
    RatingWriteOut,
)
from campuscook.services import joins
from campuscook.services.utils import average_rating, parse_object_id

log = logging.getLogger(__name__)


def _short(doc) -> RatingOut:
    return RatingOut(id=str(doc["_id"]), rating=doc["rating"], review=doc.get("review"))


async def _overwrite(col, existing: dict, payload: RatingIn) -> dict:
    changes = {"rating": payload.rating, "updated_at": utcnow()}
    if "review" in payload.model_fields_set:
        changes["review"] = payload.review
    await col.update_one({"_id": existing["_id"]}, {"$set": changes})
    return await col.find_one({"_id": existing["_id"]})


async def upsert_rating(db, recipe_id: str, payload: RatingIn, identity: Identity) -> Tuple[RatingWriteOut, bool]:
    """Returns (body, created). created=False means an existing rating was overwritten."""
    rid = parse_object_id(recipe_id)
    if not await db[RECIPES].find_one({"_id": rid}, {"_id": 1}):
        raise NotFoundError("Recipe not found")

    uid = parse_object_id(identity.user_id, "user")
    col = db[RATINGS]
    key = {"user_id": uid, "recipe_id": rid}

    existing = await col.find_one(key)
    if existing:
        doc = await _overwrite(col, existing, payload)
        return RatingWriteOut(message="Rating updated", rating=_short(doc)), False

    rating = RatingDoc(user_id=uid, recipe_id=rid, rating=payload.rating, review=payload.review)
    try:
        res = await col.insert_one(rating.to_mongo())
    except DuplicateKeyError:
        # concurrent first submission won; ours becomes the update
        existing = await col.find_one(key)
        doc = await _overwrite(col, existing, payload)
        return RatingWriteOut(message="Rating updated", rating=_short(doc)), False

    doc = await col.find_one({"_id": res.inserted_id})
    log.info("rating added recipe=%s user=%s", rid, uid)
    return RatingWriteOut(message="Rating added", rating=_short(doc)), True


async def list_for_recipe(db, recipe_id: str) -> RatingListOut:
    rid = parse_object_id(recipe_id)
    cursor = db[RATINGS].find({"recipe_id": rid}).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
    docs = await cursor.to_list(length=None)
    users = await joins.users_by_id(db, (d["user_id"] for d in docs))

    ratings = []
    for d in docs:
        u = users.get(d["user_id"])
        ratings.append(
            RatingOut(
                id=str(d["_id"]),
                rating=d["rating"],
                review=d.get("review"),
                user=RatingUserOut(id=str(d["user_id"]), name=u.get("name") if u else None),
                createdAt=d.get("created_at"),
                updatedAt=d.get("updated_at"),
            )
        )

    avg, count = average_rating(d["rating"] for d in docs)
    return RatingListOut(ratings=ratings, averageRating=avg, totalRatings=count)
