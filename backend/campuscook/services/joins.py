# campuscook/services/joins.py
# Explicit fetch composition. Each helper resolves one relation for a whole
# result page in a single query (no per-row lookups).

from __future__ import annotations

from collections import defaultdict
from typing import Any, Dict, Iterable, List

from bson import ObjectId

from campuscook.db.init import FAVORITES, RATINGS, RECIPES, USERS
from campuscook.services.utils import average_rating

PUBLIC_USER_FIELDS = {"name": 1, "email": 1, "role": 1}


def _unique(ids: Iterable[Any]) -> List[ObjectId]:
    return list({i for i in ids if isinstance(i, ObjectId)})


async def users_by_id(db, ids: Iterable[Any]) -> Dict[ObjectId, dict]:
    keys = _unique(ids)
    if not keys:
        return {}
    cursor = db[USERS].find({"_id": {"$in": keys}}, PUBLIC_USER_FIELDS)
    return {u["_id"]: u for u in await cursor.to_list(length=None)}


async def recipes_by_id(db, ids: Iterable[Any]) -> Dict[ObjectId, dict]:
    keys = _unique(ids)
    if not keys:
        return {}
    cursor = db[RECIPES].find({"_id": {"$in": keys}})
    return {r["_id"]: r for r in await cursor.to_list(length=None)}


async def rating_stats(db, recipe_ids: Iterable[Any]) -> Dict[ObjectId, tuple]:
    """recipe_id -> (averageRating, ratingCount); recipes without ratings -> (0, 0)."""
    keys = _unique(recipe_ids)
    values: Dict[ObjectId, List[int]] = defaultdict(list)
    if keys:
        cursor = db[RATINGS].find({"recipe_id": {"$in": keys}}, {"recipe_id": 1, "rating": 1})
        for r in await cursor.to_list(length=None):
            values[r["recipe_id"]].append(r["rating"])
    return {k: average_rating(values.get(k, [])) for k in keys}


async def favorite_counts(db, recipe_ids: Iterable[Any]) -> Dict[ObjectId, int]:
    keys = _unique(recipe_ids)
    counts: Dict[ObjectId, int] = {k: 0 for k in keys}
    if keys:
        cursor = db[FAVORITES].find({"recipe_id": {"$in": keys}}, {"recipe_id": 1})
        for f in await cursor.to_list(length=None):
            counts[f["recipe_id"]] = counts.get(f["recipe_id"], 0) + 1
    return counts
