# campuscook/services/favorites.py
# Favorites are idempotent per (user, recipe) and never touch the recipe itself.

from __future__ import annotations

import logging
from typing import List, Tuple

from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from campuscook.core.errors import NotFoundError
from campuscook.core.security import Identity
from campuscook.db.init import FAVORITES, RECIPES
from campuscook.db.models.favorite import FavoriteDoc
from campuscook.models.schemas import FavoriteRef, FavoriteWriteOut, RecipeOut
from campuscook.services import joins
from campuscook.services.utils import parse_object_id, recipe_out

log = logging.getLogger(__name__)


async def add_favorite(db, recipe_id: str, identity: Identity) -> Tuple[FavoriteWriteOut, bool]:
    """Returns (body, created). Repeating the call is a no-op success."""
    rid = parse_object_id(recipe_id)
    if not await db[RECIPES].find_one({"_id": rid}, {"_id": 1}):
        raise NotFoundError("Recipe not found")

    uid = parse_object_id(identity.user_id, "user")
    col = db[FAVORITES]
    key = {"user_id": uid, "recipe_id": rid}

    existing = await col.find_one(key, {"_id": 1})
    if existing:
        return FavoriteWriteOut(message="Recipe already in favorites", favorite=FavoriteRef(id=str(existing["_id"]))), False

    try:
        res = await col.insert_one(FavoriteDoc(user_id=uid, recipe_id=rid).to_mongo())
    except DuplicateKeyError:
        existing = await col.find_one(key, {"_id": 1})
        return FavoriteWriteOut(message="Recipe already in favorites", favorite=FavoriteRef(id=str(existing["_id"]))), False

    log.info("favorite added recipe=%s user=%s", rid, uid)
    return FavoriteWriteOut(message="Recipe added to favorites", favorite=FavoriteRef(id=str(res.inserted_id))), True


async def remove_favorite(db, recipe_id: str, identity: Identity) -> None:
    rid = parse_object_id(recipe_id)
    uid = parse_object_id(identity.user_id, "user")
    res = await db[FAVORITES].delete_one({"user_id": uid, "recipe_id": rid})
    if res.deleted_count == 0:
        raise NotFoundError("Favorite not found")


async def list_for_user(db, identity: Identity) -> List[RecipeOut]:
    uid = parse_object_id(identity.user_id, "user")
    cursor = db[FAVORITES].find({"user_id": uid}).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
    favs = await cursor.to_list(length=None)

    recipes = await joins.recipes_by_id(db, (f["recipe_id"] for f in favs))
    authors = await joins.users_by_id(db, (r.get("author_id") for r in recipes.values()))

    out = []
    for f in favs:
        r = recipes.get(f["recipe_id"])
        if r is None:
            # recipe deleted after it was favorited
            continue
        out.append(recipe_out(r, authors.get(r.get("author_id")), favoritedAt=f.get("created_at")))
    return out
