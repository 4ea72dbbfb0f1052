# campuscook/services/recipes.py
# Recipe listing / CRUD. Aggregates (average rating, counts) are computed per
# request from the ratings and favorites collections; nothing is cached.

from __future__ import annotations

import logging
import math
import re
from typing import List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from campuscook.core.errors import AuthorizationError, NotFoundError, ValidationError
from campuscook.core.security import Identity
from campuscook.db.init import CATEGORIES, FAVORITES, RECIPES
from campuscook.db.models.base import utcnow
from campuscook.db.models.recipe import RecipeDoc
from campuscook.models.schemas import (
    PaginationOut,
    RecipeCreateIn,
    RecipeOut,
    RecipePageOut,
    RecipeUpdateIn,
)
from campuscook.services import joins
from campuscook.services.utils import parse_object_id, recipe_out

log = logging.getLogger(__name__)

# public sort key -> stored field
SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "prepTime": "prep_time",
    "prep_time": "prep_time",
}
# accepted but not aggregated: ordered by creation time in the requested order
FALLBACK_SORTS = {"rating", "popularity"}
# keeps (page - 1) * limit inside a BSON int64 skip
MAX_PAGE = 1_000_000


def build_filter(search: Optional[str] = None, category: Optional[str] = None) -> dict:
    query: dict = {}
    search = (search or "").strip()
    if search:
        pattern = re.escape(search)
        query["$or"] = [
            {"title": {"$regex": pattern, "$options": "i"}},
            {"description": {"$regex": pattern, "$options": "i"}},
            {"ingredients": {"$regex": pattern, "$options": "i"}},
        ]
    if category:
        query["category"] = category
    return query


def build_sort(sort: Optional[str], order: Optional[str]) -> List[Tuple[str, int]]:
    direction = ASCENDING if (order or "").lower() == "asc" else DESCENDING
    if sort in SORT_FIELDS:
        field = SORT_FIELDS[sort]
    elif sort in FALLBACK_SORTS:
        field = "created_at"
    else:
        field, direction = "created_at", DESCENDING
    # _id breaks ties so pages never overlap
    return [(field, direction), ("_id", direction)]


def paginate(total: int, page: int, limit: int) -> PaginationOut:
    total_pages = math.ceil(total / limit) if limit else 0
    return PaginationOut(
        currentPage=page,
        totalPages=total_pages,
        totalRecipes=total,
        limit=limit,
        hasNextPage=page < total_pages,
        hasPrevPage=page > 1,
    )


async def _ensure_category(db, name: str) -> None:
    if not await db[CATEGORIES].find_one({"name": name}, {"_id": 1}):
        raise ValidationError(f"Category '{name}' does not exist")


async def _load(db, recipe_id) -> dict:
    doc = await db[RECIPES].find_one({"_id": parse_object_id(recipe_id)})
    if not doc:
        raise NotFoundError("Recipe not found")
    return doc


def _check_owner(doc: dict, identity: Identity, action: str) -> None:
    if str(doc.get("author_id")) != identity.user_id and identity.role != "admin":
        raise AuthorizationError(f"You do not have permission to {action} this recipe")


async def _with_author(db, doc: dict, **extra) -> RecipeOut:
    authors = await joins.users_by_id(db, [doc.get("author_id")])
    return recipe_out(doc, authors.get(doc.get("author_id")), **extra)


# ------------------------------
# operations
# ------------------------------

async def list_recipes(
    db,
    page: int = 1,
    limit: int = 12,
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort: Optional[str] = "createdAt",
    order: Optional[str] = "desc",
) -> RecipePageOut:
    query = build_filter(search, category)
    col = db[RECIPES]

    total = await col.count_documents(query)
    cursor = col.find(query).sort(build_sort(sort, order)).skip((page - 1) * limit).limit(limit)
    docs = await cursor.to_list(length=None)

    authors = await joins.users_by_id(db, (d.get("author_id") for d in docs))
    stats = await joins.rating_stats(db, (d["_id"] for d in docs))

    recipes = []
    for d in docs:
        avg, count = stats.get(d["_id"], (0, 0))
        recipes.append(recipe_out(d, authors.get(d.get("author_id")), averageRating=avg, ratingCount=count))
    return RecipePageOut(recipes=recipes, pagination=paginate(total, page, limit))


async def create_recipe(db, payload: RecipeCreateIn, identity: Identity) -> RecipeOut:
    await _ensure_category(db, payload.category)

    recipe = RecipeDoc(
        title=payload.title,
        description=payload.description,
        ingredients=payload.ingredients,
        steps=payload.steps,
        prep_time=payload.prep_time,
        difficulty=payload.difficulty,
        category=payload.category,
        image_url=payload.image_url,
        author_id=parse_object_id(identity.user_id, "user"),
    )
    res = await db[RECIPES].insert_one(recipe.to_mongo())
    log.info("recipe created id=%s author=%s", res.inserted_id, identity.user_id)

    doc = await db[RECIPES].find_one({"_id": res.inserted_id})
    return await _with_author(db, doc)


async def get_recipe(db, recipe_id: str, identity: Optional[Identity] = None) -> RecipeOut:
    doc = await _load(db, recipe_id)
    stats = await joins.rating_stats(db, [doc["_id"]])
    avg, count = stats[doc["_id"]]

    extra = {"averageRating": avg, "ratingCount": count, "isFavorited": False}
    if identity is not None:
        fav = await db[FAVORITES].find_one(
            {"user_id": parse_object_id(identity.user_id, "user"), "recipe_id": doc["_id"]},
            {"_id": 1},
        )
        extra["isFavorited"] = fav is not None
    return await _with_author(db, doc, **extra)


async def update_recipe(db, recipe_id: str, payload: RecipeUpdateIn, identity: Identity) -> RecipeOut:
    doc = await _load(db, recipe_id)
    _check_owner(doc, identity, "edit")

    changes = payload.changes()
    if "category" in changes:
        await _ensure_category(db, changes["category"])

    # created_at is never part of the update
    changes["updated_at"] = utcnow()
    await db[RECIPES].update_one({"_id": doc["_id"]}, {"$set": changes})

    doc = await db[RECIPES].find_one({"_id": doc["_id"]})
    return await _with_author(db, doc)


async def delete_recipe(db, recipe_id: str, identity: Identity) -> None:
    # ratings/favorites of the recipe are left in place; read paths skip them
    doc = await _load(db, recipe_id)
    _check_owner(doc, identity, "delete")
    await db[RECIPES].delete_one({"_id": doc["_id"]})
    log.info("recipe deleted id=%s by=%s", doc["_id"], identity.user_id)


async def list_by_author(db, author_id: str) -> List[RecipeOut]:
    oid = parse_object_id(author_id, "user")
    cursor = db[RECIPES].find({"author_id": oid}).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
    docs = await cursor.to_list(length=None)

    ids = [d["_id"] for d in docs]
    authors = await joins.users_by_id(db, [oid])
    stats = await joins.rating_stats(db, ids)
    favs = await joins.favorite_counts(db, ids)

    out = []
    for d in docs:
        avg, count = stats.get(d["_id"], (0, 0))
        out.append(
            recipe_out(
                d,
                authors.get(oid),
                averageRating=avg,
                ratingCount=count,
                favoriteCount=favs.get(d["_id"], 0),
            )
        )
    return out
