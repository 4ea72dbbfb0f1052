# campuscook/db/indexes.py
# Collection indexes + seeded categories. Called once from the startup
# lifespan (and the seed script); every call is idempotent.

from __future__ import annotations

from pymongo import ASCENDING, DESCENDING

from campuscook.db.init import CATEGORIES, FAVORITES, RATINGS, RECIPES, USERS
from campuscook.db.models.category import CategoryDoc

DEFAULT_CATEGORIES = [
    {"name": "breakfast", "description": "Morning meals and breakfast recipes"},
    {"name": "lunch", "description": "Midday meals and lunch recipes"},
    {"name": "dinner", "description": "Evening meals and dinner recipes"},
    {"name": "snack", "description": "Quick snacks and light bites"},
    {"name": "dessert", "description": "Sweet treats and desserts"},
]


async def ensure_indexes(db) -> None:
    await db[USERS].create_index("email", unique=True)

    await db[CATEGORIES].create_index("name", unique=True)

    recipes = db[RECIPES]
    await recipes.create_index("category")
    await recipes.create_index("author_id")
    await recipes.create_index("title")
    await recipes.create_index([("created_at", DESCENDING)])

    # one rating / one favorite per (user, recipe)
    for name in (RATINGS, FAVORITES):
        col = db[name]
        await col.create_index([("user_id", ASCENDING), ("recipe_id", ASCENDING)], unique=True)
        await col.create_index("user_id")
        await col.create_index("recipe_id")


async def ensure_categories(db) -> int:
    """Upsert the default category set by name. Returns the category total."""
    col = db[CATEGORIES]
    for c in DEFAULT_CATEGORIES:
        doc = CategoryDoc(**c).to_mongo()
        created_at = doc.pop("created_at")
        await col.update_one(
            {"name": doc["name"]},
            {"$set": doc, "$setOnInsert": {"created_at": created_at}},
            upsert=True,
        )
    return await col.count_documents({})
