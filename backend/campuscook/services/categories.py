# campuscook/services/categories.py
from __future__ import annotations

from typing import List

from campuscook.db.init import CATEGORIES, RECIPES
from campuscook.models.schemas import CategoryOut


async def list_categories(db) -> List[CategoryOut]:
    # recipe counts are computed at read time, never stored.
    # the category set is small and fixed, so one count per category
    cats = await db[CATEGORIES].find({}).sort("name", 1).to_list(length=None)
    out = []
    for c in cats:
        out.append(
            CategoryOut(
                id=str(c["_id"]),
                name=c["name"],
                description=c.get("description"),
                recipeCount=await db[RECIPES].count_documents({"category": c["name"]}),
                createdAt=c.get("created_at"),
            )
        )
    return out
