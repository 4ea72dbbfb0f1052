# campuscook/services/admin.py
# Dashboard numbers. The admin role gate lives in the router dependency.

from __future__ import annotations

from pymongo import DESCENDING

from campuscook.db.init import FAVORITES, RATINGS, RECIPES, USERS
from campuscook.models.schemas import DashboardOut, RecentRecipeOut, StatisticsOut
from campuscook.services import joins

RECENT_LIMIT = 10


async def dashboard(db) -> DashboardOut:
    stats = StatisticsOut(
        totalUsers=await db[USERS].count_documents({}),
        totalRecipes=await db[RECIPES].count_documents({}),
        totalRatings=await db[RATINGS].count_documents({}),
        totalFavorites=await db[FAVORITES].count_documents({}),
    )

    cursor = db[RECIPES].find({}).sort([("created_at", DESCENDING), ("_id", DESCENDING)]).limit(RECENT_LIMIT)
    recent = await cursor.to_list(length=None)
    authors = await joins.users_by_id(db, (r.get("author_id") for r in recent))

    return DashboardOut(
        statistics=stats,
        recentRecipes=[
            RecentRecipeOut(
                id=str(r["_id"]),
                title=r.get("title", ""),
                author=(authors.get(r.get("author_id")) or {}).get("name"),
                category=r.get("category", ""),
                createdAt=r.get("created_at"),
            )
            for r in recent
        ],
    )
