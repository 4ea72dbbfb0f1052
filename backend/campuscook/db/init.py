# campuscook/db/init.py
# Mongo connection utilities (motor). The handle lives on app.state for the
# lifetime of the process and is handed to routers through get_db.

from __future__ import annotations

import asyncio
import logging
from typing import Tuple

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from campuscook.core.config import Settings

log = logging.getLogger(__name__)

USERS = "users"
RECIPES = "recipes"
CATEGORIES = "categories"
RATINGS = "ratings"
FAVORITES = "favorites"


async def init_db(settings: Settings) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    # connect once at startup; raises if the server is not ready
    # tz_aware: datetimes come back as UTC-aware, so responses carry the offset
    client = AsyncIOMotorClient(settings.MONGODB_URI, tz_aware=True)
    db = client[settings.MONGODB_DB]
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise
    return client, db


async def connect_with_retry(settings: Settings, delay: float = 1.0) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    attempts = max(1, settings.DB_INIT_RETRIES)
    for i in range(attempts):
        try:
            client, db = await init_db(settings)
            log.info("[startup] db ready (%s)", settings.MONGODB_DB)
            return client, db
        except Exception as e:
            log.warning("[startup] db init retry %d/%d: %s", i + 1, attempts, e)
            if i + 1 < attempts:
                await asyncio.sleep(delay)
    raise RuntimeError(f"MongoDB unreachable after {attempts} attempts")


def close_db(client: AsyncIOMotorClient | None) -> None:
    # called from the lifespan shutdown path
    if client is not None:
        client.close()


def get_db(request: Request) -> AsyncIOMotorDatabase:
    # handle for routers. Fails if startup never attached one
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return db
