# campuscook/scripts/seed_categories.py
# python -m campuscook.scripts.seed_categories
# Ensures indexes and upserts the default categories into the configured DB.

import asyncio

from campuscook.core.config import settings
from campuscook.db.indexes import DEFAULT_CATEGORIES, ensure_categories, ensure_indexes
from campuscook.db.init import close_db, init_db


async def main() -> int:
    client, db = await init_db(settings)
    try:
        await ensure_indexes(db)
        total = await ensure_categories(db)
    finally:
        close_db(client)
    print(f"[seed] categories: {', '.join(c['name'] for c in DEFAULT_CATEGORIES)}")
    print(f"[seed] total categories in {settings.MONGODB_DB}: {total}")
    return total


if __name__ == "__main__":
    asyncio.run(main())
