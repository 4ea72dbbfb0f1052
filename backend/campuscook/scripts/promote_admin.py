# campuscook/scripts/promote_admin.py
# python -m campuscook.scripts.promote_admin someone@example.com [--revoke]
# The API never lets a user change their own role; this is the only way in.

import argparse
import asyncio
import sys

from campuscook.core.config import settings
from campuscook.db.init import USERS, close_db, init_db
from campuscook.db.models.base import utcnow


async def set_role(db, email: str, role: str) -> bool:
    res = await db[USERS].update_one(
        {"email": email.strip().lower()},
        {"$set": {"role": role, "updated_at": utcnow()}},
    )
    return res.matched_count == 1


async def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Grant or revoke the admin role")
    parser.add_argument("email")
    parser.add_argument("--revoke", action="store_true", help="set the role back to 'user'")
    args = parser.parse_args(argv)

    role = "user" if args.revoke else "admin"
    client, db = await init_db(settings)
    try:
        found = await set_role(db, args.email, role)
    finally:
        close_db(client)

    if not found:
        print(f"[admin] no user with email {args.email}")
        return 1
    print(f"[admin] {args.email} -> {role}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
