# campuscook/services/auth.py
# register / login / current user

from __future__ import annotations

import logging

from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from campuscook.core.config import Settings
from campuscook.core.errors import AuthenticationError, ConflictError, NotFoundError
from campuscook.core.security import Identity, hash_password, issue_token, verify_password
from campuscook.db.init import USERS
from campuscook.db.models.user import UserDoc
from campuscook.models.schemas import AuthOut, LoginIn, SignupIn, UserOut
from campuscook.services.utils import parse_object_id

log = logging.getLogger(__name__)

# same message for unknown email and wrong password
BAD_CREDENTIALS = "Invalid email or password"


def user_out(doc) -> UserOut:
    return UserOut(id=str(doc["_id"]), name=doc["name"], email=doc["email"], role=doc.get("role", "user"))


def _auth_out(doc, settings: Settings) -> AuthOut:
    token = issue_token(str(doc["_id"]), doc["email"], doc.get("role", "user"), settings)
    return AuthOut(token=token, user=user_out(doc))


async def register(db, payload: SignupIn, settings: Settings) -> AuthOut:
    users = db[USERS]
    if await users.find_one({"email": payload.email}, {"_id": 1}):
        raise ConflictError("An account with this email already exists")

    # bcrypt is CPU bound; keep it off the event loop
    password_hash = await run_in_threadpool(hash_password, payload.password, settings.BCRYPT_ROUNDS)
    user = UserDoc(name=payload.name, email=payload.email, password_hash=password_hash)
    try:
        res = await users.insert_one(user.to_mongo())
    except DuplicateKeyError:
        # lost a race with a concurrent signup for the same email
        raise ConflictError("An account with this email already exists")

    doc = await users.find_one({"_id": res.inserted_id})
    log.info("user registered id=%s", res.inserted_id)
    return _auth_out(doc, settings)


async def login(db, payload: LoginIn, settings: Settings) -> AuthOut:
    doc = await db[USERS].find_one({"email": payload.email})
    if not doc:
        raise AuthenticationError(BAD_CREDENTIALS)
    ok = await run_in_threadpool(verify_password, payload.password, doc.get("password_hash", ""))
    if not ok:
        raise AuthenticationError(BAD_CREDENTIALS)
    return _auth_out(doc, settings)


async def current_user(db, identity: Identity) -> UserOut:
    doc = await db[USERS].find_one(
        {"_id": parse_object_id(identity.user_id, "user")},
        {"password_hash": 0},
    )
    if not doc:
        raise NotFoundError("User not found")
    return user_out(doc)
