# campuscook/core/security.py
# Password hashing (bcrypt) and identity tokens (JWT, HS256)
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from pydantic import BaseModel

from campuscook.core.config import Settings
from campuscook.core.errors import AuthenticationError

ALGORITHM = "HS256"


class Identity(BaseModel):
    """Decoded token claims attached to an authenticated request."""

    user_id: str
    email: str
    role: str


def hash_password(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # malformed stored hash or oversize input
        return False


def issue_token(user_id: str, email: str, role: str, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + timedelta(seconds=settings.token_ttl_seconds),
        # two tokens issued in the same second must still differ
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> Identity:
    """Verify signature + expiry. Expired and invalid tokens fail with distinct messages."""
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[ALGORITHM],
            options={"require": ["exp", "iat"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired. Please log in again.")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    try:
        return Identity(user_id=claims["userId"], email=claims["email"], role=claims["role"])
    except (KeyError, ValueError):
        raise AuthenticationError("Invalid token")
