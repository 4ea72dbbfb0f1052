# campuscook/core/deps.py
# Request pipeline stages for access control.
#   optional_identity  -> Identity | None   (bad/missing token is ignored)
#   require_identity   -> Identity          (401 on missing/expired/invalid)
#   require_role(...)  -> Identity          (403 unless role is allowed)
# All three share bearer extraction + token decoding, and put the decoded
# identity on request.state.identity.
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request

from campuscook.core.config import Settings, get_settings
from campuscook.core.errors import AuthenticationError, AuthorizationError
from campuscook.core.security import Identity, decode_token

log = logging.getLogger(__name__)


def bearer_token(request: Request) -> Optional[str]:
    # "Authorization: Bearer <token>"
    header = request.headers.get("authorization") or ""
    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _attach(request: Request, identity: Optional[Identity]) -> Optional[Identity]:
    request.state.identity = identity
    return identity


async def optional_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Optional[Identity]:
    token = bearer_token(request)
    if not token:
        return _attach(request, None)
    try:
        return _attach(request, decode_token(token, settings))
    except AuthenticationError as e:
        log.debug("optional auth ignored token: %s", e.message)
        return _attach(request, None)


async def require_identity(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> Identity:
    token = bearer_token(request)
    if not token:
        raise AuthenticationError("Access token is required")
    try:
        identity = decode_token(token, settings)
    except AuthenticationError as e:
        log.debug("rejected %s %s: %s", request.method, request.url.path, e.message)
        raise
    return _attach(request, identity)


def require_role(*roles: str):
    """Role gate factory. The returned dependency runs after require_identity."""
    allowed = frozenset(roles)

    async def _check_role(identity: Optional[Identity] = Depends(require_identity)) -> Identity:
        if identity is None:
            raise AuthenticationError("User not authenticated")
        if identity.role not in allowed:
            raise AuthorizationError("You do not have permission to perform this action")
        return identity

    return _check_role
