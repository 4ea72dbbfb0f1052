# campuscook/api/routes_auth.py
# signup / login / me

from __future__ import annotations

from fastapi import APIRouter, Depends

from campuscook.core.config import Settings, get_settings
from campuscook.core.deps import require_identity
from campuscook.core.security import Identity
from campuscook.db.init import get_db
from campuscook.models.schemas import AuthOut, LoginIn, MeOut, SignupIn
from campuscook.services import auth as auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthOut, status_code=201)
async def signup(
    payload: SignupIn,
    db=Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await auth_service.register(db, payload, settings)


@router.post("/login", response_model=AuthOut)
async def login(
    payload: LoginIn,
    db=Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    return await auth_service.login(db, payload, settings)


@router.get("/me", response_model=MeOut)
async def me(identity: Identity = Depends(require_identity), db=Depends(get_db)):
    return MeOut(user=await auth_service.current_user(db, identity))
