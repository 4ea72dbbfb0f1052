# campuscook/api/routes_favorites.py

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from campuscook.core.deps import require_identity
from campuscook.core.security import Identity
from campuscook.db.init import get_db
from campuscook.models.schemas import FavoriteWriteOut, MessageOut, RecipesEnvelope
from campuscook.services import favorites as favorite_service

# every favorites route needs a signed-in user
router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=RecipesEnvelope, response_model_exclude_none=True)
async def my_favorites(identity: Identity = Depends(require_identity), db=Depends(get_db)):
    return RecipesEnvelope(recipes=await favorite_service.list_for_user(db, identity))


@router.post("/{recipe_id}", response_model=FavoriteWriteOut)
async def add_favorite(
    recipe_id: str,
    response: Response,
    identity: Identity = Depends(require_identity),
    db=Depends(get_db),
):
    body, created = await favorite_service.add_favorite(db, recipe_id, identity)
    response.status_code = 201 if created else 200
    return body


@router.delete("/{recipe_id}", response_model=MessageOut)
async def remove_favorite(
    recipe_id: str,
    identity: Identity = Depends(require_identity),
    db=Depends(get_db),
):
    await favorite_service.remove_favorite(db, recipe_id, identity)
    return MessageOut(message="Recipe removed from favorites")
