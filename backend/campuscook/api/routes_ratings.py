# campuscook/api/routes_ratings.py

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from campuscook.core.deps import require_identity
from campuscook.core.security import Identity
from campuscook.db.init import get_db
from campuscook.models.schemas import RatingIn, RatingListOut, RatingWriteOut
from campuscook.services import ratings as rating_service

router = APIRouter(prefix="/ratings", tags=["ratings"])


@router.get("/recipe/{recipe_id}", response_model=RatingListOut)
async def recipe_ratings(recipe_id: str, db=Depends(get_db)):
    return await rating_service.list_for_recipe(db, recipe_id)


@router.post("/{recipe_id}", response_model=RatingWriteOut, response_model_exclude_none=True)
async def rate_recipe(
    recipe_id: str,
    payload: RatingIn,
    response: Response,
    identity: Identity = Depends(require_identity),
    db=Depends(get_db),
):
    # 201 for a first rating, 200 when it overwrote an earlier one
    body, created = await rating_service.upsert_rating(db, recipe_id, payload, identity)
    response.status_code = 201 if created else 200
    return body
