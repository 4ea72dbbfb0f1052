# campuscook/api/routes_recipes.py
# Recipe list/search, CRUD, author listing

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from campuscook.core.deps import optional_identity, require_identity
from campuscook.core.security import Identity
from campuscook.db.init import get_db
from campuscook.models.schemas import (
    MessageOut,
    RecipeCreateIn,
    RecipeEnvelope,
    RecipePageOut,
    RecipesEnvelope,
    RecipeUpdateIn,
)
from campuscook.services import recipes as recipe_service

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.get("", response_model=RecipePageOut, response_model_exclude_none=True)
async def list_recipes(
    page: int = Query(1, ge=1, le=recipe_service.MAX_PAGE),
    limit: int = Query(12, ge=1, le=100),
    search: Optional[str] = Query(None, description="matches title, description or any ingredient"),
    category: Optional[str] = None,
    sort: str = Query("createdAt", description="createdAt | updatedAt | title | prepTime | rating | popularity"),
    order: str = Query("desc", description="asc | desc"),
    db=Depends(get_db),
):
    return await recipe_service.list_recipes(
        db, page=page, limit=limit, search=search, category=category, sort=sort, order=order
    )


@router.post("", response_model=RecipeEnvelope, response_model_exclude_none=True, status_code=201)
async def create_recipe(
    payload: RecipeCreateIn,
    identity: Identity = Depends(require_identity),
    db=Depends(get_db),
):
    return RecipeEnvelope(recipe=await recipe_service.create_recipe(db, payload, identity))


# declared before /{recipe_id} so "user" is not read as an id
@router.get("/user/{user_id}", response_model=RecipesEnvelope, response_model_exclude_none=True)
async def list_user_recipes(user_id: str, db=Depends(get_db)):
    return RecipesEnvelope(recipes=await recipe_service.list_by_author(db, user_id))


@router.get("/{recipe_id}", response_model=RecipeEnvelope, response_model_exclude_none=True)
async def get_recipe(
    recipe_id: str,
    identity: Optional[Identity] = Depends(optional_identity),
    db=Depends(get_db),
):
    return RecipeEnvelope(recipe=await recipe_service.get_recipe(db, recipe_id, identity))


@router.put("/{recipe_id}", response_model=RecipeEnvelope, response_model_exclude_none=True)
async def update_recipe(
    recipe_id: str,
    payload: RecipeUpdateIn,
    identity: Identity = Depends(require_identity),
    db=Depends(get_db),
):
    return RecipeEnvelope(recipe=await recipe_service.update_recipe(db, recipe_id, payload, identity))


@router.delete("/{recipe_id}", response_model=MessageOut)
async def delete_recipe(
    recipe_id: str,
    identity: Identity = Depends(require_identity),
    db=Depends(get_db),
):
    await recipe_service.delete_recipe(db, recipe_id, identity)
    return MessageOut(message="Recipe deleted successfully")
