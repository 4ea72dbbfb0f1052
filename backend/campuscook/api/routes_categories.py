# campuscook/api/routes_categories.py

from __future__ import annotations

from fastapi import APIRouter, Depends

from campuscook.db.init import get_db
from campuscook.models.schemas import CategoriesOut
from campuscook.services.categories import list_categories

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoriesOut)
async def categories(db=Depends(get_db)):
    return CategoriesOut(categories=await list_categories(db))
