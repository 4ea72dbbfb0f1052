# campuscook/api/routes_admin.py

from __future__ import annotations

from fastapi import APIRouter, Depends

from campuscook.core.deps import require_role
from campuscook.db.init import get_db
from campuscook.models.schemas import DashboardOut
from campuscook.services.admin import dashboard

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_role("admin"))])


@router.get("/dashboard", response_model=DashboardOut)
async def admin_dashboard(db=Depends(get_db)):
    return await dashboard(db)
