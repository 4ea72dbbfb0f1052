# campuscook/main.py
# FastAPI app setup: logging, CORS, error handlers, DB lifespan, routers.
# Each router defines its own prefix; everything is mounted under /api.

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from campuscook.api.routes_admin import router as admin_router
from campuscook.api.routes_auth import router as auth_router
from campuscook.api.routes_categories import router as categories_router
from campuscook.api.routes_favorites import router as favorites_router
from campuscook.api.routes_ratings import router as ratings_router
from campuscook.api.routes_recipes import router as recipes_router
from campuscook.core.config import DEV_SECRET, settings
from campuscook.core.errors import register_error_handlers
from campuscook.db.indexes import ensure_categories, ensure_indexes
from campuscook.db.init import close_db, connect_with_retry

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
log = logging.getLogger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.JWT_SECRET == DEV_SECRET:
        log.warning("[startup] JWT_SECRET not set; using the development secret")

    # 1) connect first (retries, 1s apart)
    client, db = await connect_with_retry(settings)
    app.state.db = db

    # 2) indexes + seeded categories
    await ensure_indexes(db)
    total = await ensure_categories(db)
    log.info("[startup] indexes ensured, %d categories", total)
    try:
        yield
    finally:
        app.state.db = None
        close_db(client)
        log.info("[shutdown] mongo connection closed")


app = FastAPI(title="CampusCook API", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)


@app.get("/")
async def root():
    return {"status": "ok", "project_name": app.title, "version": app.version}


@app.get("/health")
async def health(request: Request):
    ok = {"status": "ok", "message": "CampusCook API is running", "db": "skip"}
    db = getattr(request.app.state, "db", None)
    if db is not None:
        try:
            await db.command("ping")
            ok["db"] = "ok"
        except Exception as e:
            ok["db"] = f"error: {e}"
    return ok


api = APIRouter(prefix="/api")
api.include_router(auth_router)
api.include_router(recipes_router)
api.include_router(categories_router)
api.include_router(favorites_router)
api.include_router(ratings_router)
api.include_router(admin_router)
app.include_router(api)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
