import json

import pytest
from httpx import AsyncClient
from starlette.exceptions import HTTPException
from starlette.requests import Request

from campuscook.core.errors import http_error_handler


@pytest.mark.asyncio
class TestEnvelope:
    async def test_unknown_route(self, async_client: AsyncClient):
        res = await async_client.get("/api/nowhere")
        assert res.status_code == 404
        assert res.json() == {"error": "Not Found", "message": "The requested resource was not found"}

    async def test_wrong_method(self, async_client: AsyncClient):
        res = await async_client.patch("/api/recipes")
        assert res.status_code == 405
        assert set(res.json()) == {"error", "message"}

    async def test_malformed_json(self, async_client: AsyncClient):
        res = await async_client.post(
            "/api/auth/login", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert res.status_code == 400
        assert res.json()["error"] == "Validation Error"

    @pytest.mark.parametrize(
        "status, error",
        [(400, "Validation Error"), (401, "Authentication Error"), (403, "Authorization Error"), (409, "Conflict")],
    )
    async def test_framework_errors_use_app_categories(self, status, error):
        request = Request({"type": "http", "method": "GET", "path": "/", "headers": []})
        res = await http_error_handler(request, HTTPException(status_code=status, detail="nope"))
        assert res.status_code == status
        assert json.loads(res.body) == {"error": error, "message": "nope"}


@pytest.mark.asyncio
class TestHealth:
    async def test_health(self, async_client: AsyncClient):
        res = await async_client.get("/health")
        assert res.status_code == 200
        body = res.json()
        assert body["status"] == "ok"
        assert body["message"] == "CampusCook API is running"

    async def test_root(self, async_client: AsyncClient):
        res = await async_client.get("/")
        assert res.status_code == 200
        assert res.json()["status"] == "ok"
