import httpx
import pytest
from httpx import ASGITransport
from mongomock_motor import AsyncMongoMockClient

from campuscook.core.config import Settings, get_settings
from campuscook.db.indexes import ensure_categories, ensure_indexes
from campuscook.main import app
from campuscook.scripts.promote_admin import set_role

test_settings = Settings(
    JWT_SECRET="test-secret",
    JWT_EXPIRES_IN="1h",
    BCRYPT_ROUNDS=4,
    ENVIRONMENT="test",
)

PASSWORD = "password123"

RECIPE_DATA = {
    "title": "Garlic Butter Pasta",
    "description": "Quick weeknight pasta",
    "ingredients": ["spaghetti", "butter", "garlic"],
    "steps": ["Boil pasta", "Melt butter with garlic", "Toss together"],
    "prep_time": 20,
    "difficulty": "easy",
    "category": "dinner",
}


@pytest.fixture
async def db():
    client = AsyncMongoMockClient(tz_aware=True)
    database = client["campuscook_test"]
    await ensure_indexes(database)
    await ensure_categories(database)
    yield database


@pytest.fixture
async def async_client(db):
    app.state.db = db
    app.dependency_overrides[get_settings] = lambda: test_settings

    async with httpx.AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    app.state.db = None


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def signup(async_client):
    async def _signup(name="Ann", email="ann@x.com", password=PASSWORD):
        res = await async_client.post("/api/auth/signup", json={"name": name, "email": email, "password": password})
        assert res.status_code == 201, res.text
        body = res.json()
        return body["token"], body["user"]

    return _signup


@pytest.fixture
def admin(async_client, db, signup):
    async def _admin(email="admin@x.com"):
        await signup(name="Admin", email=email)
        assert await set_role(db, email, "admin")
        # the role travels in the token, so log in again after promotion
        res = await async_client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
        assert res.status_code == 200
        return res.json()["token"], res.json()["user"]

    return _admin


@pytest.fixture
def create_recipe(async_client):
    async def _create(token, **overrides):
        data = {**RECIPE_DATA, **overrides}
        res = await async_client.post("/api/recipes", json=data, headers=auth(token))
        assert res.status_code == 201, res.text
        return res.json()["recipe"]

    return _create


@pytest.fixture
def recipe_data():
    return {**RECIPE_DATA, "ingredients": list(RECIPE_DATA["ingredients"]), "steps": list(RECIPE_DATA["steps"])}
