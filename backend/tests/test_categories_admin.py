import pytest
from httpx import AsyncClient

from campuscook.core.deps import require_role
from campuscook.core.errors import AuthenticationError, AuthorizationError
from campuscook.core.security import Identity
from campuscook.db.indexes import DEFAULT_CATEGORIES, ensure_categories
from campuscook.db.init import CATEGORIES
from campuscook.scripts.promote_admin import set_role


def auth(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.mark.asyncio
class TestCategories:
    async def test_seeded_categories(self, async_client: AsyncClient):
        res = await async_client.get("/api/categories")
        assert res.status_code == 200
        cats = res.json()["categories"]
        assert [c["name"] for c in cats] == sorted(c["name"] for c in DEFAULT_CATEGORIES)
        assert all(c["recipeCount"] == 0 for c in cats)

    async def test_counts_follow_recipes(self, async_client: AsyncClient, signup, create_recipe):
        token, _ = await signup()
        await create_recipe(token, category="dinner")
        await create_recipe(token, title="Second dinner", category="dinner")
        doomed = await create_recipe(token, title="Morning oats", category="breakfast")

        counts = {c["name"]: c["recipeCount"] for c in (await async_client.get("/api/categories")).json()["categories"]}
        assert counts["dinner"] == 2
        assert counts["breakfast"] == 1

        await async_client.delete(f"/api/recipes/{doomed['id']}", headers=auth(token))
        counts = {c["name"]: c["recipeCount"] for c in (await async_client.get("/api/categories")).json()["categories"]}
        assert counts["breakfast"] == 0

    async def test_seeding_twice_is_harmless(self, db):
        await ensure_categories(db)
        assert await db[CATEGORIES].count_documents({}) == len(DEFAULT_CATEGORIES)


@pytest.mark.asyncio
class TestAdminDashboard:
    async def test_requires_token(self, async_client: AsyncClient):
        res = await async_client.get("/api/admin/dashboard")
        assert res.status_code == 401

    async def test_regular_user_is_forbidden(self, async_client: AsyncClient, signup):
        token, _ = await signup()
        res = await async_client.get("/api/admin/dashboard", headers=auth(token))
        assert res.status_code == 403
        assert res.json() == {
            "error": "Authorization Error",
            "message": "You do not have permission to perform this action",
        }

    async def test_dashboard(self, async_client: AsyncClient, signup, admin, create_recipe):
        token, _ = await signup()
        admin_token, _ = await admin()
        first = await create_recipe(token, title="First recipe")
        second = await create_recipe(token, title="Second recipe")
        await async_client.post(f"/api/ratings/{first['id']}", json={"rating": 5}, headers=auth(admin_token))
        await async_client.post(f"/api/favorites/{second['id']}", headers=auth(admin_token))

        res = await async_client.get("/api/admin/dashboard", headers=auth(admin_token))
        assert res.status_code == 200
        body = res.json()
        assert body["statistics"] == {"totalUsers": 2, "totalRecipes": 2, "totalRatings": 1, "totalFavorites": 1}
        recent = body["recentRecipes"]
        assert [r["id"] for r in recent] == [second["id"], first["id"]]
        assert recent[0]["author"] == "Ann"
        assert recent[0]["category"] == "dinner"

    async def test_recent_is_capped(self, async_client: AsyncClient, signup, admin, create_recipe):
        token, _ = await signup()
        admin_token, _ = await admin()
        for i in range(12):
            await create_recipe(token, title=f"Recipe number {i}")
        body = (await async_client.get("/api/admin/dashboard", headers=auth(admin_token))).json()
        assert body["statistics"]["totalRecipes"] == 12
        assert len(body["recentRecipes"]) == 10

    async def test_demoted_admin_token_still_carries_role(self, async_client: AsyncClient, db, admin):
        admin_token, _ = await admin()
        await set_role(db, "admin@x.com", "user")
        # the role is read from the token, not the database
        res = await async_client.get("/api/admin/dashboard", headers=auth(admin_token))
        assert res.status_code == 200


@pytest.mark.asyncio
class TestRoleGate:
    async def test_allowed_role_passes_through(self):
        identity = Identity(user_id="u1", email="a@x.com", role="admin")
        assert await require_role("admin")(identity) is identity

    async def test_other_role_is_forbidden(self):
        with pytest.raises(AuthorizationError):
            await require_role("admin")(Identity(user_id="u1", email="a@x.com", role="user"))

    async def test_several_roles(self):
        identity = Identity(user_id="u1", email="a@x.com", role="user")
        assert await require_role("user", "admin")(identity) is identity

    async def test_missing_identity(self):
        with pytest.raises(AuthenticationError, match="User not authenticated"):
            await require_role("admin")(None)
