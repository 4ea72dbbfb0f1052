import pytest
from httpx import ASGITransport

from campuscook.client import ApiError, CampusCookClient, validate_recipe_form
from campuscook.core.errors import ValidationError
from campuscook.main import app

from conftest import PASSWORD, RECIPE_DATA


@pytest.fixture
async def cc(async_client):
    # async_client wires the mock database and test settings into the app
    client = CampusCookClient(base_url="http://test", transport=ASGITransport(app=app))
    yield client
    await client.aclose()


@pytest.mark.asyncio
class TestClientSession:
    async def test_signup_login_me(self, cc: CampusCookClient):
        body = await cc.signup("Ann", "ann@x.com", PASSWORD)
        assert cc.authenticated
        assert body["user"]["email"] == "ann@x.com"

        cc.logout()
        assert not cc.authenticated

        await cc.login("ann@x.com", PASSWORD)
        me = await cc.me()
        assert me["name"] == "Ann"

    async def test_local_validation_never_hits_the_server(self, cc: CampusCookClient, db):
        with pytest.raises(ValidationError, match="valid email"):
            await cc.signup("Ann", "not-an-email", PASSWORD)
        with pytest.raises(ValidationError, match="at least 8"):
            await cc.signup("Ann", "ann@x.com", "short")
        with pytest.raises(ValidationError, match="Email and password are required"):
            await cc.login("", "")
        with pytest.raises(ValidationError, match="between 1 and 5"):
            await cc.rate("507f1f77bcf86cd799439011", 9)
        assert await db["users"].count_documents({}) == 0

    async def test_server_error_is_raised(self, cc: CampusCookClient):
        with pytest.raises(ApiError) as e:
            await cc.login("ghost@x.com", PASSWORD)
        assert e.value.status == 401
        assert e.value.error == "Authentication Error"
        assert e.value.message == "Invalid email or password"

    async def test_401_drops_token(self, cc: CampusCookClient):
        cc.token = "stale-token"
        with pytest.raises(ApiError):
            await cc.favorites()
        assert cc.token is None

    async def test_recipe_flow(self, cc: CampusCookClient):
        await cc.signup("Ann", "ann@x.com", PASSWORD)
        recipe = await cc.create_recipe({**RECIPE_DATA, "ingredients": ["pasta", "  ", "butter"]})
        assert recipe["ingredients"] == ["pasta", "butter"]

        page = await cc.list_recipes(search="garlic")
        assert page["pagination"]["totalRecipes"] == 1

        updated = await cc.update_recipe(recipe["id"], {"prep_time": 25})
        assert updated["prep_time"] == 25

        added = await cc.add_favorite(recipe["id"])
        assert added["message"] == "Recipe added to favorites"
        assert [r["id"] for r in await cc.favorites()] == [recipe["id"]]

        rated = await cc.rate(recipe["id"], 4, "Nice")
        assert rated["rating"]["rating"] == 4
        assert (await cc.ratings(recipe["id"]))["averageRating"] == 4

        mine = await cc.user_recipes(cc.user["id"])
        assert mine[0]["favoriteCount"] == 1

        assert await cc.remove_favorite(recipe["id"]) == "Recipe removed from favorites"
        assert await cc.delete_recipe(recipe["id"]) == "Recipe deleted successfully"
        with pytest.raises(ApiError) as e:
            await cc.get_recipe(recipe["id"])
        assert e.value.status == 404

    async def test_categories(self, cc: CampusCookClient):
        names = [c["name"] for c in await cc.categories()]
        assert "dinner" in names


class TestRecipeForm:
    def test_blank_lines_removed(self):
        data = validate_recipe_form({**RECIPE_DATA, "steps": ["", "Stir", " "]})
        assert data["steps"] == ["Stir"]

    def test_all_blank_ingredients(self):
        with pytest.raises(ValidationError):
            validate_recipe_form({**RECIPE_DATA, "ingredients": ["", " "]})

    def test_partial(self):
        assert validate_recipe_form({"difficulty": "hard"}, partial=True) == {"difficulty": "hard"}
        with pytest.raises(ValidationError, match="Difficulty"):
            validate_recipe_form({"difficulty": "brutal"}, partial=True)

    @pytest.mark.parametrize("key", ["category", "description", "image_url"])
    def test_text_fields_must_be_strings(self, key):
        with pytest.raises(ValidationError, match=f"{key} must be a string"):
            validate_recipe_form({**RECIPE_DATA, key: 42})
        with pytest.raises(ValidationError, match=f"{key} must be a string"):
            validate_recipe_form({key: ["x"]}, partial=True)
