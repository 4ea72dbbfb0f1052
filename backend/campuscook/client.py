# campuscook/client.py
# Async client for the CampusCook API (what the web frontend talks to).
# Forms are checked with the same rules the server applies before anything
# is sent; a 401 drops the stored token, like a logout.

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from campuscook.core import validation as rules
from campuscook.core.errors import ValidationError


class ApiError(Exception):
    def __init__(self, status: int, error: str, message: str):
        super().__init__(f"{status} {error}: {message}")
        self.status = status
        self.error = error
        self.message = message


def _raise_first(*errors: Optional[str]) -> None:
    for e in errors:
        if e:
            raise ValidationError(e)


def validate_signup(name: str, email: str, password: str) -> None:
    if not name or not name.strip() or not email or not password:
        raise ValidationError("Name, email, and password are required")
    _raise_first(rules.check_email(email), rules.check_password(password))


def validate_recipe_form(form: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    """Drops blank ingredient/step lines, then applies the server's rules."""
    data = dict(form)
    for key in ("ingredients", "steps"):
        if isinstance(data.get(key), list):
            data[key] = [s for s in data[key] if isinstance(s, str) and s.strip()]

    if not partial and not all(data.get(k) for k in ("title", "ingredients", "steps", "category")):
        raise ValidationError("Title, ingredients, steps, and category are required")

    checks = {
        "title": rules.check_title,
        "ingredients": rules.check_ingredients,
        "steps": rules.check_steps,
        "prep_time": rules.check_prep_time,
        "difficulty": rules.check_difficulty,
    }
    for key, check in checks.items():
        if data.get(key) is not None:
            _raise_first(check(data[key]))
    for key in ("description", "category", "image_url"):
        if data.get(key) is not None:
            _raise_first(rules.check_text(data[key], key))
    return data


class CampusCookClient:
    """
    async with CampusCookClient("http://localhost:3000") as cc:
        await cc.login("ann@x.com", "password123")
        page = await cc.list_recipes(search="pasta")
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 20.0,
    ):
        self.token = token
        self.user: Optional[Dict[str, Any]] = None
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "CampusCookClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def authenticated(self) -> bool:
        return self.token is not None

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        resp = await self._http.request(method, path, headers=headers, **kwargs)

        if resp.status_code == 401:
            self.token = None
            self.user = None
        if resp.is_error:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            raise ApiError(resp.status_code, body.get("error", "Error"), body.get("message", resp.text))
        return resp.json()

    def _remember(self, body: Dict[str, Any]) -> Dict[str, Any]:
        self.token = body["token"]
        self.user = body["user"]
        return body

    # ------------------------------
    # auth
    # ------------------------------

    async def signup(self, name: str, email: str, password: str) -> Dict[str, Any]:
        validate_signup(name, email, password)
        body = await self._request("POST", "/auth/signup", json={"name": name, "email": email, "password": password})
        return self._remember(body)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email and password are required")
        body = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._remember(body)

    def logout(self) -> None:
        self.token = None
        self.user = None

    async def me(self) -> Dict[str, Any]:
        return (await self._request("GET", "/auth/me"))["user"]

    # ------------------------------
    # recipes
    # ------------------------------

    async def list_recipes(
        self,
        page: int = 1,
        limit: int = 12,
        search: str = "",
        category: str = "",
        sort: str = "createdAt",
        order: str = "desc",
    ) -> Dict[str, Any]:
        params = {"page": page, "limit": limit, "sort": sort, "order": order}
        if search:
            params["search"] = search
        if category:
            params["category"] = category
        return await self._request("GET", "/recipes", params=params)

    async def get_recipe(self, recipe_id: str) -> Dict[str, Any]:
        return (await self._request("GET", f"/recipes/{recipe_id}"))["recipe"]

    async def create_recipe(self, form: Dict[str, Any]) -> Dict[str, Any]:
        data = validate_recipe_form(form)
        return (await self._request("POST", "/recipes", json=data))["recipe"]

    async def update_recipe(self, recipe_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        data = validate_recipe_form(changes, partial=True)
        return (await self._request("PUT", f"/recipes/{recipe_id}", json=data))["recipe"]

    async def delete_recipe(self, recipe_id: str) -> str:
        return (await self._request("DELETE", f"/recipes/{recipe_id}"))["message"]

    async def user_recipes(self, user_id: str) -> List[Dict[str, Any]]:
        return (await self._request("GET", f"/recipes/user/{user_id}"))["recipes"]

    async def categories(self) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/categories"))["categories"]

    # ------------------------------
    # favorites / ratings / admin
    # ------------------------------

    async def favorites(self) -> List[Dict[str, Any]]:
        return (await self._request("GET", "/favorites"))["recipes"]

    async def add_favorite(self, recipe_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/favorites/{recipe_id}")

    async def remove_favorite(self, recipe_id: str) -> str:
        return (await self._request("DELETE", f"/favorites/{recipe_id}"))["message"]

    async def ratings(self, recipe_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/ratings/recipe/{recipe_id}")

    async def rate(self, recipe_id: str, rating: int, review: Optional[str] = None) -> Dict[str, Any]:
        _raise_first(rules.check_rating(rating), rules.check_review(review) if review is not None else None)
        payload: Dict[str, Any] = {"rating": rating}
        if review is not None:
            payload["review"] = review
        return await self._request("POST", f"/ratings/{recipe_id}", json=payload)

    async def dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/admin/dashboard")
