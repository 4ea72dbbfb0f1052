# campuscook/models/schemas.py
# Request bodies and response shapes for the /api surface.
# Request models run the shared rules from core.validation so the API and
# the client report the same messages.
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator, model_validator

from campuscook.core import validation as rules


def _apply(check, value):
    err = check(value)
    if err:
        raise ValueError(err)
    return value


# ------------------------------
# auth
# ------------------------------

class SignupIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def _check(self) -> "SignupIn":
        if not self.name or not self.name.strip() or not self.email or not self.password:
            raise ValueError("Name, email, and password are required")
        _apply(rules.check_email, self.email)
        _apply(rules.check_password, self.password)
        self.name = self.name.strip()
        self.email = self.email.strip().lower()
        return self


class LoginIn(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def _check(self) -> "LoginIn":
        if not self.email or not self.password:
            raise ValueError("Email and password are required")
        self.email = self.email.strip().lower()
        return self


class UserOut(BaseModel):
    id: str
    name: str
    email: str
    role: str


class AuthOut(BaseModel):
    token: str
    user: UserOut


class MeOut(BaseModel):
    user: UserOut


# ------------------------------
# recipes
# ------------------------------

class _RecipeFields(BaseModel):
    # typed as Any so wrong types get the rule messages, not pydantic's
    title: Any = None
    description: Any = None
    ingredients: Any = None
    steps: Any = None
    prep_time: Any = None
    difficulty: Any = None
    category: Any = None
    image_url: Any = None

    @field_validator("title")
    @classmethod
    def _title(cls, v):
        if v is None:
            return v
        return _apply(rules.check_title, v).strip()

    @field_validator("ingredients")
    @classmethod
    def _ingredients(cls, v):
        if v is None:
            return v
        return _apply(rules.check_ingredients, v)

    @field_validator("steps")
    @classmethod
    def _steps(cls, v):
        if v is None:
            return v
        return _apply(rules.check_steps, v)

    @field_validator("prep_time")
    @classmethod
    def _prep_time(cls, v):
        if v is None:
            return v
        return int(_apply(rules.check_prep_time, v))

    @field_validator("difficulty")
    @classmethod
    def _difficulty(cls, v):
        if v is None:
            return v
        return _apply(rules.check_difficulty, v)

    @field_validator("description", "image_url", "category")
    @classmethod
    def _text(cls, v, info):
        if v is None:
            return v
        return _apply(lambda s: rules.check_text(s, info.field_name), v).strip()


class RecipeCreateIn(_RecipeFields):
    @model_validator(mode="after")
    def _required(self) -> "RecipeCreateIn":
        if not self.title or not self.ingredients or not self.steps or not self.category:
            raise ValueError("Title, ingredients, steps, and category are required")
        return self


class RecipeUpdateIn(_RecipeFields):
    """Partial update: only the fields present in the body are validated and written."""

    @model_validator(mode="after")
    def _no_null_required(self) -> "RecipeUpdateIn":
        for field in ("title", "ingredients", "steps", "category"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class AuthorOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None


class RecipeOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    ingredients: Optional[List[str]] = None
    steps: Optional[List[str]] = None
    prep_time: Optional[int] = None
    difficulty: Optional[str] = None
    category: str
    image_url: Optional[str] = None
    author: Optional[AuthorOut] = None
    averageRating: Optional[float] = None
    ratingCount: Optional[int] = None
    favoriteCount: Optional[int] = None
    isFavorited: Optional[bool] = None
    favoritedAt: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class RecipeEnvelope(BaseModel):
    recipe: RecipeOut


class RecipesEnvelope(BaseModel):
    recipes: List[RecipeOut]


class PaginationOut(BaseModel):
    currentPage: int
    totalPages: int
    totalRecipes: int
    limit: int
    hasNextPage: bool
    hasPrevPage: bool


class RecipePageOut(BaseModel):
    recipes: List[RecipeOut]
    pagination: PaginationOut


class MessageOut(BaseModel):
    message: str


# ------------------------------
# ratings
# ------------------------------

class RatingIn(BaseModel):
    rating: Any = None
    review: Any = None

    @field_validator("rating")
    @classmethod
    def _rating(cls, v):
        return int(_apply(rules.check_rating, v))

    @field_validator("review")
    @classmethod
    def _review(cls, v):
        if v is None:
            return v
        return _apply(rules.check_review, v).strip()

    @model_validator(mode="before")
    @classmethod
    def _rating_present(cls, data):
        # rating has a default so field validators would skip a missing one
        if isinstance(data, dict) and data.get("rating") is None:
            raise ValueError("Rating must be an integer between 1 and 5")
        return data


class RatingUserOut(BaseModel):
    id: str
    name: Optional[str] = None


class RatingOut(BaseModel):
    id: str
    rating: int
    review: Optional[str] = None
    user: Optional[RatingUserOut] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class RatingWriteOut(BaseModel):
    message: str
    rating: RatingOut


class RatingListOut(BaseModel):
    ratings: List[RatingOut]
    averageRating: float
    totalRatings: int


# ------------------------------
# favorites / categories / admin
# ------------------------------

class FavoriteRef(BaseModel):
    id: str


class FavoriteWriteOut(BaseModel):
    message: str
    favorite: FavoriteRef


class CategoryOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    recipeCount: int
    createdAt: Optional[datetime] = None


class CategoriesOut(BaseModel):
    categories: List[CategoryOut]


class StatisticsOut(BaseModel):
    totalUsers: int
    totalRecipes: int
    totalRatings: int
    totalFavorites: int


class RecentRecipeOut(BaseModel):
    id: str
    title: str
    author: Optional[str] = None
    category: str
    createdAt: Optional[datetime] = None


class DashboardOut(BaseModel):
    statistics: StatisticsOut
    recentRecipes: List[RecentRecipeOut]
