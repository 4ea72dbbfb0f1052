# campuscook/core/validation.py
# Field rules shared by the request schemas and the API client.
# Each check returns None when the value passes, otherwise the error message.
from __future__ import annotations

import re
from typing import Any, Optional

EMAIL_RE = re.compile(r"^\S+@\S+\.\S+$")

PASSWORD_MIN = 8
PASSWORD_MAX_BYTES = 72  # bcrypt input limit
TITLE_MIN, TITLE_MAX = 5, 200
REVIEW_MAX = 1000
DIFFICULTIES = ("easy", "medium", "hard")


def _is_int(value: Any) -> bool:
    # bool is an int subclass; JSON true is not a number here
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def check_email(email: Any) -> Optional[str]:
    if not isinstance(email, str) or not EMAIL_RE.match(email):
        return "Please provide a valid email address"
    return None


def check_password(password: Any) -> Optional[str]:
    if not isinstance(password, str) or len(password) < PASSWORD_MIN:
        return f"Password must be at least {PASSWORD_MIN} characters long"
    if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return f"Password must not exceed {PASSWORD_MAX_BYTES} bytes"
    return None


def check_title(title: Any) -> Optional[str]:
    if not isinstance(title, str):
        return "Title must be a string"
    if not TITLE_MIN <= len(title.strip()) <= TITLE_MAX:
        return f"Title must be between {TITLE_MIN} and {TITLE_MAX} characters"
    return None


def check_ingredients(items: Any) -> Optional[str]:
    if not isinstance(items, list) or len(items) == 0:
        return "At least one ingredient is required"
    if not all(isinstance(i, str) for i in items):
        return "Ingredients must be strings"
    return None


def check_steps(items: Any) -> Optional[str]:
    if not isinstance(items, list) or len(items) == 0:
        return "At least one preparation step is required"
    if not all(isinstance(s, str) for s in items):
        return "Steps must be strings"
    return None


def check_prep_time(value: Any) -> Optional[str]:
    if not _is_int(value) or value < 1:
        return "Preparation time must be a positive integer"
    return None


def check_difficulty(value: Any) -> Optional[str]:
    if value not in DIFFICULTIES:
        return "Difficulty must be easy, medium, or hard"
    return None


def check_rating(value: Any) -> Optional[str]:
    if not _is_int(value) or not 1 <= value <= 5:
        return "Rating must be an integer between 1 and 5"
    return None


def check_review(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return "Review must be a string"
    if len(value.strip()) > REVIEW_MAX:
        return f"Review must not exceed {REVIEW_MAX} characters"
    return None


def check_text(value: Any, field: str) -> Optional[str]:
    if not isinstance(value, str):
        return f"{field} must be a string"
    return None
