# campuscook/core/config.py
# Environment settings (.env), read-only after startup
from __future__ import annotations

import re
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_SECRET = "campuscook-dev-secret-change-me"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.I)
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> int:
    """'24h' / '30m' / '7d' / '3600' -> seconds."""
    m = _DURATION_RE.match(str(value))
    if not m:
        raise ValueError(f"invalid duration: {value!r}")
    return int(m.group(1)) * _UNIT_SECONDS[m.group(2).lower()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "campuscook"
    DB_INIT_RETRIES: int = 20

    JWT_SECRET: str = DEV_SECRET
    JWT_EXPIRES_IN: str = "24h"
    BCRYPT_ROUNDS: int = 10

    CORS_ORIGIN: str = "http://localhost:3001"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"

    @field_validator("JWT_EXPIRES_IN")
    @classmethod
    def _check_expiry(cls, v: str) -> str:
        parse_duration(v)
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def _check_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @property
    def token_ttl_seconds(self) -> int:
        return parse_duration(self.JWT_EXPIRES_IN)

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGIN.split(",") if o.strip()]

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


settings = Settings()


def get_settings() -> Settings:
    # router dependency; tests swap it via dependency_overrides
    return settings
