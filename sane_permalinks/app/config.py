from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import AnyUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"

    # only needed when records are looked up through SupabaseRecordFinder
    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    PERMALINK_REDIRECT_STATUS: int = 301
    PERMALINK_DEFAULT_PRIMARY_KEY: str = "id"

    @field_validator("PERMALINK_REDIRECT_STATUS")
    @classmethod
    def _is_redirect(cls, value: int) -> int:
        if value not in REDIRECT_STATUSES:
            raise ValueError(f"must be one of {sorted(REDIRECT_STATUSES)}")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
