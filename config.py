"""
Centralised settings loader (pydantic-settings).

Every value can be overridden from the environment or a local `.env`.
"""

from __future__ import annotations
from functools import lru_cache
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── runtime / DB / auth ─────────────────────────────────────────
    env_name: str = Field("local", alias="ENV_NAME")
    database_url: str = Field(
        "sqlite+aiosqlite:///./fasttrack.db", alias="DATABASE_URL"
    )
    jwt_secret: str = Field("changeme", alias="JWT_SECRET")
    token_ttl_minutes: int = Field(60 * 24, alias="TOKEN_TTL_MINUTES")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # ─── calendar / goals ────────────────────────────────────────────
    timezone: str = Field("UTC", alias="TIMEZONE")
    daily_calorie_goal: float = Field(2000, alias="DAILY_CALORIE_GOAL")
    water_goal: int = Field(8, alias="WATER_GOAL")

    # ─── server-mediated Google Fit sync ─────────────────────────────
    sync_function_url: str | None = Field(None, alias="SYNC_FUNCTION_URL")
    sync_function_key: str | None = Field(None, alias="SYNC_FUNCTION_KEY")
    sync_timeout: float = Field(15.0, alias="SYNC_TIMEOUT")

    # allow other teammates’ env-vars without crashing
    model_config = {
        "extra": "ignore",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
