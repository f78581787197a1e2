"""Configuration for the shot decision engine."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INTENT_TEXT = "Favor center. Commit to your stock swing."


class _Settings(BaseSettings):
    wind_max_age_minutes: float = Field(default=30.0, alias="CADDIE_WIND_MAX_AGE_MIN")
    suppress_if_stale: str = Field(default="wind", alias="CADDIE_SUPPRESS_IF_STALE")
    intent_text: str = Field(default=DEFAULT_INTENT_TEXT, alias="CADDIE_INTENT_TEXT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def suppress_keys(self) -> tuple[str, ...]:
        return tuple(
            key.strip() for key in self.suppress_if_stale.split(",") if key.strip()
        )


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached engine settings."""

    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


__all__ = ["DEFAULT_INTENT_TEXT", "get_settings", "reset_settings_cache"]
