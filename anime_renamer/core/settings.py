"""Environment configuration for anime-renamer.

Environment Variables:
    ANIME_RENAMER_SHOKO_URL - Shoko Server base URL, enables the Shoko collaborators
    ANIME_RENAMER_SHOKO_APIKEY - Shoko API key
    ANIME_RENAMER_LOG_LEVEL - Logging level (default: "INFO")
    ANIME_RENAMER_TIMEOUT - Upstream request timeout in seconds
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .http_client import DEFAULT_TIMEOUT

ENV_PREFIX = "ANIME_RENAMER_"
LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, extra="ignore")

    shoko_url: Optional[str] = Field(default=None, description="Shoko Server base URL")
    shoko_apikey: Optional[str] = Field(default=None, description="Shoko API key")
    log_level: str = Field(default="INFO", description="Logging level")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Upstream timeout in seconds")

    @field_validator("shoko_url")
    @classmethod
    def validate_shoko_url(cls, v: Optional[str]) -> Optional[str]:
        if v and not v.startswith(("http://", "https://")):
            raise ValueError(f"{ENV_PREFIX}SHOKO_URL must start with http:// or https://, got: {v}")
        return v.rstrip("/") if v else None

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in LOG_LEVELS:
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of {sorted(LOG_LEVELS)}, got: {v}")
        return upper


def load_settings() -> Settings:
    """Settings read fresh from the process environment."""
    return Settings()
