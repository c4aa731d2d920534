"""Settings for the MicroJPEG SDK, read from the environment or a .env file."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.microjpeg.com/v1/"


class MicroJpegSettings(BaseSettings):
    # API
    api_key: Optional[str] = Field(default=None, description="MicroJPEG API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="API base endpoint")
    timeout: float = Field(
        default=120.0,
        description="Request timeout in seconds for HTTP clients the SDK creates",
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON")

    model_config = SettingsConfigDict(
        env_prefix="MICROJPEG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def ensure_trailing_slash(cls, v: str) -> str:
        """Endpoints are joined relative to the base, so it must end with '/'."""
        return v if v.endswith("/") else f"{v}/"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> MicroJpegSettings:
    return MicroJpegSettings()
