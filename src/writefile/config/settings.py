from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVEL_CHOICES = {"DEBUG", "INFO", "WARN", "ERROR"}
_LOG_LEVEL_ALIASES = {"WARNING": "WARN"}


def normalize_log_level(value: object) -> str:
    """Normalize log-level inputs to the canonical choices used by the CLI."""

    if value is None:
        return "INFO"

    text = str(value).strip()
    if not text:
        return "INFO"

    upper = text.upper()
    return _LOG_LEVEL_ALIASES.get(upper, upper)


class WriteFileSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WRITEFILE_", env_file=".env", extra="ignore")

    log_format: Literal["json", "text"] = Field(default="json")
    log_level: str = Field(default="INFO")
    sweep_min_age_seconds: float = Field(default=3600.0, ge=0, description="Minimum age of staging files removed by sweep")
    follow_symlinks: bool = Field(default=True, description="Replace the file a symlink points at rather than the link")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> str:
        return normalize_log_level(value)


settings = WriteFileSettings()
