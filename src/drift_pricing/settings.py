from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    zones_path: Path | None = Field(
        default=None,
        description="GeoJSON zone file; the bundled Grand Cayman zones are used when unset",
    )
    policy_path: Path | None = Field(
        default=None,
        description="JSON pricing policy; built-in defaults are used when unset",
    )

    model_config = SettingsConfigDict(env_prefix="DRIFT_")

    @field_validator("zones_path", "policy_path")
    @classmethod
    def validate_exists(cls, v: Path | None) -> Path | None:
        if v is not None and not v.is_file():
            raise ValueError(f"File not found: {v}")
        return v


class LoggingSettings(BaseSettings):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["text", "json"] = "text"
    environment: str = "development"

    model_config = SettingsConfigDict(env_prefix="LOG_")


class Settings(BaseSettings):
    pricing: PricingSettings = Field(default_factory=PricingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        case_sensitive=False,
    )


def get_settings() -> Settings:
    """Load and validate settings from environment variables."""
    return Settings()
