from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ProviderSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QUOTEDESK_",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )
    marketstack_base_url: str = "http://api.marketstack.com"
    marketstack_access_key: str | None = None
    provider_timeout_seconds: float = 10.0


class StaticSettings(BaseModel):
    static_dir: str = "static"
    favicon: str = "coffee.ico"
    document_root: str = "public"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QUOTEDESK_",
        env_nested_delimiter="__",
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "QUOTEDESK_HOST"),
    )
    port: int = Field(
        default=8000,
        validation_alias=AliasChoices("PORT", "QUOTEDESK_PORT"),
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "QUOTEDESK_LOG_LEVEL"),
    )

    providers: ProviderSettings = Field(default_factory=ProviderSettings)
    static: StaticSettings = Field(default_factory=StaticSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}")
        return level


settings = Settings()
