# app/config.py — Pydantic settings (env vars)

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.providers.common import SUPPORTED_PROVIDERS


class Settings(BaseSettings):
    # Active provider for this deployment
    search_provider: str = "peopledatalabs"

    # Provider keys
    peopledatalabs_api_key: str | None = None
    proxycurl_api_key: str | None = None
    apollo_api_key: str | None = None

    # Provider endpoints
    peopledatalabs_api_url: str = "https://api.peopledatalabs.com/v5/person/search"
    proxycurl_api_url: str = "https://nubela.co/proxycurl/api/v2/search/person"
    apollo_api_url: str = "https://api.apollo.io/api/v1/mixed_people/search"

    # Runtime
    provider_timeout_seconds: float = 30.0
    proxycurl_default_country: str = "US"
    allow_client_api_key: bool = True
    cors_allowed_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("search_provider")
    @classmethod
    def _validate_search_provider(cls, value: str) -> str:
        cleaned = value.strip().lower()
        if not cleaned:
            raise ValueError("SEARCH_PROVIDER must be set and non-empty")
        if cleaned not in SUPPORTED_PROVIDERS:
            raise ValueError(f"SEARCH_PROVIDER must be one of: {', '.join(SUPPORTED_PROVIDERS)}")
        return cleaned

    @field_validator("provider_timeout_seconds")
    @classmethod
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("PROVIDER_TIMEOUT_SECONDS must be positive")
        return value

    def cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_allowed_origins.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
