"""Client configuration and constants."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

TokenSupplier = Callable[[], Optional[str]]
LanguageSupplier = Callable[[], Optional[str]]
TokenRefresher = Callable[[], Any]
LoadingIndicator = Callable[[bool], Any]


class Settings(BaseSettings):
    """Runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    app_env: Literal["dev", "prod", "test"] = Field(default="dev", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Remote API
    api_base_url: str = Field(default="https://api.example.com", alias="API_BASE_URL")
    request_timeout: float = Field(default=30.0, alias="REQUEST_TIMEOUT", gt=0.0)
    max_auth_retries: int = Field(default=3, alias="MAX_AUTH_RETRIES", ge=0)
    default_language: str = Field(default="en", alias="DEFAULT_LANGUAGE")

    # Reachability probe
    check_connectivity: bool = Field(default=True, alias="CHECK_CONNECTIVITY")
    connectivity_host: str = Field(default="1.1.1.1", alias="CONNECTIVITY_HOST")
    connectivity_port: int = Field(default=53, alias="CONNECTIVITY_PORT", gt=0)
    connectivity_timeout: float = Field(default=3.0, alias="CONNECTIVITY_TIMEOUT", gt=0.0)


class DispatcherConfig(BaseModel):
    """Immutable per-dispatcher configuration, injected once at construction."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    base_url: str = ""
    timeout: float = Field(default=30.0, gt=0.0)
    max_auth_retries: int = Field(default=3, ge=0)
    default_language: str = "en"
    token_supplier: TokenSupplier | None = None
    language_supplier: LanguageSupplier | None = None
    token_refresher: TokenRefresher | None = None
    loading_indicator: LoadingIndicator | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **hooks: Any) -> "DispatcherConfig":
        """Build a dispatcher config from settings plus caller-provided hooks."""

        return cls(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
            max_auth_retries=settings.max_auth_retries,
            default_language=settings.default_language,
            **hooks,
        )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()  # type: ignore[call-arg]
