"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, HttpUrl, TypeAdapter, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_http_url = TypeAdapter(HttpUrl)


class Settings(BaseSettings):
    """Strongly typed application configuration."""

    base_url: str = Field(default="http://localhost:8080", alias="BASE_URL")
    use_redirect_path: bool = Field(default=False, alias="USE_REDIRECT_PATH")
    request_timeout: float = Field(
        default=10.0, alias="REQUEST_TIMEOUT", description="Seconds"
    )
    copied_reset_seconds: float = Field(default=2.0, alias="COPIED_RESET_SECONDS")
    max_url_length: int = Field(default=2048, alias="MAX_URL_LENGTH")
    ws_inactivity_timeout: float = Field(
        default=300.0, alias="WS_INACTIVITY_TIMEOUT", description="Seconds"
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", alias="LOG_LEVEL"
    )
    port: int = Field(default=8000, alias="PORT")

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, populate_by_name=True
    )

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        try:
            _http_url.validate_python(value)
        except ValidationError as exc:
            raise ValueError(f"BASE_URL must be an absolute http(s) URL, got {value!r}") from exc
        return value.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return a cached instance of settings."""

    return Settings()
