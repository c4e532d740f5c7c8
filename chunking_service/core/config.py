"""Global configuration (12-factor style).

Environment variables (see `.env.example`):

* ``COMPLETION_API_KEY``     - optional; bearer credential for the completion
  service. Never hardcoded. When unset the intelligent strategy degrades to
  the paragraph splitter without making a network call.
* ``COMPLETION_API_BASE``    - default: ``"https://api.x.ai/v1"``
* ``COMPLETION_MODEL``       - default: ``"grok-beta"``
* ``COMPLETION_TEMPERATURE`` - default: ``0.1``
* ``COMPLETION_MAX_TOKENS``  - default: ``4000``
* ``COMPLETION_TIMEOUT``     - default: ``45.0`` seconds
* ``MAX_DELEGATED_CHARS``    - default: ``12000``; longer content is truncated
  before it is sent to the completion service
* ``DEFAULT_CHUNK_SIZE``     - default: ``800`` characters
* ``SINGLE_CHUNK_THRESHOLD`` - default: ``10``
* ``SIMPLE_THRESHOLD``       - default: ``500``
* ``FALLBACK_CHUNK_SIZE``    - default: ``800``
* ``API_AUTH_KEY``           - optional; when set ``POST /chunk`` requires a
  matching ``x-api-key`` header
* ``LOG_LEVEL``              - default: ``"INFO"``
* ``PORT``                   - default: ``3001``

Usage:

    from chunking_service.core.config import Settings
    settings = Settings()  # auto-loads & validates env vars
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic import SecretStr
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Typed view over process environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Completion service
    completion_api_key: SecretStr | None = None
    completion_api_base: str = "https://api.x.ai/v1"
    completion_model: str = "grok-beta"
    completion_temperature: float = 0.1
    completion_max_tokens: int = Field(default=4000, ge=1)
    completion_timeout: float = Field(default=45.0, gt=0)
    max_delegated_chars: int = Field(default=12000, ge=1)

    # Chunking
    default_chunk_size: int = Field(default=800, ge=1)
    single_chunk_threshold: int = 10
    simple_threshold: int = 500
    fallback_chunk_size: int = Field(default=800, ge=1)

    # Optional API auth for backend endpoints (x-api-key header)
    api_auth_key: str | None = None

    log_level: str = "INFO"
    port: int = 3001

    @property
    def completion_configured(self) -> bool:
        return bool(
            self.completion_api_key and self.completion_api_key.get_secret_value()
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, read once at startup."""
    return Settings()
