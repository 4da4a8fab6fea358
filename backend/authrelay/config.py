"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - No secrets here: the stub session store issues its own tokens
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all settings: works out-of-the-box for local runs and tests
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from authrelay.core.domain_types import RefreshFailurePolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Refresh-and-retry behavior
    refresh_failure_policy: RefreshFailurePolicy = RefreshFailurePolicy.SURFACE
    coalesce_refreshes: bool = True

    @field_validator("refresh_failure_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: object) -> object:
        """Accept RETRY_ANYWAY / retry-anyway spellings from the environment."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    # Stub endpoints: ids that always report a failure
    stub_expired_user_id: str = "123"
    stub_failing_id: str = "500"

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
