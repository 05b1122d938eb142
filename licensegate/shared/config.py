"""
Library settings for licensegate.

These are process-wide knobs read from the environment. Per-validator policy
lives in :class:`licensegate.config.ValidatorConfig` and is always explicit.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LicenseGateSettings(BaseSettings):
    """Environment-driven settings (prefix ``LICENSEGATE_``)."""

    model_config = SettingsConfigDict(
        env_prefix="LICENSEGATE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Logging
    log_level: str = Field(default="info")
    log_json: bool = Field(default=True)

    # Remote key and revocation fetches; None keeps the httpx default
    http_timeout: Optional[float] = Field(default=None)

    # Revocation list fetch failures are treated as "not revoked" when True
    revocation_fail_open: bool = Field(default=True)

    # Observability
    metrics_enabled: bool = Field(default=True)


@lru_cache(maxsize=1)
def get_settings() -> LicenseGateSettings:
    """Return the cached settings instance."""
    return LicenseGateSettings()
