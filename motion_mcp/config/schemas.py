"""
Settings schema for motion-mcp.

Values come from MOTION_* environment variables (and a .env file); see
`motion_mcp.app.dependencies.get_settings`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from motion_mcp.integrations.motion.client import (
    DEFAULT_BASE_URL,
    DEFAULT_RATE_LIMIT_PER_MINUTE,
    MotionConfig,
)

LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class AppSettings(BaseModel):
    """
    Application settings model.

    Security:
        The API key uses SecretStr to prevent accidental logging.
        Access the value with: settings.api_key.get_secret_value()
    """

    model_config = ConfigDict(frozen=True)

    # Service identity
    service_name: str = "motion-mcp"
    debug: bool = False
    log_level: str = "INFO"

    # Motion API
    api_key: SecretStr = Field(..., description="Motion API key")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Motion API base URL")

    # Throughput and retries
    rate_limit_per_minute: int = Field(default=DEFAULT_RATE_LIMIT_PER_MINUTE, ge=1)
    rate_limit_safety_factor: float = Field(default=0.8, gt=0, le=1)
    request_timeout: float = Field(default=30.0, gt=0, description="Per-call timeout (s)")
    retry_base_delay: float = Field(default=5.0, ge=0, description="Retry base delay (s)")
    max_attempts: int = Field(default=3, ge=1)

    # HTTP server
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    @field_validator("api_key")
    @classmethod
    def api_key_not_blank(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("Motion API key must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def to_motion_config(self) -> MotionConfig:
        """Build the client configuration."""
        return MotionConfig(
            api_key=self.api_key.get_secret_value(),
            base_url=self.base_url,
            timeout=self.request_timeout,
            rate_limit_per_minute=self.rate_limit_per_minute,
            rate_limit_safety_factor=self.rate_limit_safety_factor,
            max_attempts=self.max_attempts,
            retry_delay=self.retry_base_delay,
            log_requests=self.debug,
            log_responses=self.debug,
        )
