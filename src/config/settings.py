# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for provider, resilience, cache, rate-limit and
logging settings. Every field maps to an upper-case environment variable
(``llm_provider`` -> ``LLM_PROVIDER``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UNAVAILABLE_MESSAGE = (
    "AI service is currently unavailable. "
    "Please try again later or enter content manually."
)


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === TEXT PROVIDER ===
    llm_provider: Literal["pollinations", "openai"] = "pollinations"
    llm_model: str = "openai"
    llm_temperature: float = 0.7
    llm_seed: int = 42
    pollinations_text_url: str = "https://text.pollinations.ai"
    pollinations_image_url: str = "https://image.pollinations.ai/prompt"
    openai_api_key: str = ""
    request_timeout_s: float = 30.0

    # === Retry ===
    retry_max_attempts: int = 3
    retry_base_delay_s: float = 1.0
    retry_backoff_factor: float = 2.0

    # === Circuit breaker ===
    breaker_failure_threshold: int = 5
    breaker_cooldown_s: float = 60.0

    # === Cache ===
    cache_backend: Literal["memory", "redis"] = "memory"
    cache_redis_url: str = ""
    text_cache_ttl_s: int = 3600
    image_cache_ttl_s: int = 86400

    # === Rate limiting ===
    rate_limit_backend: Literal["memory", "redis"] = "memory"
    rate_limit_redis_url: str = ""
    rate_limit_window_ms: int = 60_000
    rate_limit_max_requests: int = 100
    rate_limit_by_user: bool = True

    # === Messages ===
    unavailable_message: str = DEFAULT_UNAVAILABLE_MESSAGE

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator(
        "retry_max_attempts",
        "breaker_failure_threshold",
        "rate_limit_window_ms",
        "rate_limit_max_requests",
    )
    @classmethod
    def validate_positive_int(cls, v: int, info) -> int:  # noqa: N805
        if v < 1:
            raise ValueError(f"{info.field_name} must be >= 1")
        return v

    @field_validator(
        "retry_base_delay_s", "breaker_cooldown_s", "request_timeout_s"
    )
    @classmethod
    def validate_non_negative(cls, v: float, info) -> float:  # noqa: N805
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_REDIS_URL must be set when CACHE_BACKEND=redis")

        if self.rate_limit_backend == "redis" and not self.rate_limit_redis_url:
            errors.append(
                "RATE_LIMIT_REDIS_URL must be set when RATE_LIMIT_BACKEND=redis"
            )

        if self.llm_provider == "openai" and not self.openai_api_key:
            errors.append("OPENAI_API_KEY must be set when LLM_PROVIDER=openai")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
