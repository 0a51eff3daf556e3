"""
PDF Service Configuration Module

Centralized configuration management with Pydantic validation.
All environment variables are validated at startup to catch misconfigurations early.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


DEFAULT_RENDER_TIMEOUT_MS = 30000
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class PDFServiceSettings(BaseSettings):
    """
    PDF service configuration with validation.

    All settings can be overridden via environment variables
    (ENVIRONMENT, API_KEY, CHROME_EXECUTABLE_PATH, ...).
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )

    # === Deployment ===
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    is_local: bool = Field(
        default=False,
        description="Treat the process as a local development run regardless of environment"
    )

    # === Security ===
    api_key: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the x-api-key header"
    )

    # === Browser ===
    chrome_executable_path: Optional[str] = Field(
        default=None,
        description="Explicit Chrome/Chromium binary, overrides every default"
    )
    running_in_container: bool = Field(
        default=False,
        description="Use the system Chromium at /usr/bin/chromium in production"
    )
    render_timeout_ms: int = Field(
        default=DEFAULT_RENDER_TIMEOUT_MS,
        ge=1000,
        le=300000,
        description="Page load and print timeout in milliseconds (1000-300000)"
    )
    max_duration_seconds: int = Field(
        default=10,
        ge=1,
        description="Wall-clock budget imposed by the hosting platform per request"
    )
    validate_browser_on_startup: bool = Field(
        default=True,
        description="Render a test PDF at startup to verify Chromium works"
    )

    # === Logging ===
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        allowed = {"development", "staging", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of: {', '.join(sorted(allowed))}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a standard logging level name."""
        v_upper = v.upper()
        if v_upper not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(LOG_LEVELS)}")
        return v_upper

    @field_validator("api_key", "chrome_executable_path")
    @classmethod
    def blank_as_unset(cls, v: Optional[str]) -> Optional[str]:
        """Empty environment variables behave as if they were not set."""
        if v is None or not v.strip():
            return None
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running as a development (or local) process."""
        return self.environment == "development" or self.is_local

    @property
    def auth_required(self) -> bool:
        """Key check is skipped only in development with no key configured."""
        return not (self.is_development and self.api_key is None)

    def validate_production_config(self) -> List[str]:
        """
        Validate configuration is suitable for production.

        Returns list of warning messages.
        """
        issues = []

        if not self.is_development and not self.api_key:
            issues.append("WARNING: API_KEY not configured, every request will be rejected")
        if self.render_timeout_ms > self.max_duration_seconds * 1000:
            issues.append(
                f"WARNING: render timeout ({self.render_timeout_ms}ms) exceeds the platform "
                f"budget ({self.max_duration_seconds}s); large documents may be aborted externally"
            )

        return issues


@lru_cache()
def get_settings() -> PDFServiceSettings:
    """
    Get cached settings instance.

    Settings are loaded once and cached; routes receive them through
    FastAPI dependency injection.
    """
    return PDFServiceSettings()


def validate_config_on_startup(settings: Optional[PDFServiceSettings] = None) -> PDFServiceSettings:
    """
    Validate configuration at application startup.

    Raises ValueError with details if config is invalid.
    Logs warnings for non-critical issues.
    """
    try:
        settings = settings or get_settings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}") from e

    for issue in settings.validate_production_config():
        logger.warning(issue)

    # Log loaded configuration (redact secrets)
    logger.info(f"Configuration loaded: environment={settings.environment}")
    logger.info(f"  is_local={settings.is_local}")
    logger.info(f"  api_key={'*****' if settings.api_key else None}")
    logger.info(f"  chrome_executable_path={settings.chrome_executable_path}")
    logger.info(f"  running_in_container={settings.running_in_container}")
    logger.info(f"  render_timeout={settings.render_timeout_ms}ms")
    logger.info(f"  auth_required={settings.auth_required}")

    return settings
