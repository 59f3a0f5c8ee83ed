"""
Application Configuration Module

Every setting comes from the environment or a .env file (pydantic-settings).
The deployment mode decides what is served besides the API:
    - DEVELOPMENT: API-only operation, static files from ``public/``
    - PRODUCTION: Also serves the prebuilt front-end from ``build/``

The AI proxy switches between the Gemini provider and local fallback
responses depending on whether GOOGLE_API_KEY holds a real credential.

Usage:
    from carbon_trace.core.config import get_settings

    settings = get_settings()
    if settings.has_ai_credential:
        # Talk to Gemini
    else:
        # Use fallback responses
"""

import logging
import sys
from enum import Enum
from typing import Optional
from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from carbon_trace import __version__


# Value shipped in old .env templates; treated the same as no key at all
PLACEHOLDER_API_KEY = "your-fallback-key-here"


class EnvironmentMode(str, Enum):
    """
    Deployment modes.

    Attributes:
        DEVELOPMENT: Local API-only operation
        PRODUCTION: Serves the prebuilt front-end alongside the API
        STAGING: Pre-production, behaves like development for static files
    """
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    STAGING = "staging"


class Settings(BaseSettings):
    """
    Service settings.

    Environment variable names are the field names, case-insensitive.
    Keep GOOGLE_API_KEY out of version control.

    Attributes:
        env_mode: Current environment (development/production/staging)
        debug: Enable verbose logging and error details
        api_host: Host to bind the API server
        api_port: Port for the API server
        database_url: SQLAlchemy async connection string
        google_api_key: Gemini credential (absent or placeholder = fallback mode)
        gemini_model: Model used for prompt generation
        ai_max_output_tokens: Generation output bound
        ai_temperature: Generation sampling temperature
        public_directory: Static files served in every mode
        build_directory: Prebuilt front-end served in production
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # ==========================================================================
    # ENVIRONMENT
    # ==========================================================================

    env_mode: EnvironmentMode = Field(
        default=EnvironmentMode.DEVELOPMENT,
        validation_alias=AliasChoices("env_mode", "node_env"),
        description="Application environment mode"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    app_name: str = Field(
        default="Carbon Trace API",
        description="Application display name"
    )
    app_version: str = Field(
        default=__version__,
        description="Application version"
    )
    api_host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    api_port: int = Field(
        default=5000,
        validation_alias=AliasChoices("api_port", "port"),
        description="API server port"
    )

    # ==========================================================================
    # DATABASE
    # ==========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./carbon_trace.db",
        description="SQLAlchemy async connection URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Log every SQL statement"
    )

    # ==========================================================================
    # GOOGLE GEMINI
    # ==========================================================================

    google_api_key: Optional[str] = Field(
        default=None,
        description="Google Generative AI API key"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash-lite",
        description="Gemini model name"
    )
    ai_max_output_tokens: int = Field(
        default=2048,
        description="Maximum tokens in a generated answer"
    )
    ai_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for generation"
    )

    # ==========================================================================
    # FRONT-END
    # ==========================================================================

    public_directory: str = Field(
        default="public",
        description="Static files served in every mode"
    )
    build_directory: str = Field(
        default="build",
        description="Prebuilt single-page app served in production"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("env_mode", mode="before")
    @classmethod
    def validate_env_mode(cls, v: str) -> EnvironmentMode:
        """Accept mode names in any case."""
        if isinstance(v, EnvironmentMode):
            return v
        try:
            return EnvironmentMode(v.lower())
        except ValueError:
            valid = [e.value for e in EnvironmentMode]
            raise ValueError(f"Invalid env_mode. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def is_development(self) -> bool:
        """True in development mode."""
        return self.env_mode == EnvironmentMode.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """True in production mode; the front-end build is served."""
        return self.env_mode == EnvironmentMode.PRODUCTION

    @property
    def has_ai_credential(self) -> bool:
        """True when GOOGLE_API_KEY is set to something other than the placeholder."""
        return bool(self.google_api_key) and self.google_api_key != PLACEHOLDER_API_KEY


@lru_cache()
def get_settings() -> Settings:
    """
    Settings for the running process, read once.

    Used by the process entry point; tests build ``Settings`` directly
    and hand them to ``create_app``.

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(settings: Optional[Settings] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure root logging once per process.

    Args:
        settings: Settings to read the debug flag from (defaults to cached settings)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = settings or get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)

    return logging.getLogger("carbon_trace")


def get_logger(name: str) -> logging.Logger:
    """
    Get a named logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
