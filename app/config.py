# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DOCS_ROOT)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The CLI and the API both build their LintOptions from these settings, so a
# .env file checked in next to the docs keeps local runs and CI consistent.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models import DEFAULT_ADMONITION_KINDS, DEFAULT_LANGUAGES, LintOptions


def _split(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Lint Configuration
    # -------------------------------------------------------------------------
    # List values are comma-separated strings

    DOCS_ROOT: str = Field(
        default="docs",
        description="Default directory linted when no path is given"
    )

    REQUIRED_FIELDS: str = Field(
        default="title,description",
        description="Front matter fields every page must define (comma-separated)"
    )

    ALLOWED_LANGUAGES: str = Field(
        default=",".join(DEFAULT_LANGUAGES),
        description="Recognised code fence languages (comma-separated)"
    )

    EXTRA_LANGUAGES: str = Field(
        default="",
        description="Languages added on top of ALLOWED_LANGUAGES (comma-separated)"
    )

    ADMONITION_KINDS: str = Field(
        default=",".join(DEFAULT_ADMONITION_KINDS),
        description="Recognised admonition kinds (comma-separated)"
    )

    ALLOW_UNTAGGED_FENCES: bool = Field(
        default=False,
        description="Accept code fences without a language tag"
    )

    TITLE_COLLISIONS_ARE_ERRORS: bool = Field(
        default=False,
        description="Fail the run on duplicate page titles"
    )

    STRICT_MODE: bool = Field(
        default=False,
        description="Treat warnings as failures"
    )

    DISABLED_CHECKS: str = Field(
        default="",
        description="Checks to skip (comma-separated)"
    )

    EXCLUDE_PATTERNS: str = Field(
        default="",
        description="Glob patterns relative to the docs root to skip (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="127.0.0.1",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # API Limits
    # -------------------------------------------------------------------------

    MAX_DOCUMENTS: int = Field(
        default=500,
        ge=1,
        le=10_000,
        description="Maximum number of documents per lint request"
    )

    MAX_DOCUMENT_SIZE_KB: int = Field(
        default=512,
        ge=1,
        le=10_240,
        description="Maximum size of a single document in KB"
    )

    ALLOW_DIRECTORY_LINT: bool = Field(
        default=False,
        description="Allow API clients to lint directories on the server"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Treat empty values as unset
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        # The .env file may carry keys for other tools
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://docs.example.com" -> ["http://localhost:3000", "https://docs.example.com"]
        """
        return _split(self.CORS_ORIGINS)

    @property
    def required_fields_list(self) -> list[str]:
        return _split(self.REQUIRED_FIELDS)

    @property
    def allowed_languages_list(self) -> list[str]:
        """Base languages plus EXTRA_LANGUAGES, lowercased and de-duplicated."""
        languages = _split(self.ALLOWED_LANGUAGES) + _split(self.EXTRA_LANGUAGES)
        return list(dict.fromkeys(lang.lower() for lang in languages))

    @property
    def admonition_kinds_list(self) -> list[str]:
        return _split(self.ADMONITION_KINDS)

    @property
    def disabled_checks_list(self) -> list[str]:
        return _split(self.DISABLED_CHECKS)

    @property
    def exclude_patterns_list(self) -> list[str]:
        return _split(self.EXCLUDE_PATTERNS)

    @property
    def max_document_size_bytes(self) -> int:
        return self.MAX_DOCUMENT_SIZE_KB * 1024

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    def lint_options(self, **overrides) -> LintOptions:
        """
        Build LintOptions from these settings.

        Keyword overrides replace individual option values, e.g. the CLI's
        --strict flag.

        Example:
            options = settings.lint_options(strict=True)
        """
        values = {
            "required_fields": self.required_fields_list,
            "allowed_languages": self.allowed_languages_list,
            "allow_untagged_fences": self.ALLOW_UNTAGGED_FENCES,
            "admonition_kinds": self.admonition_kinds_list,
            "title_collisions_are_errors": self.TITLE_COLLISIONS_ARE_ERRORS,
            "strict": self.STRICT_MODE,
            "disabled_checks": self.disabled_checks_list,
            "exclude": self.exclude_patterns_list,
        }
        values.update({key: value for key, value in overrides.items() if value is not None})
        return LintOptions(**values)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
