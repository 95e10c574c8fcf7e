"""
Standalone Builder - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated in the app lifespan.

Secrets:
    SUPABASE_SERVICE_ROLE_KEY is server-only. It is used to build the
    privileged backend client and is never returned by /api/config.
    SUPABASE_ANON_KEY is the public key handed to clients.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability. Missing Supabase
    values do not stop the process from starting; authenticated routes
    answer 500 "Server configuration error" until they are set.
    """

    # ── Supabase ──────────────────────────────────────────────────────────
    # What: Project URL, e.g. https://<project>.supabase.co
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )

    # What: Public anon key, safe to expose to clients via /api/config
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase public (anon) API key",
    )

    # What: Privileged key used by the handlers to resolve tokens and query tables
    # Never exposed through any endpoint
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (server-side only)",
    )

    # ── Application ───────────────────────────────────────────────────────
    app_name: str = Field(default="Standalone Builder")

    # What: Table names in the Supabase Postgres schema
    pages_table: str = Field(default="standalone_pages")
    admins_table: str = Field(default="standalone_admins")

    # What: How many recent pages the admin dashboard receives
    admin_pages_limit: int = Field(default=50, ge=1, le=1000)

    # What: Owner label for admin page rows whose user is missing from the directory
    unknown_email_label: str = Field(default="Onbekend")

    # ── CORS ──────────────────────────────────────────────────────────────
    # The builder is embedded on arbitrary sites, so every origin is allowed
    # unless narrowed here (comma-separated).
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: Optional[str]) -> Optional[str]:
        """The SDK joins paths onto the URL; a trailing slash doubles them."""
        if v:
            return v.rstrip("/")
        return v

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # SUPABASE_URL and supabase_url both work
        "extra": "ignore",
    }

    @property
    def backend_configured(self) -> bool:
        """True when the handlers can build a privileged backend client."""
        return bool(self.supabase_url and self.supabase_service_role_key)

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that the server-side Supabase settings are present.
        When:  Called during app startup (lifespan).
        How:   Collects every missing value and raises one ValueError.
        """
        errors = []
        if not self.supabase_url:
            errors.append("SUPABASE_URL is not set.")
        if not self.supabase_service_role_key:
            errors.append(
                "SUPABASE_SERVICE_ROLE_KEY is not set. "
                "Find it under Project Settings > API in the Supabase dashboard."
            )
        if not self.supabase_anon_key:
            errors.append("SUPABASE_ANON_KEY is not set; clients will not be able to sign in.")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
