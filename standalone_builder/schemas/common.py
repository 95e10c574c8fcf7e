"""
Standalone Builder - Shared Schemas
====================================

What:  Response models used across routes (errors, config, health).
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Error body returned by every failing route.

    Example:
        {"error": "Invalid or expired token"}
        {"error": "Failed to create page", "details": "duplicate key value ..."}
    """
    error: str = Field(description="Human-readable error message")
    details: Optional[str] = Field(default=None, description="Backend error text (save only)")


class ConfigResponse(BaseModel):
    """
    Public client configuration served by GET /api/config.

    Keys are upper-case on the wire; the browser builds its Supabase client
    straight from them. Never add the service role key here.
    """
    supabase_url: str = Field(alias="SUPABASE_URL", default="")
    supabase_anon_key: str = Field(alias="SUPABASE_ANON_KEY", default="")
    app_name: str = Field(alias="APP_NAME")
    version: str = Field(alias="VERSION")

    model_config = {"populate_by_name": True}


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or degraded")
    version: str = Field(description="Application version")
    backend: str = Field(description="configured or not_configured")
    uptime_seconds: float = Field(description="Seconds since service started")
