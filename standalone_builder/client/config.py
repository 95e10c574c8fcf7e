"""
Standalone Builder - Client Settings
=====================================

What:  Where the client finds the API and keeps its session mirror.
How:   Environment variables prefixed with STANDALONE_ (or .env):

    STANDALONE_API_BASE_URL   base URL of the handlers (default localhost:8000)
    STANDALONE_SITE_URL       origin used for password-reset redirects
    STANDALONE_SESSION_FILE   JSON mirror of the signed-in user; empty disables
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class ClientSettings(BaseSettings):
    api_base_url: str = Field(default="http://localhost:8000")
    site_url: Optional[str] = Field(default=None)
    session_file: Optional[str] = Field(default="~/.standalone_builder/session.json")

    model_config = {
        "env_prefix": "STANDALONE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


client_settings = ClientSettings()
