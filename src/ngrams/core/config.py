"""Client configuration.

Scope:
- Centralizes environment variables (pydantic-settings) for the transport.
- The cursor and the models never read settings; only the HTTP layer does.
"""

from __future__ import annotations

import platform

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ngrams import __version__

DEFAULT_BASE_URL = "https://api.ngrams.dev"


def default_user_agent() -> str:
    """Identification header sent with every request: `<name>/<version>/<os>`."""

    return f"ngrams-python/{__version__}/{platform.system().lower() or 'unknown'}"


class ClientSettings(BaseSettings):
    """Central configuration of the API client.

    Every field can be overridden with an `NGRAMS_`-prefixed environment
    variable or a `.env` file in the working directory.
    """

    model_config = SettingsConfigDict(
        env_prefix="NGRAMS_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        min_length=8,
        description="Base URL of the REST API, without trailing slash.",
    )
    user_agent: str = Field(
        default_factory=default_user_agent,
        min_length=1,
        description="User-Agent identifying this client.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Transport timeout per request (seconds).",
    )

    def endpoint(self, label: str, resource: str) -> str:
        return f"{self.base_url.rstrip('/')}/{label}/{resource}"
