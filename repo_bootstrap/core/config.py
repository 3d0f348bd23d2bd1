"""Application configuration.

All secrets must be supplied via environment variables (or a ``.env`` file).
This module intentionally avoids printing secret values.
"""

from __future__ import annotations

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repo_bootstrap.domain.errors import MissingCredentialError

DEFAULT_EVENT_SOURCE = "repo_bootstrap.github.creator"


class AppSettings(BaseSettings):
    """Settings built once at startup and passed into constructors."""

    model_config = SettingsConfigDict(
        env_prefix="",
        extra="ignore",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # GitHub
    github_token: str | None = None
    github_api_base_url: str = "https://api.github.com"
    github_host_url: str = "https://github.com"
    github_request_timeout_seconds: float = 30.0

    # Local clone
    git_clone_timeout_seconds: int | None = None

    # Lifecycle events
    event_source: str = DEFAULT_EVENT_SOURCE

    log_level: str = "INFO"

    # Server
    validate_on_startup: bool = True
    listen_host: str = "0.0.0.0"
    listen_port: int = 8000

    @field_validator("github_token", mode="before")
    @classmethod
    def _normalize_env_string(cls, value: Any) -> Any:
        """Normalizes env var strings.

        Docker's `--env-file` does not strip quotes. To avoid subtle auth failures
        like 401 caused by surrounding quotes, we trim whitespace and strip a
        single pair of surrounding quotes.
        """

        if value is None or not isinstance(value, str):
            return value
        text = value.strip()
        if len(text) >= 2 and ((text[0] == text[-1] == '"') or (text[0] == text[-1] == "'")):
            text = text[1:-1].strip()
        return text or None

    def require_github_token(self) -> str:
        """Returns the GitHub token or raises ``MissingCredentialError``."""

        if self.github_token is None:
            raise MissingCredentialError(variable="GITHUB_TOKEN")
        return self.github_token
