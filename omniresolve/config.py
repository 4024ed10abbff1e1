"""Resolver configuration — env-driven via pydantic-settings.

Reads ARTIFACTORY_* environment variables (or a .env file) once, at
construction time.  Resolvers receive a settings instance explicitly and
never consult the environment themselves.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ENDPOINT = "http://artifactory.chef.co"


class ResolverSettings(BaseSettings):
    """Connection settings for the Artifactory service.

    Examples
    --------
    Override via environment::

        export ARTIFACTORY_ENDPOINT=https://artifactory.example.com
        export ARTIFACTORY_USERNAME=reader
        export ARTIFACTORY_PASSWORD=secret
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARTIFACTORY_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    endpoint: str = DEFAULT_ENDPOINT
    username: str | None = None
    password: str | None = None

    # Passed to requests as-is; no local retry or cancellation.
    timeout_seconds: float = 30.0

    log_level: str = "WARNING"

    @property
    def base_url(self) -> str:
        """The endpoint with every trailing slash removed (``a//`` -> ``a``)."""
        return self.endpoint.rstrip("/")

    @property
    def has_credentials(self) -> bool:
        """Whether a username/password pair is configured."""
        return bool(self.username) and self.password is not None
