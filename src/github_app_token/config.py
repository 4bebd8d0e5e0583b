"""Client configuration for github-app-token.

Configuration is supplied explicitly by the caller; nothing is read from the
environment or from files.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from .errors import ConfigError

# GitHub rejects app JWTs whose lifetime exceeds ten minutes.
MAX_JWT_LIFETIME_S = 600


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Connection settings shared by every remote call."""

    api_base_url: str = "https://api.github.com"
    api_version: str = "2022-11-28"

    # Network
    total_timeout_s: float = 30.0
    connect_timeout_s: float = 5.0
    read_timeout_s: float = 30.0

    # App JWT
    jwt_lifetime_s: int = MAX_JWT_LIFETIME_S

    def __post_init__(self) -> None:
        base = self.api_base_url.rstrip("/")
        if not base.startswith("https://"):
            raise ConfigError(code="Config", message="api_base_url must be an https URL")
        object.__setattr__(self, "api_base_url", base)

        if not 0 < self.jwt_lifetime_s <= MAX_JWT_LIFETIME_S:
            raise ConfigError(
                code="Config",
                message=f"jwt_lifetime_s must be between 1 and {MAX_JWT_LIFETIME_S}",
            )
        if self.total_timeout_s <= 0 or self.connect_timeout_s <= 0 or self.read_timeout_s <= 0:
            raise ConfigError(code="Config", message="Timeouts must be positive")

    def timeout(self) -> httpx.Timeout:
        """Build the httpx timeout for a single request."""
        return httpx.Timeout(
            timeout=self.total_timeout_s,
            connect=self.connect_timeout_s,
            read=self.read_timeout_s,
        )


DEFAULT_CONFIG = ClientConfig()
