"""Create and revoke GitHub App installation access tokens."""

from .auth import AppCredentials, build_app_jwt
from .config import ClientConfig
from .errors import AppAuthenticationError, ConfigError, GitHubAPIError, GitHubAppTokenError, InstallationNotFoundError, InvalidTimestampError, RevocationError, TokenCreationError
from .tokens import IssuedToken, Logger, Permissions, TokenCollection, TokenRequest, create, has_expired, revoke

__version__ = "0.1.0"

__all__ = [
    "AppAuthenticationError",
    "AppCredentials",
    "ClientConfig",
    "ConfigError",
    "GitHubAPIError",
    "GitHubAppTokenError",
    "InstallationNotFoundError",
    "InvalidTimestampError",
    "IssuedToken",
    "Logger",
    "Permissions",
    "RevocationError",
    "TokenCollection",
    "TokenCreationError",
    "TokenRequest",
    "build_app_jwt",
    "create",
    "has_expired",
    "revoke",
]
