"""Safe error types.

Errors raised by this package must be non-secret and stable: they never carry
installation tokens, JWTs, or private key content.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GitHubAppTokenError(Exception):
    """Base error for GitHub App token operations.

    This must never include secrets (tokens, JWTs, private key content).
    """

    code: str
    message: str
    hint: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return self.message


class InstallationNotFoundError(GitHubAppTokenError):
    """The owner has no installation of the app (or the lookup was rejected)."""

    __slots__ = ()


class TokenCreationError(GitHubAppTokenError):
    """GitHub rejected the installation access token request."""

    __slots__ = ()


class RevocationError(GitHubAppTokenError):
    """GitHub rejected the revocation (token invalid, expired, or malformed)."""

    __slots__ = ()


class InvalidTimestampError(GitHubAppTokenError):
    """An expiry timestamp could not be parsed."""

    __slots__ = ()


class AppAuthenticationError(GitHubAppTokenError):
    """The app JWT could not be signed with the supplied private key."""

    __slots__ = ()


class ConfigError(GitHubAppTokenError):
    """Client configuration is invalid."""

    __slots__ = ()


def installation_not_found(*, owner: str, status_code: int | None = None, hint: str | None = None) -> InstallationNotFoundError:
    """Return a safe error for a failed installation lookup."""
    return InstallationNotFoundError(
        code="InstallationNotFound",
        message=f"GitHub App is not installed for {owner}",
        hint=hint,
        status_code=status_code,
    )


def token_creation_failed(*, status_code: int | None = None, hint: str | None = None) -> TokenCreationError:
    """Return a safe error for a rejected token request.

    Used when GitHub returns 401/403/404/422 (bad credentials, or a repository or
    permission the installation does not grant).
    """
    return TokenCreationError(
        code="TokenCreation",
        message="Failed to create GitHub App installation access token",
        hint=hint,
        status_code=status_code,
    )


def revocation_failed(*, status_code: int | None = None, hint: str | None = None) -> RevocationError:
    """Return a safe error for a rejected revocation."""
    return RevocationError(
        code="Revocation",
        message="Failed to revoke GitHub App installation access token",
        hint=hint,
        status_code=status_code,
    )


class GitHubAPIError(GitHubAppTokenError):
    """GitHub answered with an error status or an undecodable body.

    Raised by the REST client; the token operations translate it into the
    operation-specific error above.
    """

    __slots__ = ()
