"""GitHub App authentication.

Implements App JWT signing. The private key and the resulting JWT are secrets and
must never be logged or included in error messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt

from .config import DEFAULT_CONFIG, ClientConfig
from .errors import AppAuthenticationError

# Backdate iat to tolerate clock drift between us and GitHub.
CLOCK_SKEW_S = 60


@dataclass(frozen=True, slots=True)
class AppCredentials:
    """App identity used to sign JWTs."""

    app_id: str
    private_key: str = field(repr=False)


def build_app_jwt(
    credentials: AppCredentials,
    *,
    config: ClientConfig = DEFAULT_CONFIG,
    now: datetime | None = None,
) -> str:
    """Sign an RS256 JWT that authenticates as the GitHub App.

    Raises:
        AppAuthenticationError: If the private key cannot be used for signing.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    payload = {
        "iat": int((now - timedelta(seconds=CLOCK_SKEW_S)).timestamp()),
        "exp": int((now + timedelta(seconds=config.jwt_lifetime_s)).timestamp()),
        "iss": str(credentials.app_id),
    }
    try:
        return jwt.encode(payload, credentials.private_key, algorithm="RS256")
    except (jwt.PyJWTError, ValueError, TypeError, AttributeError) as exc:
        # Never echo the key; the cause chain is kept for debugging.
        raise AppAuthenticationError(
            code="AppAuth",
            message="GitHub App private key could not be used to sign a JWT",
            hint="Expected a PEM-encoded RSA private key",
        ) from exc
