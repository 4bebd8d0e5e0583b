"""Create, revoke and check GitHub App installation access tokens.

Example::

    token = await create(
        app_id="123456",
        private_key=private_key,
        owner="octo-org",
        repositories=["octo-repo"],
        permissions={"issues": "write"},
    )
    # ... use token.token ...
    if not has_expired(token.expires_at):
        await revoke(token.token)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Protocol

import httpx

from .auth import AppCredentials, build_app_jwt
from .config import DEFAULT_CONFIG, ClientConfig
from .errors import GitHubAPIError, InvalidTimestampError, RevocationError, installation_not_found, revocation_failed, token_creation_failed
from .github_client import GitHubClient

logger = logging.getLogger(__name__)

Permissions = Mapping[str, str]


class Logger(Protocol):
    """Anything with an ``info`` method; ``logging.Logger`` qualifies."""

    def info(self, message: str) -> None: ...


@dataclass(frozen=True, slots=True)
class TokenRequest:
    """Scope of the token to mint."""

    owner: str
    repositories: tuple[str, ...] | None = None
    permissions: Permissions | None = None

    def to_body(self) -> dict[str, Any]:
        """Render the JSON body for the access token endpoint (unset fields omitted)."""
        body: dict[str, Any] = {}
        if self.repositories is not None:
            body["repositories"] = list(self.repositories)
        if self.permissions is not None:
            body["permissions"] = dict(self.permissions)
        return body


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """An installation access token as returned by GitHub."""

    token: str = field(repr=False)
    expires_at: str
    installation_id: int


def _parse_timestamp(value: object) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise InvalidTimestampError(code="InvalidTimestamp", message="Expiry timestamp is empty or not a string")
    raw = value.strip()
    try:
        # RFC3339 timestamp like 2025-01-01T00:00:00Z
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00").replace("z", "+00:00"))
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(raw), datetime.min.time())
        except ValueError as exc:
            raise InvalidTimestampError(
                code="InvalidTimestamp",
                message="Expiry timestamp is not a valid ISO-8601 timestamp",
                hint=raw[:64],
            ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def has_expired(expires_at: str, *, now: datetime | None = None) -> bool:
    """Return True if the token has expired.

    The boundary is inclusive: a token whose expiry equals ``now`` counts as expired.

    Raises:
        InvalidTimestampError: If ``expires_at`` cannot be parsed.
    """
    expires = _parse_timestamp(expires_at)
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now >= expires


async def create(
    *,
    app_id: str,
    private_key: str,
    owner: str,
    repositories: Sequence[str] | None = None,
    permissions: Permissions | None = None,
    config: ClientConfig = DEFAULT_CONFIG,
    transport: httpx.AsyncBaseTransport | None = None,
) -> IssuedToken:
    """Generate a new installation access token for ``owner``'s installation.

    Raises:
        AppAuthenticationError: If the private key cannot sign a JWT.
        InstallationNotFoundError: If the owner has no installation of the app.
        TokenCreationError: If GitHub rejects the token request.
    """
    credentials = AppCredentials(app_id=app_id, private_key=private_key)
    request = TokenRequest(
        owner=owner,
        repositories=tuple(repositories) if repositories is not None else None,
        permissions=permissions,
    )
    app_jwt = build_app_jwt(credentials, config=config)

    async with GitHubClient(token=app_jwt, config=config, transport=transport) as client:
        try:
            installation = await client.get_user_installation(request.owner)
        except GitHubAPIError as exc:
            raise installation_not_found(owner=request.owner, status_code=exc.status_code, hint=exc.hint) from exc
        logger.info("Resolved GitHub App installation %s for %s", installation.id, request.owner)

        try:
            access = await client.create_installation_access_token(installation.id, body=request.to_body())
        except GitHubAPIError as exc:
            raise token_creation_failed(status_code=exc.status_code, hint=exc.hint) from exc

    logger.info("Created installation access token for installation %s (expires %s)", installation.id, access.expires_at)
    return IssuedToken(token=access.token, expires_at=access.expires_at, installation_id=installation.id)


async def revoke(
    token: str,
    *,
    config: ClientConfig = DEFAULT_CONFIG,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Revoke an installation access token.

    Raises:
        RevocationError: If the token is empty or GitHub rejects the revocation.
    """
    if not token:
        raise RevocationError(code="Revocation", message="No installation access token to revoke")

    async with GitHubClient(token=token, config=config, transport=transport) as client:
        try:
            await client.revoke_installation_access_token()
        except GitHubAPIError as exc:
            raise revocation_failed(status_code=exc.status_code, hint=exc.hint) from exc
    logger.info("Revoked installation access token")


class TokenCollection:
    """Collects issued tokens and revokes them all, oldest first."""

    def __init__(
        self,
        logger: Logger | None = None,
        *,
        config: ClientConfig = DEFAULT_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.tokens: list[IssuedToken] = []
        self.logger: Logger = logger if logger is not None else logging.getLogger("github_app_token")
        self._config = config
        self._transport = transport

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self) -> Iterator[IssuedToken]:
        return iter(self.tokens)

    def push(self, token: IssuedToken) -> None:
        self.tokens.append(token)

    async def revokes(self) -> None:
        """Revoke every collected token that has not expired yet.

        Tokens are processed one at a time in push order; the first failure
        propagates and the remaining tokens are left untouched.
        """
        for token in self.tokens:
            if has_expired(token.expires_at):
                self.logger.info("skip revoking GitHub App token as it has already expired")
                continue
            self.logger.info("revoking GitHub App token")
            await revoke(token.token, config=self._config, transport=self._transport)
