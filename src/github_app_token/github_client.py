"""GitHub REST client wrapper.

Provides:
- bearer auth (app JWT or installation token) and GitHub media-type headers
- no-redirect behavior and finite timeouts
- typed response structs for the endpoints used by token operations
- safe error translation (no secrets in raised errors)

Transport failures (``httpx.TransportError``) are not caught here and reach the
caller unmodified. Nothing is retried.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

import httpx

from .config import DEFAULT_CONFIG, ClientConfig
from .errors import GitHubAPIError


def _invalid_response(what: str) -> GitHubAPIError:
    return GitHubAPIError(code="GitHub", message=f"GitHub {what} response is missing required fields")


@dataclass(frozen=True, slots=True)
class InstallationResponse:
    """Subset of ``GET /users/{owner}/installation``."""

    id: int

    @classmethod
    def from_json(cls, data: object) -> InstallationResponse:
        """Validate a decoded installation payload."""
        if not isinstance(data, dict):
            raise _invalid_response("installation")
        installation_id = data.get("id")
        # bool is an int subclass; GitHub never sends one here.
        if not isinstance(installation_id, int) or isinstance(installation_id, bool):
            raise _invalid_response("installation")
        return cls(id=installation_id)


@dataclass(frozen=True, slots=True)
class AccessTokenResponse:
    """Subset of ``POST /app/installations/{id}/access_tokens``."""

    token: str = field(repr=False)
    expires_at: str

    @classmethod
    def from_json(cls, data: object) -> AccessTokenResponse:
        """Validate a decoded access token payload."""
        if not isinstance(data, dict):
            raise _invalid_response("access token")
        token = data.get("token")
        expires_at = data.get("expires_at")
        if not isinstance(token, str) or not token or not isinstance(expires_at, str) or not expires_at:
            raise _invalid_response("access token")
        return cls(token=token, expires_at=expires_at)


class GitHubClient:
    """Minimal async GitHub REST client bound to a single bearer credential.

    Use as an async context manager; one underlying ``httpx.AsyncClient`` is
    shared by every request made inside the block.
    """

    def __init__(
        self,
        *,
        token: str,
        config: ClientConfig = DEFAULT_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create a GitHub REST client.

        Args:
            token: App JWT or installation access token.
            config: Base URL, API version and timeouts.
            transport: Optional httpx transport for tests.
        """
        self._token = token
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> GitHubClient:
        self._client = httpx.AsyncClient(
            base_url=self._config.api_base_url,
            follow_redirects=False,
            timeout=self._config.timeout(),
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self._config.api_version,
        }

    async def request_json(
        self,
        *,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
    ) -> object | None:
        """Make a request and return decoded JSON (``None`` for 204 No Content).

        Raises:
            GitHubAPIError: On any 4xx/5xx status or an undecodable body.
        """
        if self._client is None:
            raise RuntimeError("GitHubClient must be used as an async context manager")

        resp = await self._client.request(method, path, headers=self._headers(), json=json_body)

        if resp.status_code >= 400:
            safe_hint = None
            try:
                err_payload = resp.json()
                if isinstance(err_payload, dict) and isinstance(err_payload.get("message"), str):
                    safe_hint = err_payload["message"]
            except ValueError:
                safe_hint = None
            raise GitHubAPIError(
                code="GitHub",
                message="GitHub request failed",
                hint=safe_hint,
                status_code=resp.status_code,
            )

        if resp.status_code == 204 or not resp.content:
            return None

        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubAPIError(code="GitHub", message="GitHub returned invalid JSON") from exc

    async def get_user_installation(self, owner: str) -> InstallationResponse:
        """Look up the app installation for a user or organization login."""
        data = await self.request_json(method="GET", path=f"/users/{quote(owner, safe='')}/installation")
        return InstallationResponse.from_json(data)

    async def create_installation_access_token(
        self,
        installation_id: int,
        *,
        body: dict[str, Any] | None = None,
    ) -> AccessTokenResponse:
        """Mint an installation access token, optionally narrowed by ``body``."""
        data = await self.request_json(
            method="POST",
            path=f"/app/installations/{installation_id}/access_tokens",
            json_body=body or None,
        )
        return AccessTokenResponse.from_json(data)

    async def revoke_installation_access_token(self) -> None:
        """Revoke the installation token this client is authenticated with."""
        await self.request_json(method="DELETE", path="/installation/token")
