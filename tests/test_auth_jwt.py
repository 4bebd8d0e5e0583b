"""App JWT signing tests."""

from __future__ import annotations

from datetime import datetime, timezone

import jwt
import pytest
from github_app_token.auth import CLOCK_SKEW_S, AppCredentials, build_app_jwt
from github_app_token.config import ClientConfig
from github_app_token.errors import AppAuthenticationError


def test_jwt_claims_and_signature(private_key_pem: str, public_key_pem: str) -> None:
    now = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    token = build_app_jwt(AppCredentials(app_id="123", private_key=private_key_pem), now=now)

    claims = jwt.decode(
        token,
        public_key_pem,
        algorithms=["RS256"],
        options={"verify_exp": False, "verify_iat": False},
    )

    assert claims["iss"] == "123"
    assert claims["iat"] == int(now.timestamp()) - CLOCK_SKEW_S
    assert claims["exp"] == int(now.timestamp()) + 600
    assert jwt.get_unverified_header(token)["alg"] == "RS256"


def test_jwt_lifetime_follows_config(private_key_pem: str) -> None:
    now = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    token = build_app_jwt(
        AppCredentials(app_id="1", private_key=private_key_pem),
        config=ClientConfig(jwt_lifetime_s=120),
        now=now,
    )

    claims = jwt.decode(token, options={"verify_signature": False})
    assert claims["exp"] - int(now.timestamp()) == 120


def test_invalid_private_key_raises_safe_error() -> None:
    with pytest.raises(AppAuthenticationError) as exc:
        build_app_jwt(AppCredentials(app_id="1", private_key="not a pem key"))

    assert exc.value.code == "AppAuth"
    assert "not a pem key" not in exc.value.message
    assert "not a pem key" not in (exc.value.hint or "")


def test_credentials_repr_hides_private_key(private_key_pem: str) -> None:
    creds = AppCredentials(app_id="1", private_key=private_key_pem)
    assert "PRIVATE KEY" not in repr(creds)
