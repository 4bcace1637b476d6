from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from dairy_system.auth.service import AuthService, TokenService
from dairy_system.core.enums import Role
from dairy_system.core.exceptions import AuthenticationError


def test_only_builtin_admin_pair_is_accepted():
    user = AuthService().authenticate("admin", "admin123")

    assert user.username == "admin"
    assert user.role == Role.ADMIN


@pytest.mark.parametrize(
    "username,password",
    [
        ("admin", "admin"),
        ("Admin", "admin123"),
        ("admin", "ADMIN123"),
        ("root", "admin123"),
        ("  admin", "admin123"),
        ("admin ", "admin123"),
        ("", ""),
        (None, None),
    ],
)
def test_other_credentials_are_rejected(username, password):
    with pytest.raises(AuthenticationError):
        AuthService().authenticate(username, password)


def test_issued_token_verifies_and_carries_claims(token_service):
    user = AuthService().authenticate("admin", "admin123")

    issued = token_service.issue(user)
    claims = token_service.verify(issued.access_token)

    assert issued.token_type == "Bearer"
    assert claims["sub"] == "admin"
    assert claims["role"] == "Admin"
    assert claims["iss"] == "dairy-system-test"
    assert claims["aud"] == "dairy-system-test-clients"


def test_expired_token_is_rejected(token_service, fixed_now):
    user = AuthService().authenticate("admin", "admin123")
    issued = token_service.issue(user, now=fixed_now)

    with pytest.raises(AuthenticationError, match="expired"):
        token_service.verify(issued.access_token)


def test_token_for_other_audience_is_rejected(token_service):
    other = TokenService(key="test-jwt-key-with-enough-length-for-hs256", issuer="dairy-system-test", audience="someone-else")
    issued = other.issue(AuthService().authenticate("admin", "admin123"))

    with pytest.raises(AuthenticationError):
        token_service.verify(issued.access_token)


def test_token_signed_with_other_key_is_rejected(token_service):
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {
            "sub": "admin",
            "iss": "dairy-system-test",
            "aud": "dairy-system-test-clients",
            "exp": now + timedelta(minutes=5),
        },
        "a-completely-different-signing-key-123",
        algorithm="HS256",
    )

    with pytest.raises(AuthenticationError, match="Invalid token"):
        token_service.verify(forged)


def test_empty_key_is_a_configuration_error():
    with pytest.raises(ValueError):
        TokenService(key="", issuer="x", audience="y")
