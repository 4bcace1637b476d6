from __future__ import annotations

import hmac
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from ..core.constants import ADMIN_PASSWORD, ADMIN_USERNAME
from ..core.enums import Role
from ..core.exceptions import AuthenticationError


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    username: str
    display_name: str
    role: Role


class AuthService:
    """Use case: authenticate the built-in administrator account.

    Only the literal ``admin`` / ``admin123`` pair is accepted.
    """

    def authenticate(self, username: str, password: str) -> SessionUser:
        username = username or ""
        password = password or ""
        user_ok = hmac.compare_digest(username.encode("utf-8"), ADMIN_USERNAME.encode("utf-8"))
        pass_ok = hmac.compare_digest(password.encode("utf-8"), ADMIN_PASSWORD.encode("utf-8"))
        if not (user_ok and pass_ok):
            raise AuthenticationError("Invalid username or password")
        return SessionUser(username=ADMIN_USERNAME, display_name="Administrator", role=Role.ADMIN)


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    expires_at: datetime
    token_type: str = "Bearer"


class TokenService:
    """HS256 JWT issue/verify bound to one issuer and audience."""

    algorithm = "HS256"

    def __init__(self, *, key: str, issuer: str, audience: str, expires_minutes: int = 60):
        if not key:
            raise ValueError("JWT_KEY must be set")
        self._key = key
        self._issuer = issuer
        self._audience = audience
        self._expires = timedelta(minutes=int(expires_minutes))

    def issue(self, user: SessionUser, *, now: datetime | None = None) -> IssuedToken:
        now = now or datetime.now(timezone.utc)
        expires_at = now + self._expires
        claims = {
            "sub": user.username,
            "name": user.display_name,
            "role": user.role.value,
            "iss": self._issuer,
            "aud": self._audience,
            "iat": now,
            "nbf": now,
            "exp": expires_at,
        }
        token = jwt.encode(claims, self._key, algorithm=self.algorithm)
        return IssuedToken(access_token=token, expires_at=expires_at)

    def verify(self, token: str) -> dict:
        try:
            return jwt.decode(
                token,
                self._key,
                algorithms=[self.algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require": ["exp", "iss", "aud", "sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token") from e
