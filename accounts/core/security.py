"""
Security primitives: salted password hashing and JWT access tokens.

Collaborators of the user service:
- ``Hasher``: deterministic one-way hash of ``password + salt``.
- ``TokenProvider``: issues and validates bearer tokens carrying the user id
  and role.
"""
from __future__ import annotations

import hashlib
import hmac
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Protocol
from uuid import UUID

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError, PyJWTError
from pydantic import BaseModel

from accounts.models.user import UserRole

SALT_ALPHABET = string.ascii_letters + string.digits


# ==================== PASSWORD HASHING ====================


class Hasher(Protocol):
    def hash(self, data: str) -> str: ...


class Sha256Hasher:
    """Hex-encoded SHA-256 digest."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode("utf-8")).hexdigest()


def gen_salt(length: int) -> str:
    """Generate a random alphanumeric salt of the given length."""
    if length <= 0:
        raise ValueError("salt length must be positive")
    return "".join(secrets.choice(SALT_ALPHABET) for _ in range(length))


def hashes_match(expected: str, actual: str) -> bool:
    """Compare two digests without leaking timing information."""
    return hmac.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))


# ==================== JWT TOKENS ====================


class TokenPayload(BaseModel):
    user_id: UUID
    role: UserRole


class Token(BaseModel):
    token: str
    created: datetime
    expiry: int


class TokenError(Exception):
    """Raised when a token cannot be issued or validated."""


class TokenProvider(Protocol):
    def generate(self, payload: TokenPayload, expiry: int) -> Token: ...

    def validate(self, token: str) -> TokenPayload: ...


class JWTProvider:
    """Signed JWT access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def generate(self, payload: TokenPayload, expiry: int) -> Token:
        now = datetime.now(timezone.utc)
        claims = {
            "sub": str(payload.user_id),
            "role": payload.role.value,
            "iat": now,
            "exp": now + timedelta(seconds=expiry),
        }
        try:
            encoded = jwt.encode(claims, self.secret, algorithm=self.algorithm)
        except (PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            raise TokenError(f"cannot generate token: {exc}") from exc

        return Token(token=encoded, created=now, expiry=expiry)

    def validate(self, token: str) -> TokenPayload:
        try:
            claims = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except ExpiredSignatureError as exc:
            raise TokenError("token has expired") from exc
        except InvalidTokenError as exc:
            raise TokenError("invalid token") from exc

        try:
            return TokenPayload(user_id=claims["sub"], role=claims["role"])
        except (KeyError, ValueError) as exc:
            raise TokenError("invalid token claims") from exc
