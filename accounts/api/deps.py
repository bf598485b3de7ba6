# Dependency injection (service wiring, JWT verification)
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from accounts.core.config import settings
from accounts.core.errors import UnauthorizedError
from accounts.core.security import JWTProvider, Sha256Hasher, TokenError, TokenProvider
from accounts.db.session import get_db
from accounts.models.user import UserRole
from accounts.repositories.user_repository import UserRepository
from accounts.services.user_service import UserService

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Requester:
    """Authenticated caller, resolved from the bearer token."""

    user_id: UUID
    role: UserRole


@lru_cache
def get_token_provider() -> TokenProvider:
    return JWTProvider(settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM)


def get_user_service(
    db: Session = Depends(get_db),
    token_provider: TokenProvider = Depends(get_token_provider),
) -> UserService:
    return UserService(
        UserRepository(db),
        Sha256Hasher(),
        token_provider,
        expiry=settings.TOKEN_EXPIRY_SECONDS,
        salt_length=settings.SALT_LENGTH,
        password_min_length=settings.PASSWORD_MIN_LENGTH,
    )


def get_requester(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_provider: TokenProvider = Depends(get_token_provider),
) -> Requester:
    """
    Extract and verify the JWT bearer token.

    - Raises 401 if the Authorization header is missing
    - Raises 401 if the token is invalid, corrupted or expired
    - Returns the requester (user_id, role) taken from the token claims
    """
    if credentials is None:
        raise UnauthorizedError("missing bearer token")

    try:
        payload = token_provider.validate(credentials.credentials)
    except TokenError as e:
        raise UnauthorizedError("invalid or expired token", e) from e

    return Requester(user_id=payload.user_id, role=payload.role)
