# Pydantic schemas (request/response)
from datetime import datetime
from typing import Generic, Optional, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from accounts.models.user import UserRole

T = TypeVar("T")


class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)

    def changes(self) -> dict:
        """Fields the client explicitly supplied."""
        return self.model_dump(exclude_unset=True)


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash or salt."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SuccessResponse(BaseModel, Generic[T]):
    data: T


class ErrorResponse(BaseModel):
    status_code: int
    message: str
    error_key: str
    log: str
