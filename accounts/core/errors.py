"""
Application error types.

Every error surfaced to a client is an ``AppError``. The service layer wraps
storage failures with the entity and action they happened in; the exception
handlers in ``accounts.main`` turn an ``AppError`` into the failure envelope:

    {"status_code": 400, "message": "...", "error_key": "...", "log": "..."}
"""
from __future__ import annotations

from typing import Any, Optional

from fastapi import status


class AppError(Exception):
    """Base class for errors rendered into the failure envelope."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(
        self,
        message: str,
        key: str,
        root: Optional[BaseException] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.key = key
        self.root = root
        if status_code is not None:
            self.status_code = status_code

    @property
    def root_error(self) -> Optional[BaseException]:
        """Innermost cause, following nested AppErrors."""
        if isinstance(self.root, AppError):
            return self.root.root_error or self.root
        return self.root

    @property
    def log(self) -> str:
        root = self.root_error
        return str(root) if root is not None else self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "status_code": self.status_code,
            "message": self.message,
            "error_key": self.key,
            "log": self.log,
        }


class InvalidRequestError(AppError):
    def __init__(self, root: Optional[BaseException] = None):
        super().__init__("invalid request", "ErrInvalidRequest", root)


class RecordNotFoundError(AppError):
    def __init__(self, message: str = "record not found"):
        super().__init__(message, "ErrRecordNotFound")


class DatabaseError(AppError):
    def __init__(self, root: BaseException):
        super().__init__("something went wrong with DB", "DB_ERROR", root)


class InternalError(AppError):
    def __init__(self, root: Optional[BaseException] = None):
        super().__init__("internal error", "ErrInternal", root)


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "unauthorized", root: Optional[BaseException] = None):
        super().__init__(message, "ErrUnauthorized", root)


class EmailExistedError(AppError):
    def __init__(self):
        super().__init__("email has already existed", "ErrEmailExisted")


class InvalidCredentialsError(AppError):
    def __init__(self):
        super().__init__("email or password invalid", "ErrEmailOrPasswordInvalid")


# ---- Entity errors (storage failure tagged with entity and action) ---------


class EntityError(AppError):
    action: str = ""

    def __init__(self, entity: str, root: BaseException):
        super().__init__(
            f"Cannot {self.action} {entity.lower()}",
            f"ErrCannot{self.action.capitalize()}{entity}",
            root,
        )
        self.entity = entity


class CannotCreateEntityError(EntityError):
    action = "create"


class CannotListEntityError(EntityError):
    action = "list"


class CannotGetEntityError(EntityError):
    action = "get"


class CannotUpdateEntityError(EntityError):
    action = "update"


class CannotDeleteEntityError(EntityError):
    action = "delete"
