"""
SQLAlchemy-backed user repository.

Lookups take a typed query object (``ByEmail`` / ``ById``) instead of
a free-form condition map. A missing row raises ``RecordNotFoundError``; any
other SQLAlchemy failure is rolled back and raised as ``DatabaseError``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from accounts.core.errors import DatabaseError, RecordNotFoundError
from accounts.models.schemas import UserUpdate
from accounts.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ByEmail:
    email: str


@dataclass(frozen=True)
class ById:
    user_id: UUID


UserQuery = Union[ByEmail, ById]


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def _where(self, query: UserQuery):
        if isinstance(query, ByEmail):
            return User.email == query.email
        if isinstance(query, ById):
            return User.id == query.user_id
        raise TypeError(f"unsupported user query: {query!r}")

    def save(self, user: User) -> None:
        try:
            self.db.add(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Save user failed: %s", e)
            raise DatabaseError(e) from e

    def get_user(self, query: UserQuery) -> User:
        try:
            user = self.db.query(User).filter(self._where(query)).first()
        except SQLAlchemyError as e:
            logger.error("Get user failed: %s", e)
            raise DatabaseError(e) from e

        if user is None:
            raise RecordNotFoundError()
        return user

    def get_all(self) -> list[User]:
        # Unpaginated
        try:
            return self.db.query(User).order_by(User.created_at).all()
        except SQLAlchemyError as e:
            logger.error("List users failed: %s", e)
            raise DatabaseError(e) from e

    def update(self, user_id: UUID, data: UserUpdate) -> None:
        changes = data.changes()
        try:
            query = self.db.query(User).filter(User.id == user_id)
            if changes:
                affected = query.update(changes, synchronize_session=False)
            else:
                affected = query.count()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Update user %s failed: %s", user_id, e)
            raise DatabaseError(e) from e

        if affected == 0:
            raise RecordNotFoundError()

    def delete(self, user_id: UUID) -> None:
        try:
            affected = (
                self.db.query(User)
                .filter(User.id == user_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Delete user %s failed: %s", user_id, e)
            raise DatabaseError(e) from e

        if affected == 0:
            raise RecordNotFoundError()
