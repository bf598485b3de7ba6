# User registration, authentication and CRUD orchestration
import logging
import uuid
from typing import Protocol
from uuid import UUID

from accounts.core.errors import (
    AppError,
    CannotCreateEntityError,
    CannotDeleteEntityError,
    CannotGetEntityError,
    CannotListEntityError,
    CannotUpdateEntityError,
    EmailExistedError,
    InternalError,
    InvalidCredentialsError,
    InvalidRequestError,
    RecordNotFoundError,
)
from accounts.core.security import (
    Hasher,
    Token,
    TokenError,
    TokenPayload,
    TokenProvider,
    gen_salt,
    hashes_match,
)
from accounts.models.schemas import UserCreate, UserLogin, UserUpdate
from accounts.models.user import DEFAULT_ROLE, User
from accounts.repositories.user_repository import ByEmail, ById, UserQuery

logger = logging.getLogger(__name__)

ENTITY = "User"


class UserRepo(Protocol):
    def save(self, user: User) -> None: ...

    def get_user(self, query: UserQuery) -> User: ...

    def get_all(self) -> list[User]: ...

    def update(self, user_id: UUID, data: UserUpdate) -> None: ...

    def delete(self, user_id: UUID) -> None: ...


class UserService:
    def __init__(
        self,
        repo: UserRepo,
        hasher: Hasher,
        token_provider: TokenProvider,
        expiry: int,
        salt_length: int = 50,
        password_min_length: int = 6,
    ):
        self.repo = repo
        self.hasher = hasher
        self.token_provider = token_provider
        self.expiry = expiry
        self.salt_length = salt_length
        self.password_min_length = password_min_length
        self._dummy_salt = gen_salt(salt_length)

    def _validate(self, data: UserCreate) -> None:
        if not data.email.strip():
            raise InvalidRequestError(ValueError("email is required"))
        if len(data.password) < self.password_min_length:
            raise InvalidRequestError(
                ValueError(
                    f"password must be at least {self.password_min_length} characters"
                )
            )

    def register(self, data: UserCreate) -> UUID:
        """Create a user with a salted password hash and the default role.

        Raises EmailExistedError when the email is taken. The lookup is only a
        pre-check; the unique constraint on ``users.email`` settles races and
        surfaces as CannotCreateEntityError.
        """
        self._validate(data)

        try:
            self.repo.get_user(ByEmail(data.email))
        except RecordNotFoundError:
            pass
        else:
            raise EmailExistedError()

        salt = gen_salt(self.salt_length)
        user = User(
            id=uuid.uuid4(),
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            password_hash=self.hasher.hash(data.password + salt),
            salt=salt,
            role=DEFAULT_ROLE,
        )

        try:
            self.repo.save(user)
        except AppError as e:
            raise CannotCreateEntityError(ENTITY, e) from e

        logger.info("Registered user %s", user.id)
        return user.id

    def login(self, data: UserLogin) -> Token:
        """Issue a token for valid credentials.

        Unknown email and wrong password raise the same
        InvalidCredentialsError.
        """
        try:
            user = self.repo.get_user(ByEmail(data.email))
        except AppError as e:
            # Hash anyway so unknown emails take as long as wrong passwords
            self.hasher.hash(data.password + self._dummy_salt)
            logger.info("Login rejected")
            raise InvalidCredentialsError() from e

        hashed = self.hasher.hash(data.password + user.salt)
        if not hashes_match(user.password_hash, hashed):
            logger.info("Login rejected")
            raise InvalidCredentialsError()

        payload = TokenPayload(user_id=user.id, role=user.role)
        try:
            return self.token_provider.generate(payload, self.expiry)
        except TokenError as e:
            logger.error("Token generation failed for user %s: %s", user.id, e)
            raise InternalError(e) from e

    def get_all_users(self) -> list[User]:
        try:
            return self.repo.get_all()
        except AppError as e:
            raise CannotListEntityError(ENTITY, e) from e

    def get_user_by_id(self, user_id: UUID) -> User:
        try:
            return self.repo.get_user(ById(user_id))
        except AppError as e:
            raise CannotGetEntityError(ENTITY, e) from e

    def update_user(self, user_id: UUID, data: UserUpdate) -> None:
        try:
            self.repo.update(user_id, data)
        except AppError as e:
            raise CannotUpdateEntityError(ENTITY, e) from e

    def delete_user(self, user_id: UUID) -> None:
        try:
            self.repo.delete(user_id)
        except AppError as e:
            raise CannotDeleteEntityError(ENTITY, e) from e
