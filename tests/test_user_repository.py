import uuid

import pytest

from accounts.core.errors import DatabaseError, RecordNotFoundError
from accounts.models.schemas import UserUpdate
from accounts.models.user import User, UserRole
from accounts.repositories.user_repository import ByEmail, ById


def _user(email="ada@example.com", **kwargs):
    return User(
        id=kwargs.pop("id", uuid.uuid4()),
        email=email,
        password_hash="hash",
        salt="salt",
        role=kwargs.pop("role", UserRole.USER),
        **kwargs,
    )


def test_save_and_get_by_email(repo):
    user = _user(first_name="Ada")
    repo.save(user)

    found = repo.get_user(ByEmail("ada@example.com"))
    assert found.id == user.id
    assert found.first_name == "Ada"
    assert found.role == UserRole.USER


def test_get_by_id(repo):
    user = _user()
    repo.save(user)

    assert repo.get_user(ById(user.id)).email == "ada@example.com"


def test_get_missing_user_raises_not_found(repo):
    with pytest.raises(RecordNotFoundError):
        repo.get_user(ByEmail("nobody@example.com"))
    with pytest.raises(RecordNotFoundError):
        repo.get_user(ById(uuid.uuid4()))


def test_unsupported_query_type(repo):
    with pytest.raises(TypeError):
        repo.get_user({"email": "ada@example.com"})


def test_duplicate_email_is_storage_failure(repo):
    repo.save(_user())

    with pytest.raises(DatabaseError):
        repo.save(_user())

    # Session is usable again after the rollback
    assert len(repo.get_all()) == 1


def test_get_all_returns_every_user(repo):
    repo.save(_user("a@example.com"))
    repo.save(_user("b@example.com"))

    emails = {u.email for u in repo.get_all()}
    assert emails == {"a@example.com", "b@example.com"}


def test_get_all_empty(repo):
    assert repo.get_all() == []


def test_update_applies_only_supplied_fields(repo, db_session):
    user = _user(first_name="Ada", last_name="Lovelace")
    repo.save(user)

    repo.update(user.id, UserUpdate(first_name="Augusta"))

    db_session.expire_all()
    updated = repo.get_user(ById(user.id))
    assert updated.first_name == "Augusta"
    assert updated.last_name == "Lovelace"


def test_update_missing_user_raises_not_found(repo):
    with pytest.raises(RecordNotFoundError):
        repo.update(uuid.uuid4(), UserUpdate(first_name="x"))


def test_empty_update_on_existing_user_is_noop(repo):
    user = _user(first_name="Ada")
    repo.save(user)

    repo.update(user.id, UserUpdate())

    assert repo.get_user(ById(user.id)).first_name == "Ada"


def test_delete_removes_row(repo):
    user = _user()
    repo.save(user)

    repo.delete(user.id)

    with pytest.raises(RecordNotFoundError):
        repo.get_user(ById(user.id))


def test_delete_missing_user_raises_not_found(repo):
    with pytest.raises(RecordNotFoundError):
        repo.delete(uuid.uuid4())
