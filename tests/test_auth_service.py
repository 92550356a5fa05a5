import pytest
from werkzeug.security import check_password_hash

import services.auth_service as auth_service
from middleware.errors import DuplicateRecordError, ValidationError
from repositories.user_repository import UserRepository


@pytest.fixture
def users(monkeypatch, make_collection):
    collection = make_collection()
    monkeypatch.setattr(auth_service, "UserRepository", lambda: UserRepository(collection))
    return collection


def test_register_hashes_password_and_hides_it(users):
    profile = auth_service.register_user(
        {"name": "Ana", "email": "Ana@Example.com", "password": "s3cret-pass", "accountType": "Writer"}
    )

    stored = users.docs[0]
    assert stored["email"] == "ana@example.com"
    assert stored["accountType"] == "Writer"
    assert check_password_hash(stored["password"], "s3cret-pass")
    assert "password" not in profile.model_dump(by_alias=True)
    assert profile.id == str(stored["_id"])


def test_register_rejects_duplicate_email(users):
    auth_service.register_user({"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"})
    with pytest.raises(DuplicateRecordError):
        auth_service.register_user({"name": "Ana", "email": "ANA@example.com", "password": "other-pass"})


def test_register_rejects_short_password(users):
    with pytest.raises(ValidationError):
        auth_service.register_user({"name": "Ana", "email": "ana@example.com", "password": "short"})
    assert users.docs == []


def test_authenticate(users):
    auth_service.register_user({"name": "Ana", "email": "ana@example.com", "password": "s3cret-pass"})

    assert auth_service.authenticate("ana@example.com", "s3cret-pass").name == "Ana"
    assert auth_service.authenticate("ana@example.com", "wrong") is None
    assert auth_service.authenticate("nobody@example.com", "s3cret-pass") is None
