from __future__ import annotations

import pytest

from class_management.core.enums import Role
from class_management.core.exceptions import NotFoundError, ValidationError


def test_register_hashes_password_and_normalizes_email(container, users_repo):
    user = container.auth_service.register(
        first_name=" Katherine ", last_name="Johnson", email="KJ@School.Test", password="orbit42"
    )

    assert user.email == "kj@school.test"
    assert user.first_name == "Katherine"
    assert user.role == Role.STUDENT
    assert users_repo.get_by_id(user.user_id).password_hash != "orbit42"
    assert "password" not in user.to_dict()


def test_register_rejects_duplicate_email(container):
    with pytest.raises(ValidationError, match="already exists"):
        container.auth_service.register(first_name="A", last_name="B", email="ALAN@school.test", password="secret1")


def test_register_rejects_short_password(container):
    with pytest.raises(ValidationError, match="password"):
        container.auth_service.register(first_name="A", last_name="B", email="ab@school.test", password="123")


def test_authenticate(container):
    s_user = container.auth_service.authenticate("ada@school.test", "secret1")

    assert s_user.user_id == "t1"
    assert s_user.full_name == "Ada Lovelace"
    assert s_user.role == Role.TEACHER


@pytest.mark.parametrize("email,password", [("ada@school.test", "wrong"), ("nobody@school.test", "secret1")])
def test_authenticate_rejects_bad_credentials(container, email, password):
    with pytest.raises(ValidationError, match="Invalid credentials"):
        container.auth_service.authenticate(email, password)


def test_account_without_password_cannot_log_in(container):
    with pytest.raises(ValidationError):
        container.auth_service.authenticate("alan@school.test", "")


def test_list_by_role_only_returns_active_users(container):
    container.user_service.update_user("s2", {"isActive": False})

    assert [u.user_id for u in container.user_service.list_by_role("student")] == ["s1"]
    assert len(container.user_service.list_users(role="student")) == 2


def test_update_user_rejects_email_taken_by_someone_else(container):
    with pytest.raises(ValidationError, match="already in use"):
        container.user_service.update_user("s1", {"email": "grace@school.test"})

    same = container.user_service.update_user("s1", {"email": "alan@school.test", "lastName": "M. Turing"})
    assert same.last_name == "M. Turing"


def test_unknown_user_and_role(container):
    with pytest.raises(NotFoundError):
        container.user_service.get_user("nope")
    with pytest.raises(ValidationError):
        container.user_service.list_by_role("janitor")
