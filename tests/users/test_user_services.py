from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import AuthenticationError, ValidationError
from src.attendance_tracker.attendance_tracker.users.service import ProfileService


def test_sign_up_then_authenticate(container, users_repo):
    user_id = container.auth_service.sign_up(email=" Student@Example.com ", password="secret123", full_name="Asha")

    s_user = container.auth_service.authenticate("student@example.com", "secret123")

    assert s_user.user_id == user_id
    assert s_user.email == "student@example.com"
    assert s_user.profile_completed is False
    assert users_repo.get_by_id(user_id).password_hash != "secret123"


def test_duplicate_email_is_rejected(container):
    container.auth_service.sign_up(email="a@example.com", password="secret123")

    with pytest.raises(ValidationError):
        container.auth_service.sign_up(email="A@example.com", password="another1")


@pytest.mark.parametrize(
    "email, password",
    [("", "secret123"), ("not-an-email", "secret123"), ("a@example.com", "short")],
)
def test_sign_up_validation(container, email, password):
    with pytest.raises(ValidationError):
        container.auth_service.sign_up(email=email, password=password)


def test_wrong_password_and_unknown_email(container):
    container.auth_service.sign_up(email="a@example.com", password="secret123")

    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("a@example.com", "wrong-pass")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate("b@example.com", "secret123")
    with pytest.raises(AuthenticationError):
        container.auth_service.authenticate(None, "secret123")


def test_complete_profile(container):
    user_id = container.auth_service.sign_up(email="a@example.com", password="secret123")

    profile = container.profile_service.complete(user_id=user_id, college_year="2", semester=3)

    assert profile.college_year == 2
    assert profile.semester == 3
    assert container.profile_service.get(user_id).profile_completed is True
    assert container.auth_service.authenticate("a@example.com", "secret123").profile_completed is True


@pytest.mark.parametrize("year, semester", [(None, 3), (2, ""), (5, 3), (2, 9), ("x", 1)])
def test_profile_requires_valid_choices(container, year, semester):
    user_id = container.auth_service.sign_up(email="a@example.com", password="secret123")

    with pytest.raises(ValidationError):
        container.profile_service.complete(user_id=user_id, college_year=year, semester=semester)


def test_year_label():
    assert ProfileService.year_label(1) == "1st Year"
    assert ProfileService.year_label(3) == "3rd Year"
    assert ProfileService.year_label(None) == ""


def test_non_text_fields_are_validation_errors(container):
    with pytest.raises(ValidationError):
        container.auth_service.sign_up(email=["a@example.com"], password="secret123")
    with pytest.raises(ValidationError):
        container.auth_service.sign_up(email="a@example.com", password=123456789)
    with pytest.raises(ValidationError):
        container.subject_service.create(owner_id=1, name=42)
