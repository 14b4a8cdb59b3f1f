from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_choice, require_min_length, require_non_empty
from ..core.constants import COLLEGE_YEARS, MIN_PASSWORD_LENGTH, SEMESTERS
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import Profile
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    email: str
    full_name: Optional[str]
    profile_completed: bool


class AuthService:
    """Use case: sign up and log in."""

    def __init__(self, users: UserRepository):
        self._users = users

    @staticmethod
    def _normalize_email(email: str) -> str:
        email = require_non_empty(email, "Email").lower()
        if "@" not in email:
            raise ValidationError("Email is invalid")
        return email

    def sign_up(self, *, email: str, password: str, full_name: Optional[str] = None) -> int:
        email = self._normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("An account with this email already exists")

        user_id = self._users.create_user(
            email=email,
            password_hash=generate_password_hash(password),
            full_name=(full_name.strip() or None) if isinstance(full_name, str) else None,
        )
        logger.info("Account %s created", user_id)
        return user_id

    def authenticate(self, email: str, password: str) -> SessionUser:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid email or password")
        user = self._users.get_by_email(email.strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        profile = self._users.get_profile(user.user_id)
        return SessionUser(
            user_id=user.user_id,
            email=user.email,
            full_name=user.full_name,
            profile_completed=bool(profile and profile.profile_completed),
        )


class ProfileService:
    """Use case: academic profile shown on the dashboard header."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> Profile:
        profile = self._users.get_profile(int(user_id))
        if not profile:
            raise NotFoundError("Profile not found")
        return profile

    def complete(self, *, user_id: int, college_year, semester) -> Profile:
        if college_year in (None, "") or semester in (None, ""):
            raise ValidationError("Select your college year and semester")
        year = require_choice(college_year, "College year", COLLEGE_YEARS)
        sem = require_choice(semester, "Semester", SEMESTERS)

        self._users.update_profile(user_id=int(user_id), college_year=year, semester=sem, profile_completed=True)
        logger.info("Profile completed for user %s", user_id)
        return Profile(user_id=int(user_id), college_year=year, semester=sem, profile_completed=True)

    @staticmethod
    def year_label(college_year: Optional[int]) -> str:
        if not college_year:
            return ""
        labels = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}
        return f"{labels.get(int(college_year), str(college_year) + 'th')} Year"
