from __future__ import annotations

from typing import Optional, Protocol

from .model import Profile, User


class UserRepository(Protocol):
    """Repository interface for accounts and their profile row.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, email: str, password_hash: str, full_name: Optional[str] = None) -> int:
        """Create the account and an empty profile. Returns user_id."""

        raise NotImplementedError

    def get_profile(self, user_id: int) -> Optional[Profile]:
        raise NotImplementedError

    def update_profile(self, *, user_id: int, college_year: int, semester: int, profile_completed: bool) -> None:
        raise NotImplementedError
