from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a student account.

    Note: plain data object (no DB access code).
    """

    user_id: int
    email: str
    password_hash: str
    full_name: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Profile:
    user_id: int
    college_year: Optional[int] = None
    semester: Optional[int] = None
    profile_completed: bool = False
