from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, store_errors
from .model import Profile, User
from .repository import UserRepository


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        full_name=row.get("full_name"),
        is_active=bool(row.get("is_active", True)),
        created_at=row.get("created_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with store_errors("load user"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, password_hash, full_name, is_active, created_at
                FROM users
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with store_errors("load user"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, email, password_hash, full_name, is_active, created_at
                FROM users
                WHERE email=%s
                """,
                (email,),
            )
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(self, *, email: str, password_hash: str, full_name: Optional[str] = None) -> int:
        with store_errors("create account"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users(email, password_hash, full_name) VALUES(%s,%s,%s)",
                (email, password_hash, full_name),
            )
            user_id = int(cur.lastrowid)
            cur.execute("INSERT INTO profiles(user_id) VALUES(%s)", (user_id,))
            return user_id

    def get_profile(self, user_id: int) -> Optional[Profile]:
        with store_errors("load profile"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, college_year, semester, profile_completed FROM profiles WHERE user_id=%s",
                (int(user_id),),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Profile(
                user_id=int(row["user_id"]),
                college_year=row.get("college_year"),
                semester=row.get("semester"),
                profile_completed=bool(row.get("profile_completed")),
            )

    def update_profile(self, *, user_id: int, college_year: int, semester: int, profile_completed: bool) -> None:
        with store_errors("update profile"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(user_id, college_year, semester, profile_completed)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    college_year=VALUES(college_year),
                    semester=VALUES(semester),
                    profile_completed=VALUES(profile_completed)
                """,
                (int(user_id), int(college_year), int(semester), int(bool(profile_completed))),
            )
