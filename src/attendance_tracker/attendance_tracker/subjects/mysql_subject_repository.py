from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, store_errors
from .model import Subject
from .repository import SubjectRepository


def _to_subject(r: dict) -> Subject:
    return Subject(
        subject_id=int(r["subject_id"]),
        owner_id=int(r["owner_id"]),
        name=r["name"],
        created_at=r["created_at"],
    )


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, owner_id: int, name: str) -> Subject:
        with store_errors("add subject"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO subjects(owner_id, name) VALUES(%s,%s)",
                (int(owner_id), name),
            )
            subject_id = int(cur.lastrowid)
            cur.execute(
                "SELECT subject_id, owner_id, name, created_at FROM subjects WHERE subject_id=%s",
                (subject_id,),
            )
            return _to_subject(fetchone(cur))

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        with store_errors("load subject"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT subject_id, owner_id, name, created_at FROM subjects WHERE subject_id=%s",
                (int(subject_id),),
            )
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def list_for_owner(self, owner_id: int) -> Sequence[Subject]:
        with store_errors("load subjects"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT subject_id, owner_id, name, created_at
                FROM subjects
                WHERE owner_id=%s
                ORDER BY created_at DESC, subject_id DESC
                """,
                (int(owner_id),),
            )
            return [_to_subject(r) for r in fetchall(cur)]

    def delete(self, *, subject_id: int) -> bool:
        # attendance_records rows go with it (FK ON DELETE CASCADE).
        with store_errors("delete subject"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE subject_id=%s", (int(subject_id),))
            return cur.rowcount > 0
