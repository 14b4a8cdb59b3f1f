from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictWriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_optional_bool, db_cursor, fetchall, fetchone, store_errors
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "record_id, subject_id, record_date, status, teacher_present, attendance_taken, created_at"


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        subject_id=int(r["subject_id"]),
        record_date=r["record_date"],
        status=AttendanceStatus(r["status"]),
        teacher_present=as_optional_bool(r.get("teacher_present")),
        attendance_taken=as_optional_bool(r.get("attendance_taken")),
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        subject_id: int,
        record_date: date,
        status: AttendanceStatus,
        teacher_present: Optional[bool] = None,
        attendance_taken: Optional[bool] = None,
    ) -> AttendanceRecord:
        with store_errors("save attendance", error_cls=ConflictWriteError), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(subject_id, record_date, status, teacher_present, attendance_taken)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status),
                    teacher_present=VALUES(teacher_present),
                    attendance_taken=VALUES(attendance_taken)
                """,
                (int(subject_id), record_date, AttendanceStatus(status).value, teacher_present, attendance_taken),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE subject_id=%s AND record_date=%s",
                (int(subject_id), record_date),
            )
            return _to_record(fetchone(cur))

    def get(self, *, record_id: int) -> Optional[AttendanceRecord]:
        with store_errors("load attendance record"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def delete(self, *, record_id: int) -> bool:
        with store_errors("delete attendance record"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE record_id=%s", (int(record_id),))
            return cur.rowcount > 0

    def list_for_subject(
        self,
        subject_id: int,
        *,
        statuses: Optional[Iterable[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        clauses = ["subject_id=%s"]
        params: list[object] = [int(subject_id)]

        if statuses is not None:
            values = sorted({AttendanceStatus(s).value for s in statuses})
            if not values:
                return []
            clauses.append(f"status IN ({', '.join(['%s'] * len(values))})")
            params.extend(values)

        where = " AND ".join(clauses)

        with store_errors("load attendance records"), db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE {where}", tuple(params))
            return [_to_record(r) for r in fetchall(cur)]
