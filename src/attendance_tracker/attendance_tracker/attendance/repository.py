from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def upsert(
        self,
        *,
        subject_id: int,
        record_date: date,
        status: AttendanceStatus,
        teacher_present: Optional[bool] = None,
        attendance_taken: Optional[bool] = None,
    ) -> AttendanceRecord:
        """Create or overwrite the record for (subject_id, record_date).

        Raises ConflictWriteError when the write fails.
        """

        raise NotImplementedError

    def get(self, *, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def delete(self, *, record_id: int) -> bool:
        raise NotImplementedError

    def list_for_subject(
        self,
        subject_id: int,
        *,
        statuses: Optional[Iterable[AttendanceStatus]] = None,
    ) -> Sequence[AttendanceRecord]:
        """No ordering guarantee; ``statuses`` restricts the rows returned."""

        raise NotImplementedError
