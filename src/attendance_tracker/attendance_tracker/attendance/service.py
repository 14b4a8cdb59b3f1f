from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import format_iso_date, today_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, StoreError
from ..stats.engine import AttendanceStats, StatisticsEngine
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from .flow import AttendanceFlow, FlowState
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectDetail:
    subject: Subject
    records: list[AttendanceRecord]
    stats: AttendanceStats


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        subjects: SubjectRepository,
        *,
        engine: Optional[StatisticsEngine] = None,
        today: Callable[[], date] = today_local,
    ):
        self._attendance = attendance
        self._subjects = subjects
        self._engine = engine or StatisticsEngine()
        self._today = today

    def _require_subject(self, owner_id: int, subject_id: int) -> Subject:
        subject = self._subjects.get_by_id(int(subject_id))
        if not subject or subject.owner_id != int(owner_id):
            raise NotFoundError("Subject not found")
        return subject

    def start_flow(self, *, owner_id: int, subject_id: int) -> AttendanceFlow:
        subject = self._require_subject(owner_id, subject_id)
        return AttendanceFlow(subject_id=subject.subject_id, records=self._attendance, today=self._today)

    def resume_flow(self, *, owner_id: int, subject_id: int, state: FlowState) -> AttendanceFlow:
        """Rebuild a flow from state kept between requests."""

        subject = self._require_subject(owner_id, subject_id)
        return AttendanceFlow(subject_id=subject.subject_id, records=self._attendance, today=self._today, state=state)

    def subject_detail(self, *, owner_id: int, subject_id: int) -> SubjectDetail:
        subject = self._require_subject(owner_id, subject_id)
        records = sorted(
            self._attendance.list_for_subject(subject.subject_id),
            key=lambda r: r.record_date,
            reverse=True,
        )
        return SubjectDetail(subject=subject, records=records, stats=self._engine.compute(records))

    def delete_record(self, *, owner_id: int, record_id: int) -> None:
        record = self._attendance.get(record_id=int(record_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        self._require_subject(owner_id, record.subject_id)

        if not self._attendance.delete(record_id=record.record_id):
            raise StoreError("Deleting attendance record failed")
        logger.info("Attendance record %s deleted by user %s", record_id, owner_id)

    def history_ui(self, records: Iterable[AttendanceRecord]) -> list[dict]:
        return [self._to_ui(r) for r in records]

    def _to_ui(self, r: AttendanceRecord) -> dict:
        status = AttendanceStatus(r.status)
        label = {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.ABSENT: "Absent",
            AttendanceStatus.HOLIDAY: "Holiday",
            AttendanceStatus.NO_CLASS: "No Class",
        }.get(status, status.value)

        icon = {
            AttendanceStatus.PRESENT: "✅",
            AttendanceStatus.ABSENT: "❌",
            AttendanceStatus.HOLIDAY: "🏖️",
            AttendanceStatus.NO_CLASS: "📭",
        }.get(status, "•")

        css = {
            AttendanceStatus.PRESENT: "text-safe",
            AttendanceStatus.ABSENT: "text-danger",
        }.get(status, "text-muted-foreground")

        return {
            "record_id": r.record_id,
            "date": format_iso_date(r.record_date),
            "date_label": r.record_date.strftime("%a, %b %d, %Y"),
            "status": status.value,
            "label": label,
            "icon": icon,
            "css_class": css,
            "teacher_present": r.teacher_present,
            "attendance_taken": r.attendance_taken,
        }
