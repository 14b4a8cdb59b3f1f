from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: what happened in one subject on one calendar date."""

    record_id: int
    subject_id: int
    record_date: date
    status: AttendanceStatus
    teacher_present: Optional[bool] = None
    attendance_taken: Optional[bool] = None
    created_at: Optional[datetime] = None
