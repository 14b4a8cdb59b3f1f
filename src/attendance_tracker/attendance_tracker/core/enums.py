from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Outcome stored for one subject on one calendar date."""

    PRESENT = "present"
    ABSENT = "absent"
    HOLIDAY = "holiday"
    NO_CLASS = "no_class"


# Only these two count toward the attendance percentage.
COUNTABLE_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.ABSENT})


class Zone(str, Enum):
    """Risk band shown next to a subject's percentage."""

    SAFE = "safe"
    AVERAGE = "average"
    DANGER = "danger"


class FlowStep(str, Enum):
    """Steps of the mark-attendance workflow."""

    COLLEGE_STATUS = "college_status"
    SELECT_DATE = "select_date"
    TEACHER_PRESENT = "teacher_present"
    ATTENDANCE_TAKEN = "attendance_taken"
    MARK_ATTENDANCE = "mark_attendance"


class FlowAnswer(str, Enum):
    """Button answers accepted by the workflow (dates are passed as ``date``)."""

    ON = "on"
    OFF = "off"
    YES = "yes"
    NO = "no"
    PRESENT = "present"
    ABSENT = "absent"
