"""Mark-attendance workflow.

The workflow asks a few yes/no questions and resolves to exactly one
attendance outcome for a calendar date:

    college_status --off--> holiday
    college_status --on---> select_date --date--> teacher_present
    teacher_present --yes--> mark_attendance
    teacher_present --no---> attendance_taken --no--> no_class
                                              --yes-> mark_attendance
    mark_attendance --present/absent--> present / absent

``transition`` is the whole decision table and has no side effects.
``AttendanceFlow`` wraps it for one user session and performs the single
upsert when a terminal answer is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, Optional, Union

from ..common.datetime_utils import format_iso_date, parse_iso_date, today_local
from ..core.enums import AttendanceStatus, FlowAnswer, FlowStep
from ..core.exceptions import FlowBusyError, InvalidTransitionError, StoreError, ValidationError
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

Answer = Union[FlowAnswer, date, None]


@dataclass(frozen=True)
class FlowState:
    """Selections collected so far (never persisted to the record store)."""

    step: FlowStep = FlowStep.COLLEGE_STATUS
    selected_date: Optional[date] = None
    teacher_present: Optional[bool] = None
    attendance_taken: Optional[bool] = None

    def to_dict(self) -> dict:
        return {
            "step": self.step.value,
            "selected_date": format_iso_date(self.selected_date) if self.selected_date else None,
            "teacher_present": self.teacher_present,
            "attendance_taken": self.attendance_taken,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FlowState":
        try:
            step = FlowStep(data.get("step", FlowStep.COLLEGE_STATUS.value))
        except ValueError:
            raise ValidationError("Unknown attendance step")
        raw_date = data.get("selected_date")
        return cls(
            step=step,
            selected_date=parse_iso_date(raw_date) if raw_date else None,
            teacher_present=data.get("teacher_present"),
            attendance_taken=data.get("attendance_taken"),
        )


@dataclass(frozen=True)
class AttendanceOutcome:
    """Terminal result of the workflow: the one record to write."""

    record_date: date
    status: AttendanceStatus
    teacher_present: Optional[bool] = None
    attendance_taken: Optional[bool] = None


def initial_state(today: date) -> FlowState:
    # The date picker starts on today, which is also the date a holiday is recorded for.
    return FlowState(selected_date=today)


def _outcome(state: FlowState, status: AttendanceStatus, **flags) -> AttendanceOutcome:
    if state.selected_date is None:
        raise ValidationError("No date selected")
    return AttendanceOutcome(record_date=state.selected_date, status=status, **flags)


_TRANSITIONS: dict[tuple[FlowStep, FlowAnswer], Callable[[FlowState], Union[FlowState, AttendanceOutcome]]] = {
    (FlowStep.COLLEGE_STATUS, FlowAnswer.OFF): lambda s: _outcome(s, AttendanceStatus.HOLIDAY),
    (FlowStep.COLLEGE_STATUS, FlowAnswer.ON): lambda s: replace(s, step=FlowStep.SELECT_DATE),
    (FlowStep.TEACHER_PRESENT, FlowAnswer.YES): lambda s: replace(
        s, step=FlowStep.MARK_ATTENDANCE, teacher_present=True, attendance_taken=None
    ),
    (FlowStep.TEACHER_PRESENT, FlowAnswer.NO): lambda s: replace(
        s, step=FlowStep.ATTENDANCE_TAKEN, teacher_present=False
    ),
    (FlowStep.ATTENDANCE_TAKEN, FlowAnswer.YES): lambda s: replace(
        s, step=FlowStep.MARK_ATTENDANCE, teacher_present=False, attendance_taken=True
    ),
    (FlowStep.ATTENDANCE_TAKEN, FlowAnswer.NO): lambda s: _outcome(
        s, AttendanceStatus.NO_CLASS, teacher_present=False, attendance_taken=False
    ),
    (FlowStep.MARK_ATTENDANCE, FlowAnswer.PRESENT): lambda s: _outcome(
        s, AttendanceStatus.PRESENT, teacher_present=s.teacher_present, attendance_taken=s.attendance_taken
    ),
    (FlowStep.MARK_ATTENDANCE, FlowAnswer.ABSENT): lambda s: _outcome(
        s, AttendanceStatus.ABSENT, teacher_present=s.teacher_present, attendance_taken=s.attendance_taken
    ),
}


def _select_date(state: FlowState, answer: Answer, today: date) -> FlowState:
    if answer is None:
        raise ValidationError("No date selected")
    if not isinstance(answer, date):
        raise InvalidTransitionError("Pick a date to continue")
    if isinstance(answer, datetime):
        answer = answer.date()
    if answer > today:
        raise ValidationError("Attendance cannot be marked for a future date")
    return replace(state, step=FlowStep.TEACHER_PRESENT, selected_date=answer)


def transition(state: FlowState, answer: Answer, *, today: date) -> Union[FlowState, AttendanceOutcome]:
    """Apply one answer: returns the next state, or the outcome to persist.

    Raises ValidationError / InvalidTransitionError without changing anything.
    """

    if state.step == FlowStep.SELECT_DATE:
        return _select_date(state, answer, today)

    if not isinstance(answer, FlowAnswer):
        raise InvalidTransitionError(f"Step {state.step.value} expects a button answer")

    handler = _TRANSITIONS.get((state.step, answer))
    if handler is None:
        raise InvalidTransitionError(f"Answer {answer.value!r} is not valid at step {state.step.value}")
    return handler(state)


def accepted_answers(step: FlowStep) -> list[str]:
    if step == FlowStep.SELECT_DATE:
        return ["date"]
    return [a.value for (s, a) in _TRANSITIONS if s == step]


class AttendanceFlow:
    """One run of the workflow for one subject."""

    def __init__(
        self,
        *,
        subject_id: int,
        records: AttendanceRepository,
        today: Callable[[], date] = today_local,
        state: Optional[FlowState] = None,
    ):
        self._subject_id = int(subject_id)
        self._records = records
        self._today = today
        self._state = state or initial_state(today())
        self._record: Optional[AttendanceRecord] = None
        self._cancelled = False
        self._writing = False

    @property
    def subject_id(self) -> int:
        return self._subject_id

    @property
    def state(self) -> FlowState:
        return self._state

    @property
    def step(self) -> FlowStep:
        return self._state.step

    @property
    def record(self) -> Optional[AttendanceRecord]:
        return self._record

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    @property
    def is_finished(self) -> bool:
        return self._cancelled or self._record is not None

    def answer(self, value: Answer) -> Optional[AttendanceRecord]:
        """Feed one answer. Returns the saved record once a terminal answer is given."""

        if self._writing:
            raise FlowBusyError("Attendance is still being saved")
        if self._record is not None:
            raise InvalidTransitionError("Attendance already saved")
        if self._cancelled:
            raise InvalidTransitionError("Attendance entry was cancelled")

        result = transition(self._state, value, today=self._today())
        if isinstance(result, FlowState):
            self._state = result
            return None
        return self._write(result)

    def cancel(self) -> None:
        if self._writing:
            raise FlowBusyError("Attendance is still being saved")
        if self._record is not None:
            raise InvalidTransitionError("Attendance already saved")
        self._cancelled = True
        self._state = initial_state(self._today())

    def _write(self, outcome: AttendanceOutcome) -> AttendanceRecord:
        # State is left untouched on failure so the same answer can be retried.
        self._writing = True
        try:
            record = self._records.upsert(
                subject_id=self._subject_id,
                record_date=outcome.record_date,
                status=outcome.status,
                teacher_present=outcome.teacher_present,
                attendance_taken=outcome.attendance_taken,
            )
        except StoreError as e:
            logger.warning(
                "Saving %s for subject %s on %s failed: %s",
                outcome.status.value,
                self._subject_id,
                outcome.record_date,
                e,
            )
            raise
        finally:
            self._writing = False

        self._record = record
        logger.info("Marked subject %s as %s on %s", self._subject_id, outcome.status.value, outcome.record_date)
        return record
