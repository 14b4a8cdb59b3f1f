from __future__ import annotations

from datetime import date

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus, FlowAnswer, FlowStep
from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, StoreError


def test_flow_for_foreign_subject_is_not_found(container, subjects_repo):
    subject = subjects_repo.create(owner_id=2, name="Physics")

    with pytest.raises(NotFoundError):
        container.attendance_service.start_flow(owner_id=1, subject_id=subject.subject_id)
    with pytest.raises(NotFoundError):
        container.attendance_service.start_flow(owner_id=1, subject_id=999)


def test_started_flow_defaults_to_today(container, subjects_repo, today):
    subject = subjects_repo.create(owner_id=1, name="Physics")

    flow = container.attendance_service.start_flow(owner_id=1, subject_id=subject.subject_id)

    assert flow.step == FlowStep.COLLEGE_STATUS
    assert flow.state.selected_date == today


def test_subject_detail_lists_newest_first_with_stats(container, subjects_repo, attendance_repo):
    subject = subjects_repo.create(owner_id=1, name="Physics")
    attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT)
    attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 5), status=AttendanceStatus.ABSENT)
    attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 1), status=AttendanceStatus.HOLIDAY)

    detail = container.attendance_service.subject_detail(owner_id=1, subject_id=subject.subject_id)

    assert [r.record_date for r in detail.records] == [date(2026, 2, 5), date(2026, 2, 2), date(2026, 2, 1)]
    assert detail.stats.total == 2
    assert detail.stats.percentage == 50
    assert detail.stats.holiday_count == 1


def test_delete_record(container, subjects_repo, attendance_repo):
    subject = subjects_repo.create(owner_id=1, name="Physics")
    rec = attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT)

    container.attendance_service.delete_record(owner_id=1, record_id=rec.record_id)

    assert attendance_repo.all() == []
    with pytest.raises(NotFoundError):
        container.attendance_service.delete_record(owner_id=1, record_id=rec.record_id)


def test_delete_foreign_record_is_not_found(container, subjects_repo, attendance_repo):
    subject = subjects_repo.create(owner_id=2, name="Physics")
    rec = attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT)

    with pytest.raises(NotFoundError):
        container.attendance_service.delete_record(owner_id=1, record_id=rec.record_id)
    assert len(attendance_repo.all()) == 1


def test_delete_failure_is_a_store_error(container, subjects_repo, attendance_repo):
    subject = subjects_repo.create(owner_id=1, name="Physics")
    rec = attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT)
    attendance_repo.fail_deletes = True

    with pytest.raises(StoreError):
        container.attendance_service.delete_record(owner_id=1, record_id=rec.record_id)


def test_flow_through_service_writes_one_record(container, subjects_repo, attendance_repo, today):
    subject = subjects_repo.create(owner_id=1, name="Physics")
    flow = container.attendance_service.start_flow(owner_id=1, subject_id=subject.subject_id)

    record = flow.answer(FlowAnswer.OFF)

    assert record.status == AttendanceStatus.HOLIDAY
    assert record.record_date == today
    assert attendance_repo.upsert_calls == 1


def test_history_ui_labels(container):
    from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord

    rows = container.attendance_service.history_ui(
        [
            AttendanceRecord(record_id=1, subject_id=1, record_date=date(2026, 2, 3), status=AttendanceStatus.PRESENT),
            AttendanceRecord(
                record_id=2,
                subject_id=1,
                record_date=date(2026, 2, 4),
                status=AttendanceStatus.NO_CLASS,
                teacher_present=False,
                attendance_taken=False,
            ),
        ]
    )

    assert rows[0]["label"] == "Present"
    assert rows[0]["css_class"] == "text-safe"
    assert rows[0]["date"] == "2026-02-03"
    assert rows[0]["date_label"] == "Tue, Feb 03, 2026"
    assert rows[1]["label"] == "No Class"
    assert rows[1]["css_class"] == "text-muted-foreground"
    assert rows[1]["teacher_present"] is False
