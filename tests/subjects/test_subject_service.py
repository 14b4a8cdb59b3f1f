from __future__ import annotations

from datetime import date

import pytest

from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, ValidationError


def test_create_trims_name(container):
    subject = container.subject_service.create(owner_id=1, name="  Mathematics  ")

    assert subject.name == "Mathematics"
    assert subject.owner_id == 1


@pytest.mark.parametrize("name", ["", "   ", None])
def test_blank_name_is_rejected(container, name):
    with pytest.raises(ValidationError):
        container.subject_service.create(owner_id=1, name=name)


def test_list_is_newest_first_and_per_owner(container):
    container.subject_service.create(owner_id=1, name="Mathematics")
    container.subject_service.create(owner_id=2, name="Chemistry")
    container.subject_service.create(owner_id=1, name="Physics")

    names = [s.name for s in container.subject_service.list_for_owner(1)]

    assert names == ["Physics", "Mathematics"]


def test_get_foreign_subject_is_not_found(container):
    subject = container.subject_service.create(owner_id=2, name="Chemistry")

    with pytest.raises(NotFoundError):
        container.subject_service.get(owner_id=1, subject_id=subject.subject_id)


def test_delete_removes_its_records(container, attendance_repo):
    subject = container.subject_service.create(owner_id=1, name="Mathematics")
    other = container.subject_service.create(owner_id=1, name="Physics")
    attendance_repo.upsert(subject_id=subject.subject_id, record_date=date(2026, 2, 2), status=AttendanceStatus.PRESENT)
    attendance_repo.upsert(subject_id=other.subject_id, record_date=date(2026, 2, 2), status=AttendanceStatus.ABSENT)

    container.subject_service.delete(owner_id=1, subject_id=subject.subject_id)

    assert [s.name for s in container.subject_service.list_for_owner(1)] == ["Physics"]
    assert [r.subject_id for r in attendance_repo.all()] == [other.subject_id]


def test_delete_missing_subject_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.subject_service.delete(owner_id=1, subject_id=404)
