from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceRecord
from src.attendance_tracker.attendance_tracker.container import wire_container
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceStatus
from src.attendance_tracker.attendance_tracker.core.exceptions import ConflictWriteError
from src.attendance_tracker.attendance_tracker.subjects.model import Subject
from src.attendance_tracker.attendance_tracker.users.model import Profile, User

FIXED_TODAY = date(2026, 2, 10)


class InMemoryAttendance:
    """Record store keyed like the real table: one row per (subject_id, record_date)."""

    def __init__(self):
        self._by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0
        self.upsert_calls = 0
        self.fail_upserts = 0
        self.fail_deletes = False
        self.list_calls: list[tuple[int, Optional[frozenset]]] = []

    def upsert(self, *, subject_id, record_date, status, teacher_present=None, attendance_taken=None):
        self.upsert_calls += 1
        if self.fail_upserts:
            self.fail_upserts -= 1
            raise ConflictWriteError("Could not save attendance")

        existing = self._by_key.get((subject_id, record_date))
        if existing:
            record_id, created_at = existing.record_id, existing.created_at
        else:
            self._id += 1
            record_id, created_at = self._id, datetime(2026, 1, 1) + timedelta(minutes=self._id)

        rec = AttendanceRecord(
            record_id=record_id,
            subject_id=subject_id,
            record_date=record_date,
            status=AttendanceStatus(status),
            teacher_present=teacher_present,
            attendance_taken=attendance_taken,
            created_at=created_at,
        )
        self._by_key[(subject_id, record_date)] = rec
        return rec

    def get(self, *, record_id):
        for rec in self._by_key.values():
            if rec.record_id == int(record_id):
                return rec
        return None

    def delete(self, *, record_id):
        if self.fail_deletes:
            return False
        for key, rec in list(self._by_key.items()):
            if rec.record_id == int(record_id):
                del self._by_key[key]
                return True
        return False

    def delete_for_subject(self, subject_id):
        for key in [k for k in self._by_key if k[0] == subject_id]:
            del self._by_key[key]

    def list_for_subject(self, subject_id, *, statuses=None):
        wanted = frozenset(AttendanceStatus(s) for s in statuses) if statuses is not None else None
        self.list_calls.append((subject_id, wanted))
        return [
            r
            for (sid, _), r in self._by_key.items()
            if sid == subject_id and (wanted is None or r.status in wanted)
        ]

    def all(self):
        return list(self._by_key.values())


class InMemorySubjects:
    def __init__(self, attendance: Optional[InMemoryAttendance] = None):
        self._subjects: dict[int, Subject] = {}
        self._id = 0
        self._attendance = attendance

    def create(self, *, owner_id, name):
        self._id += 1
        subject = Subject(
            subject_id=self._id,
            owner_id=int(owner_id),
            name=name,
            created_at=datetime(2026, 1, 1) + timedelta(hours=self._id),
        )
        self._subjects[self._id] = subject
        return subject

    def get_by_id(self, subject_id):
        return self._subjects.get(int(subject_id))

    def list_for_owner(self, owner_id):
        items = [s for s in self._subjects.values() if s.owner_id == int(owner_id)]
        items.sort(key=lambda s: (s.created_at, s.subject_id), reverse=True)
        return items

    def delete(self, *, subject_id):
        if self._subjects.pop(int(subject_id), None) is None:
            return False
        if self._attendance is not None:
            self._attendance.delete_for_subject(int(subject_id))
        return True


class InMemoryUsers:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._profiles: dict[int, Profile] = {}
        self._id = 0

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_email(self, email):
        return next((u for u in self._users.values() if u.email == email), None)

    def create_user(self, *, email, password_hash, full_name=None):
        self._id += 1
        self._users[self._id] = User(user_id=self._id, email=email, password_hash=password_hash, full_name=full_name)
        self._profiles[self._id] = Profile(user_id=self._id)
        return self._id

    def get_profile(self, user_id):
        return self._profiles.get(int(user_id))

    def update_profile(self, *, user_id, college_year, semester, profile_completed):
        self._profiles[int(user_id)] = Profile(
            user_id=int(user_id),
            college_year=college_year,
            semester=semester,
            profile_completed=profile_completed,
        )


@pytest.fixture
def today() -> date:
    return FIXED_TODAY


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def subjects_repo(attendance_repo) -> InMemorySubjects:
    return InMemorySubjects(attendance_repo)


@pytest.fixture
def users_repo() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def container(users_repo, subjects_repo, attendance_repo, today):
    return wire_container(
        users_repo=users_repo,
        subjects_repo=subjects_repo,
        attendance_repo=attendance_repo,
        today=lambda: today,
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.attendance_tracker.attendance_tracker.main import create_app

    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(client):
    client.post("/signup", json={"email": "student@example.com", "password": "secret123"})
    resp = client.post("/login", json={"email": "student@example.com", "password": "secret123"})
    assert resp.status_code == 200
    return client
