from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..core.enums import COUNTABLE_STATUSES
from ..subjects.model import Subject
from ..subjects.repository import SubjectRepository
from .engine import AttendanceStats, StatisticsEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubjectCard:
    subject_id: int
    name: str
    stats: AttendanceStats

    @property
    def summary(self) -> str:
        if self.stats.total == 0:
            return "No attendance recorded"
        return f"{self.stats.percentage}% • {self.stats.present}/{self.stats.total} classes"

    def to_dict(self) -> dict:
        data = self.stats.to_dict()
        # Cards only load present/absent rows, so these would always read 0.
        data.pop("holiday_count")
        data.pop("no_class_count")
        return {"subject_id": self.subject_id, "name": self.name, "summary": self.summary, **data}


@dataclass(frozen=True)
class DashboardData:
    cards: list[SubjectCard]
    stats: dict[int, AttendanceStats]


def aggregate(
    subjects: Iterable[Subject],
    records_by_subject: Mapping[int, Iterable[AttendanceRecord]],
    engine: StatisticsEngine,
) -> dict[int, AttendanceStats]:
    """Independent per-subject statistics; a subject with no records gets the zero state."""

    return {s.subject_id: engine.compute(records_by_subject.get(s.subject_id, ())) for s in subjects}


class DashboardService:
    def __init__(
        self,
        subjects: SubjectRepository,
        attendance: AttendanceRepository,
        *,
        engine: Optional[StatisticsEngine] = None,
    ):
        self._subjects = subjects
        self._attendance = attendance
        self._engine = engine or StatisticsEngine()

    def build(self, *, owner_id: int) -> DashboardData:
        subjects: Sequence[Subject] = self._subjects.list_for_owner(int(owner_id))

        # One read per subject; holiday/no_class rows are not needed for the cards.
        records_by_subject = {
            s.subject_id: self._attendance.list_for_subject(s.subject_id, statuses=COUNTABLE_STATUSES)
            for s in subjects
        }
        stats = aggregate(subjects, records_by_subject, self._engine)
        logger.debug("Dashboard for user %s: %d subjects", owner_id, len(stats))

        cards = [SubjectCard(subject_id=s.subject_id, name=s.name, stats=stats[s.subject_id]) for s in subjects]
        return DashboardData(cards=cards, stats=stats)
