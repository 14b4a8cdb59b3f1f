"""Attendance statistics for a single subject.

Only ``present`` and ``absent`` records count toward the percentage;
holidays and cancelled classes are reported separately.
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import asdict, dataclass
from fractions import Fraction
from typing import Iterable, Optional, Union

from ..attendance.model import AttendanceRecord
from ..core.constants import DEFAULT_AVERAGE_ZONE_MIN, DEFAULT_SAFE_ZONE_MIN, DEFAULT_TARGET_THRESHOLD
from ..core.enums import AttendanceStatus, Zone
from ..core.exceptions import ValidationError

Threshold = Union[float, Fraction]


@dataclass(frozen=True)
class ZoneBands:
    """Lower bounds (whole percentages) of the safe and average bands."""

    safe_min: int = DEFAULT_SAFE_ZONE_MIN
    average_min: int = DEFAULT_AVERAGE_ZONE_MIN

    def __post_init__(self):
        if not 0 < self.average_min <= self.safe_min <= 100:
            raise ValidationError("Zone bands must satisfy 0 < average_min <= safe_min <= 100")


@dataclass(frozen=True)
class AttendanceStats:
    total: int
    present: int
    absent: int
    percentage: int
    zone: Optional[Zone]
    holiday_count: int
    no_class_count: int
    classes_needed: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["zone"] = self.zone.value if self.zone else None
        return data


def attendance_percentage(present: int, total: int) -> int:
    """100 * present / total rounded half up, 0 when nothing was counted."""

    if total <= 0:
        return 0
    # floor(100p/t + 1/2) in integers, no float rounding surprises.
    return (200 * present + total) // (2 * total)


def classify_zone(percentage: int, bands: ZoneBands = ZoneBands()) -> Optional[Zone]:
    # 0% means "nothing recorded yet" and gets no badge.
    if percentage == 0:
        return None
    if percentage >= bands.safe_min:
        return Zone.SAFE
    if percentage >= bands.average_min:
        return Zone.AVERAGE
    return Zone.DANGER


def _as_fraction(threshold: Threshold) -> Fraction:
    value = Fraction(threshold).limit_denominator(1_000_000)
    if not 0 < value < 1:
        raise ValidationError("Attendance threshold must be between 0 and 1 (exclusive)")
    return value


def classes_needed(present: int, total: int, threshold: Threshold = DEFAULT_TARGET_THRESHOLD) -> int:
    """Consecutive classes to attend so that present/total reaches ``threshold``.

    Best case only: assumes every one of those classes is attended.
    Solves (present + x) / (total + x) >= t for the smallest integer x >= 0.
    """

    target = _as_fraction(threshold)
    if total <= 0 or attendance_percentage(present, total) >= target * 100:
        return 0
    needed = math.ceil((target * total - present) / (1 - target))
    return max(0, needed)


class StatisticsEngine:
    """Pure calculator; one instance can serve any number of subjects."""

    def __init__(self, *, target_threshold: Threshold = DEFAULT_TARGET_THRESHOLD, bands: Optional[ZoneBands] = None):
        self._target = _as_fraction(target_threshold)
        self._bands = bands or ZoneBands()

    @property
    def target_threshold(self) -> Fraction:
        return self._target

    @property
    def bands(self) -> ZoneBands:
        return self._bands

    def compute(self, records: Iterable[AttendanceRecord]) -> AttendanceStats:
        counts = Counter(AttendanceStatus(r.status) for r in tuple(records))
        present = counts[AttendanceStatus.PRESENT]
        return self.from_counts(
            present=present,
            total=present + counts[AttendanceStatus.ABSENT],
            holiday_count=counts[AttendanceStatus.HOLIDAY],
            no_class_count=counts[AttendanceStatus.NO_CLASS],
        )

    def from_counts(self, *, present: int, total: int, holiday_count: int = 0, no_class_count: int = 0) -> AttendanceStats:
        present = max(0, int(present))
        total = max(present, int(total))
        percentage = attendance_percentage(present, total)
        return AttendanceStats(
            total=total,
            present=present,
            absent=total - present,
            percentage=percentage,
            zone=classify_zone(percentage, self._bands),
            holiday_count=int(holiday_count),
            no_class_count=int(no_class_count),
            classes_needed=classes_needed(present, total, self._target),
        )

