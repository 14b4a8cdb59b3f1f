from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Subject:
    """Domain entity: a course the student tracks attendance for."""

    subject_id: int
    owner_id: int
    name: str
    created_at: datetime
