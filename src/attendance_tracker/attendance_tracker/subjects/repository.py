from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    """Repository interface for subjects.

    Note: deleting a subject must also delete its attendance records.
    """

    def create(self, *, owner_id: int, name: str) -> Subject:
        raise NotImplementedError

    def get_by_id(self, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def list_for_owner(self, owner_id: int) -> Sequence[Subject]:
        """Newest first."""

        raise NotImplementedError

    def delete(self, *, subject_id: int) -> bool:
        raise NotImplementedError
