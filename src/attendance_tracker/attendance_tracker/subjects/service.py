from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError, StoreError
from .model import Subject
from .repository import SubjectRepository

logger = logging.getLogger(__name__)


class SubjectService:
    def __init__(self, subjects: SubjectRepository):
        self._subjects = subjects

    def create(self, *, owner_id: int, name: str) -> Subject:
        name = require_non_empty(name, "Subject name")
        subject = self._subjects.create(owner_id=int(owner_id), name=name)
        logger.info("Subject %s added for user %s", subject.subject_id, owner_id)
        return subject

    def list_for_owner(self, owner_id: int) -> Sequence[Subject]:
        return self._subjects.list_for_owner(int(owner_id))

    def get(self, *, owner_id: int, subject_id: int) -> Subject:
        subject = self._subjects.get_by_id(int(subject_id))
        # Someone else's subject is reported the same way as a missing one.
        if not subject or subject.owner_id != int(owner_id):
            raise NotFoundError("Subject not found")
        return subject

    def delete(self, *, owner_id: int, subject_id: int) -> None:
        self.get(owner_id=owner_id, subject_id=subject_id)
        if not self._subjects.delete(subject_id=int(subject_id)):
            raise StoreError("Deleting subject failed")
        logger.info("Subject %s and its records deleted by user %s", subject_id, owner_id)
