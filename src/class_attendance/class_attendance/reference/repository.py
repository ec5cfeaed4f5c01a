from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import InstitutionType
from .model import ClassRoom, Student


class ClassRepository(Protocol):
    def list_all(self, institution: InstitutionType) -> Sequence[ClassRoom]:
        raise NotImplementedError

    def get_by_id(self, institution: InstitutionType, class_id: str) -> Optional[ClassRoom]:
        raise NotImplementedError

    def create(self, institution: InstitutionType, *, name: str, grade: str) -> str:
        raise NotImplementedError

    def update(self, institution: InstitutionType, class_id: str, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, institution: InstitutionType, class_id: str) -> bool:
        raise NotImplementedError


class StudentRepository(Protocol):
    def list_all(self, institution: InstitutionType) -> Sequence[Student]:
        raise NotImplementedError

    def list_by_class(self, institution: InstitutionType, class_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def get_by_id(self, institution: InstitutionType, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def create(self, institution: InstitutionType, *, name: str, class_id: str, dormitory: str = "") -> str:
        raise NotImplementedError

    def create_many(self, institution: InstitutionType, rows: Sequence[Mapping[str, str]]) -> Sequence[str]:
        """Insert all rows in one batched write; returns the new ids in input order."""

        raise NotImplementedError

    def update(self, institution: InstitutionType, student_id: str, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, institution: InstitutionType, student_id: str) -> bool:
        raise NotImplementedError


class NamedRepository(Protocol):
    """Subjects and dormitories: documents with only a name."""

    def list_all(self, institution: InstitutionType) -> Sequence[Any]:
        raise NotImplementedError

    def get_by_id(self, institution: InstitutionType, doc_id: str) -> Optional[Any]:
        raise NotImplementedError

    def create(self, institution: InstitutionType, *, name: str) -> str:
        raise NotImplementedError

    def update(self, institution: InstitutionType, doc_id: str, changes: Mapping[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, institution: InstitutionType, doc_id: str) -> bool:
        raise NotImplementedError
