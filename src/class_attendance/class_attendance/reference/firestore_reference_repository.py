from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.constants import (
    CLASSES_COLLECTION,
    DORMITORIES_COLLECTION,
    STUDENTS_COLLECTION,
    SUBJECTS_COLLECTION,
)
from ..core.enums import InstitutionType
from ..database.firestore_base import FirestoreCollectionRepository
from .model import ClassRoom, Dormitory, Student, Subject

# API/domain field name -> Firestore field name
_STUDENT_FIELDS = {"name": "name", "class_id": "classId", "dormitory": "dormitory"}


class FirestoreClassRepository(FirestoreCollectionRepository):
    collection_name = CLASSES_COLLECTION

    @staticmethod
    def _map(row: Dict[str, Any]) -> ClassRoom:
        return ClassRoom(id=str(row["id"]), name=str(row.get("name") or ""), grade=str(row.get("grade") or ""))

    def list_all(self, institution: InstitutionType) -> Sequence[ClassRoom]:
        return [self._map(r) for r in self._list(institution)]

    def get_by_id(self, institution: InstitutionType, class_id: str) -> Optional[ClassRoom]:
        row = self._get(institution, class_id)
        return self._map(row) if row else None

    def create(self, institution: InstitutionType, *, name: str, grade: str) -> str:
        return self._add(institution, {"name": name, "grade": grade})

    def update(self, institution: InstitutionType, class_id: str, changes: Mapping[str, Any]) -> bool:
        return self._update(institution, class_id, dict(changes))

    def delete(self, institution: InstitutionType, class_id: str) -> bool:
        return self._delete(institution, class_id)


class FirestoreStudentRepository(FirestoreCollectionRepository):
    collection_name = STUDENTS_COLLECTION

    @staticmethod
    def _map(row: Dict[str, Any]) -> Student:
        return Student(
            id=str(row["id"]),
            name=str(row.get("name") or ""),
            class_id=str(row.get("classId") or ""),
            dormitory=str(row.get("dormitory") or ""),
        )

    @staticmethod
    def _to_document(values: Mapping[str, Any]) -> Dict[str, Any]:
        return {_STUDENT_FIELDS[k]: v for k, v in values.items() if k in _STUDENT_FIELDS}

    def list_all(self, institution: InstitutionType) -> Sequence[Student]:
        return [self._map(r) for r in self._list(institution)]

    def list_by_class(self, institution: InstitutionType, class_id: str) -> Sequence[Student]:
        return [self._map(r) for r in self._list(institution, classId=class_id)]

    def get_by_id(self, institution: InstitutionType, student_id: str) -> Optional[Student]:
        row = self._get(institution, student_id)
        return self._map(row) if row else None

    def create(self, institution: InstitutionType, *, name: str, class_id: str, dormitory: str = "") -> str:
        return self._add(institution, {"name": name, "classId": class_id, "dormitory": dormitory})

    def create_many(self, institution: InstitutionType, rows: Sequence[Mapping[str, str]]) -> Sequence[str]:
        return self._add_many(institution, [self._to_document(r) for r in rows])

    def update(self, institution: InstitutionType, student_id: str, changes: Mapping[str, Any]) -> bool:
        return self._update(institution, student_id, self._to_document(changes))

    def delete(self, institution: InstitutionType, student_id: str) -> bool:
        return self._delete(institution, student_id)


class _FirestoreNamedRepository(FirestoreCollectionRepository):
    entity = None

    def _map(self, row: Dict[str, Any]):
        return self.entity(id=str(row["id"]), name=str(row.get("name") or ""))

    def list_all(self, institution: InstitutionType):
        return [self._map(r) for r in self._list(institution)]

    def get_by_id(self, institution: InstitutionType, doc_id: str):
        row = self._get(institution, doc_id)
        return self._map(row) if row else None

    def create(self, institution: InstitutionType, *, name: str) -> str:
        return self._add(institution, {"name": name})

    def update(self, institution: InstitutionType, doc_id: str, changes: Mapping[str, Any]) -> bool:
        return self._update(institution, doc_id, {"name": changes["name"]} if "name" in changes else {})

    def delete(self, institution: InstitutionType, doc_id: str) -> bool:
        return self._delete(institution, doc_id)


class FirestoreSubjectRepository(_FirestoreNamedRepository):
    collection_name = SUBJECTS_COLLECTION
    entity = Subject


class FirestoreDormitoryRepository(_FirestoreNamedRepository):
    collection_name = DORMITORIES_COLLECTION
    entity = Dormitory
