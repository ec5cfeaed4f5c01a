from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import optional_text, require_non_empty
from ..core.enums import InstitutionType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.labels import labels_for
from .model import ClassRoom, Student
from .repository import ClassRepository, NamedRepository, StudentRepository

logger = logging.getLogger(__name__)


def _only(changes: Mapping[str, Any], allowed: Sequence[str]) -> dict:
    picked = {k: changes[k] for k in allowed if k in changes}
    if not picked:
        raise ValidationError("Tidak ada data yang diubah")
    return picked


class ClassService:
    def __init__(self, classes: ClassRepository):
        self._classes = classes

    def list(self, institution: InstitutionType, *, search: Optional[str] = None) -> list[ClassRoom]:
        rows = sorted(self._classes.list_all(institution), key=lambda c: c.name.lower())
        if search:
            needle = search.strip().lower()
            rows = [c for c in rows if needle in c.name.lower()]
        return rows

    def get(self, institution: InstitutionType, class_id: str) -> ClassRoom:
        found = self._classes.get_by_id(institution, class_id)
        if not found:
            raise NotFoundError(f"{labels_for(institution).class_} tidak ditemukan")
        return found

    def create(self, institution: InstitutionType, *, name: str, grade: str) -> ClassRoom:
        name = require_non_empty(name, "Nama")
        grade = require_non_empty(grade, "Tingkat")
        class_id = self._classes.create(institution, name=name, grade=grade)
        logger.info("Class %s created", class_id, extra={"institution": institution.value})
        return ClassRoom(id=class_id, name=name, grade=grade)

    def update(self, institution: InstitutionType, class_id: str, changes: Mapping[str, Any]) -> ClassRoom:
        values = _only(changes, ("name", "grade"))
        for field, label in (("name", "Nama"), ("grade", "Tingkat")):
            if field in values:
                values[field] = require_non_empty(values[field], label)
        if not self._classes.update(institution, class_id, values):
            raise NotFoundError(f"{labels_for(institution).class_} tidak ditemukan")
        return self.get(institution, class_id)

    def delete(self, institution: InstitutionType, class_id: str) -> None:
        # Students of the class are left in place.
        if not self._classes.delete(institution, class_id):
            raise NotFoundError(f"{labels_for(institution).class_} tidak ditemukan")
        logger.info("Class %s deleted", class_id, extra={"institution": institution.value})


class NamedEntityService:
    """Create/update/delete for documents that only carry a name (subjects, dormitories)."""

    def __init__(self, repo: NamedRepository, *, label_attr: str):
        self._repo = repo
        self._label_attr = label_attr

    def _not_found(self, institution: InstitutionType) -> NotFoundError:
        return NotFoundError(f"{getattr(labels_for(institution), self._label_attr)} tidak ditemukan")

    def list(self, institution: InstitutionType):
        return sorted(self._repo.list_all(institution), key=lambda x: x.name.lower())

    def get(self, institution: InstitutionType, doc_id: str):
        found = self._repo.get_by_id(institution, doc_id)
        if not found:
            raise self._not_found(institution)
        return found

    def create(self, institution: InstitutionType, *, name: str):
        name = require_non_empty(name, "Nama")
        doc_id = self._repo.create(institution, name=name)
        return self.get(institution, doc_id)

    def update(self, institution: InstitutionType, doc_id: str, changes: Mapping[str, Any]):
        values = _only(changes, ("name",))
        values["name"] = require_non_empty(values["name"], "Nama")
        if not self._repo.update(institution, doc_id, values):
            raise self._not_found(institution)
        return self.get(institution, doc_id)

    def delete(self, institution: InstitutionType, doc_id: str) -> None:
        if not self._repo.delete(institution, doc_id):
            raise self._not_found(institution)


@dataclass(frozen=True)
class ClassGroup:
    classroom: ClassRoom
    students: list[Student]

    def to_dict(self) -> dict:
        return {**self.classroom.to_dict(), "students": [s.to_dict() for s in self.students]}


class StudentService:
    def __init__(self, students: StudentRepository, classes: ClassRepository):
        self._students = students
        self._classes = classes

    def list(
        self,
        institution: InstitutionType,
        *,
        class_id: Optional[str] = None,
        dormitory: Optional[str] = None,
        search: Optional[str] = None,
    ) -> list[Student]:
        if class_id:
            rows = list(self._students.list_by_class(institution, class_id))
        else:
            rows = list(self._students.list_all(institution))
        if dormitory:
            rows = [s for s in rows if s.dormitory == dormitory]
        if search:
            needle = search.strip().lower()
            rows = [s for s in rows if needle in s.name.lower()]
        rows.sort(key=lambda s: s.name.lower())
        return rows

    def get(self, institution: InstitutionType, student_id: str) -> Student:
        found = self._students.get_by_id(institution, student_id)
        if not found:
            raise NotFoundError(f"{labels_for(institution).student} tidak ditemukan")
        return found

    def grouped_by_class(self, institution: InstitutionType) -> list[ClassGroup]:
        """Classes (by name) with their students; classes without students are skipped."""
        students = self.list(institution)
        groups = []
        for c in sorted(self._classes.list_all(institution), key=lambda c: c.name.lower()):
            members = [s for s in students if s.class_id == c.id]
            if members:
                groups.append(ClassGroup(classroom=c, students=members))
        return groups

    def _require_class(self, institution: InstitutionType, class_id: str) -> None:
        if not self._classes.get_by_id(institution, class_id):
            raise ValidationError(f"{labels_for(institution).class_} ID tidak ditemukan: '{class_id}'")

    def create(self, institution: InstitutionType, *, name: str, class_id: str, dormitory: Optional[str] = None) -> Student:
        name = require_non_empty(name, "Nama")
        class_id = require_non_empty(class_id, labels_for(institution).class_)
        self._require_class(institution, class_id)
        dorm = optional_text(dormitory)
        student_id = self._students.create(institution, name=name, class_id=class_id, dormitory=dorm)
        logger.info("Student %s created in class %s", student_id, class_id, extra={"institution": institution.value})
        return Student(id=student_id, name=name, class_id=class_id, dormitory=dorm)

    def update(self, institution: InstitutionType, student_id: str, changes: Mapping[str, Any]) -> Student:
        values = _only(changes, ("name", "class_id", "dormitory"))
        if "name" in values:
            values["name"] = require_non_empty(values["name"], "Nama")
        if "class_id" in values:
            values["class_id"] = require_non_empty(values["class_id"], labels_for(institution).class_)
            self._require_class(institution, values["class_id"])
        if "dormitory" in values:
            values["dormitory"] = optional_text(values["dormitory"])
        if not self._students.update(institution, student_id, values):
            raise NotFoundError(f"{labels_for(institution).student} tidak ditemukan")
        return self.get(institution, student_id)

    def delete(self, institution: InstitutionType, student_id: str) -> None:
        if not self._students.delete(institution, student_id):
            raise NotFoundError(f"{labels_for(institution).student} tidak ditemukan")

    def import_rows(self, institution: InstitutionType, rows: Sequence[Mapping[str, Any]]) -> list[Student]:
        """Validate every row first, then write them all in one batch.

        Row numbers in messages are spreadsheet rows (the header is row 1).
        """
        labels = labels_for(institution)
        known_classes = {c.id for c in self._classes.list_all(institution)}

        to_insert: list[dict] = []
        for index, row in enumerate(rows):
            line = index + 2
            name = optional_text(row.get("name"))
            class_id = optional_text(row.get("classId"))
            if not name or not class_id:
                raise ValidationError(f"Baris {line}: Kolom 'name' dan 'classId' wajib diisi.")
            if class_id not in known_classes:
                raise ValidationError(f"Baris {line}: {labels.class_} ID tidak ditemukan '{class_id}'.")
            to_insert.append({"name": name, "class_id": class_id, "dormitory": optional_text(row.get("dormitory"))})

        if not to_insert:
            return []

        new_ids = self._students.create_many(institution, to_insert)
        logger.info("Imported %d students", len(new_ids), extra={"institution": institution.value})
        return [
            Student(id=new_id, name=r["name"], class_id=r["class_id"], dormitory=r["dormitory"])
            for new_id, r in zip(new_ids, to_insert)
        ]
