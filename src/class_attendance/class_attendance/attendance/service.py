from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Mapping, Optional

from ..common.datetime_utils import now_local
from ..common.validators import parse_status
from ..core.enums import AttendanceStatus, InstitutionType
from ..core.exceptions import NotFoundError, ValidationError
from ..core.labels import labels_for
from ..reference.model import ClassRoom, Student, Subject
from ..reference.repository import ClassRepository, NamedRepository, StudentRepository
from .repository import AttendanceRepository

DEFAULT_STATUS = AttendanceStatus.HADIR


def summarize(statuses: Iterable[AttendanceStatus]) -> dict[str, int]:
    """Count statuses; every status is present in the result, zero or not."""
    counts = {s.value: 0 for s in (AttendanceStatus.HADIR, AttendanceStatus.SAKIT, AttendanceStatus.IZIN, AttendanceStatus.ALFA)}
    for status in statuses:
        counts[AttendanceStatus(status).value] += 1
    return counts


def resolve_statuses(
    students: Iterable[Student],
    submitted: Optional[Mapping[str, str]],
) -> dict[str, AttendanceStatus]:
    """Status per student of a class, `hadir` for anyone not submitted.

    Submitted ids that are not in the class are rejected.
    """
    if submitted is not None and not isinstance(submitted, Mapping):
        raise ValidationError("statuses harus berupa objek")
    submitted = dict(submitted or {})
    member_ids = [s.id for s in students]
    unknown = sorted(set(submitted) - set(member_ids))
    if unknown:
        raise ValidationError(f"Siswa tidak terdaftar di kelas ini: {', '.join(unknown)}")
    return {sid: parse_status(submitted[sid]) if sid in submitted else DEFAULT_STATUS for sid in member_ids}


@dataclass(frozen=True)
class ClassRoster:
    classroom: ClassRoom
    students: list[Student]
    subjects: list[Subject]

    def to_dict(self) -> dict:
        return {
            "class": self.classroom.to_dict(),
            "students": [s.to_dict() for s in self.students],
            "subjects": [s.to_dict() for s in self.subjects],
            "defaultStatus": DEFAULT_STATUS.value,
            "summary": summarize(DEFAULT_STATUS for _ in self.students),
        }


@dataclass(frozen=True)
class Submission:
    saved: int
    summary: dict[str, int]
    recorded_at: datetime


class AttendanceService:
    """Use case: a teacher marks every student of a class for one subject."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        classes: ClassRepository,
        students: StudentRepository,
        subjects: NamedRepository,
    ):
        self._attendance = attendance
        self._classes = classes
        self._students = students
        self._subjects = subjects

    def _class_or_404(self, institution: InstitutionType, class_id: str) -> ClassRoom:
        classroom = self._classes.get_by_id(institution, class_id)
        if not classroom:
            raise NotFoundError(f"{labels_for(institution).class_} tidak ditemukan.")
        return classroom

    def roster(self, institution: InstitutionType, class_id: str) -> ClassRoster:
        classroom = self._class_or_404(institution, class_id)
        students = sorted(self._students.list_by_class(institution, class_id), key=lambda s: s.name.lower())
        subjects = sorted(self._subjects.list_all(institution), key=lambda s: s.name.lower())
        return ClassRoster(classroom=classroom, students=students, subjects=subjects)

    def record_class_attendance(
        self,
        institution: InstitutionType,
        *,
        class_id: str,
        subject_id: Optional[str],
        statuses: Optional[Mapping[str, str]] = None,
        now: Optional[datetime] = None,
    ) -> Submission:
        labels = labels_for(institution)
        if not subject_id:
            raise ValidationError(f"Silakan pilih {labels.subject.lower()} terlebih dahulu.")

        self._class_or_404(institution, class_id)
        if not self._subjects.get_by_id(institution, subject_id):
            raise NotFoundError(f"{labels.subject} tidak ditemukan.")

        students = self._students.list_by_class(institution, class_id)
        if not students:
            raise ValidationError(f"Belum ada {labels.student.lower()} di {labels.class_.lower()} ini.")

        resolved = resolve_statuses(students, statuses)
        recorded_at = now or now_local()
        saved = self._attendance.save_batch(
            institution,
            class_id=class_id,
            subject_id=subject_id,
            statuses=resolved,
            recorded_at=recorded_at,
        )
        return Submission(saved=saved, summary=summarize(resolved.values()), recorded_at=recorded_at)
