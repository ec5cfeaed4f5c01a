from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Optional

from ..attendance.service import resolve_statuses, summarize
from ..common.datetime_utils import now_local
from ..common.validators import optional_text, parse_status
from ..core.enums import InstitutionType, RollCallStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..core.labels import labels_for
from ..reference.model import Student
from ..reference.repository import ClassRepository, StudentRepository
from ..reference.service import ClassGroup
from .model import RollCallEntry
from .repository import RollCallRepository

logger = logging.getLogger(__name__)

PERMIT_STATUSES = (RollCallStatus.IZIN, RollCallStatus.SAKIT)


@dataclass(frozen=True)
class RollCallGroup(ClassGroup):
    def to_dict(self) -> dict:
        data = super().to_dict()
        data["summary"] = summarize(RollCallStatus.HADIR for _ in self.students)
        return data


class RollCallService:
    """Use cases for assistant staff: morning roll call and leave/sick permits."""

    def __init__(self, roll_call: RollCallRepository, students: StudentRepository, classes: ClassRepository):
        self._roll_call = roll_call
        self._students = students
        self._classes = classes

    def class_overview(self, institution: InstitutionType) -> list[RollCallGroup]:
        students = sorted(self._students.list_all(institution), key=lambda s: s.name.lower())
        groups = []
        for c in sorted(self._classes.list_all(institution), key=lambda c: c.name.lower()):
            members = [s for s in students if s.class_id == c.id]
            if members:
                groups.append(RollCallGroup(classroom=c, students=members))
        return groups

    def submit_roll_call(
        self,
        institution: InstitutionType,
        *,
        class_id: str,
        statuses: Optional[Mapping[str, str]] = None,
        now: Optional[datetime] = None,
    ) -> dict[str, int]:
        if not self._classes.get_by_id(institution, class_id):
            raise NotFoundError(f"{labels_for(institution).class_} tidak ditemukan.")
        students = self._students.list_by_class(institution, class_id)
        if not students:
            raise ValidationError(f"Belum ada {labels_for(institution).student.lower()} di kelas ini.")

        resolved = resolve_statuses(students, statuses)
        entries = [RollCallEntry(student_id=sid, status=status) for sid, status in resolved.items()]
        self._roll_call.save_batch(institution, entries, recorded_at=now or now_local())
        return summarize(resolved.values())

    def list_dormitories_in_use(self, institution: InstitutionType) -> list[str]:
        """Distinct non-empty dormitory values of students, first-seen order."""
        seen: list[str] = []
        for s in self._students.list_all(institution):
            if s.dormitory and s.dormitory not in seen:
                seen.append(s.dormitory)
        return seen

    def students_in_dormitory(self, institution: InstitutionType, dormitory: str) -> list[Student]:
        if not dormitory:
            return []
        rows = [s for s in self._students.list_all(institution) if s.dormitory == dormitory]
        return sorted(rows, key=lambda s: s.name.lower())

    def record_permit(
        self,
        institution: InstitutionType,
        *,
        dormitory: Optional[str],
        student_id: Optional[str],
        notes: Optional[str] = None,
        status: str = RollCallStatus.IZIN.value,
        now: Optional[datetime] = None,
    ) -> RollCallEntry:
        if not dormitory or not student_id:
            raise ValidationError("Silakan pilih asrama dan siswa/santri.")

        permit_status = parse_status(status)
        if permit_status not in PERMIT_STATUSES:
            raise ValidationError("Status izin hanya boleh 'izin' atau 'sakit'.")

        student = self._students.get_by_id(institution, student_id)
        if not student:
            raise NotFoundError(f"{labels_for(institution).student} tidak ditemukan.")
        if student.dormitory != dormitory:
            raise ValidationError(f"{student.name} tidak terdaftar di asrama {dormitory}.")

        entry = RollCallEntry(student_id=student.id, status=permit_status, notes=optional_text(notes))
        self._roll_call.save_batch(institution, [entry], recorded_at=now or now_local())
        logger.info(
            "Permit %s recorded for student %s",
            permit_status.value,
            student.id,
            extra={"institution": institution.value},
        )
        return entry
