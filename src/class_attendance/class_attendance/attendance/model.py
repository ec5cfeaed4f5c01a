from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.constants import DATE_FORMAT
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One student's status for one subject session."""

    id: str
    student_id: str
    subject_id: str
    class_id: str
    status: AttendanceStatus
    date: date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "subjectId": self.subject_id,
            "classId": self.class_id,
            "status": self.status.value,
            "date": self.date.strftime(DATE_FORMAT),
        }
