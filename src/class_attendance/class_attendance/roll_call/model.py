from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.constants import DATE_FORMAT
from ..core.enums import RollCallStatus


@dataclass(frozen=True)
class RollCallEntry:
    """A status to be written for one student (no id/date yet)."""

    student_id: str
    status: RollCallStatus
    notes: str = ""


@dataclass(frozen=True)
class RollCallRecord:
    id: str
    student_id: str
    status: RollCallStatus
    date: date
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "studentId": self.student_id,
            "status": self.status.value,
            "date": self.date.strftime(DATE_FORMAT),
            "notes": self.notes,
        }
