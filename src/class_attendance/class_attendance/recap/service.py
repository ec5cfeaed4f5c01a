from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import end_of_day, start_of_day
from ..core.constants import DATE_FORMAT, UNKNOWN_CLASS_NAME, UNKNOWN_STUDENT_NAME
from ..core.enums import AttendanceStatus, InstitutionType, RollCallStatus
from ..core.exceptions import NotFoundError
from ..core.labels import labels_for
from ..reference.model import ClassRoom, Student
from ..reference.repository import ClassRepository, StudentRepository
from ..roll_call.model import RollCallRecord
from ..roll_call.repository import RollCallRepository

CHART_COLORS = {
    AttendanceStatus.HADIR: "#22c55e",
    AttendanceStatus.SAKIT: "#f59e0b",
    AttendanceStatus.IZIN: "#3b82f6",
    AttendanceStatus.ALFA: "#ef4444",
}


def attendance_percentage(hadir: int, alfa: int) -> float:
    """Share of present among sessions that count (sick and leave are excused).

    0.0 when nothing counts.
    """
    counted = hadir + alfa
    if counted <= 0:
        return 0.0
    return hadir / counted * 100


@dataclass
class StudentStats:
    student: Student
    hadir: int = 0
    sakit: int = 0
    izin: int = 0
    alfa: int = 0

    @property
    def total(self) -> int:
        return self.hadir + self.sakit + self.izin + self.alfa

    @property
    def percentage(self) -> float:
        return attendance_percentage(self.hadir, self.alfa)

    def add(self, status: AttendanceStatus) -> None:
        name = AttendanceStatus(status).value
        setattr(self, name, getattr(self, name) + 1)

    def to_dict(self) -> dict:
        return {
            "student": self.student.to_dict(),
            "hadir": self.hadir,
            "sakit": self.sakit,
            "izin": self.izin,
            "alfa": self.alfa,
            "total": self.total,
            "percentage": round(self.percentage, 1),
        }


@dataclass(frozen=True)
class SubjectRecap:
    classroom: ClassRoom
    start: date
    end: date
    rows: list[StudentStats]
    overall_percentage: float

    @property
    def totals(self) -> dict[str, int]:
        out = {"hadir": 0, "sakit": 0, "izin": 0, "alfa": 0, "total": 0}
        for r in self.rows:
            out["hadir"] += r.hadir
            out["sakit"] += r.sakit
            out["izin"] += r.izin
            out["alfa"] += r.alfa
            out["total"] += r.total
        return out

    def bar_chart(self) -> list[dict]:
        return [
            {
                # first name only
                "name": r.student.name.split(" ")[0],
                "Hadir": r.hadir,
                "Sakit": r.sakit,
                "Izin": r.izin,
                "Alfa": r.alfa,
            }
            for r in self.rows
        ]

    def pie_chart(self) -> list[dict]:
        totals = self.totals
        return [
            {"name": status.value.capitalize(), "value": totals[status.value], "color": color}
            for status, color in CHART_COLORS.items()
            if totals[status.value] > 0
        ]

    def to_dict(self) -> dict:
        return {
            "class": self.classroom.to_dict(),
            "start": self.start.strftime(DATE_FORMAT),
            "end": self.end.strftime(DATE_FORMAT),
            "rows": [r.to_dict() for r in self.rows],
            "totals": self.totals,
            "overallPercentage": round(self.overall_percentage, 1),
            "barChart": self.bar_chart(),
            "pieChart": self.pie_chart(),
        }


@dataclass(frozen=True)
class DetailedRollCall:
    record: RollCallRecord
    student_name: str
    class_name: str

    def to_dict(self) -> dict:
        return {**self.record.to_dict(), "studentName": self.student_name, "className": self.class_name}


@dataclass(frozen=True)
class RollCallRecap:
    start: date
    end: date
    records: list[DetailedRollCall]
    total_students: int
    absent: list[DetailedRollCall] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "absent", [r for r in self.records if r.record.status == RollCallStatus.ALFA])

    @property
    def total_hadir(self) -> int:
        return sum(1 for r in self.records if r.record.status == RollCallStatus.HADIR)

    @property
    def total_alfa(self) -> int:
        return len(self.absent)

    @property
    def percentage(self) -> float:
        """Recorded present over (students x distinct recorded days)."""
        days = len({r.record.date for r in self.records}) or 1
        potential = self.total_students * days
        if potential <= 0:
            return 0.0
        return self.total_hadir / potential * 100

    def to_dict(self) -> dict:
        return {
            "start": self.start.strftime(DATE_FORMAT),
            "end": self.end.strftime(DATE_FORMAT),
            "totalHadir": self.total_hadir,
            "totalAlfa": self.total_alfa,
            "totalStudents": self.total_students,
            "attendancePercentage": round(self.percentage, 1),
            "absent": [r.to_dict() for r in self.absent],
        }


@dataclass(frozen=True)
class SickLeaveRecap:
    start: date
    end: date
    sick: list[DetailedRollCall]
    leave: list[DetailedRollCall]

    def to_dict(self) -> dict:
        return {
            "start": self.start.strftime(DATE_FORMAT),
            "end": self.end.strftime(DATE_FORMAT),
            "sakit": [r.to_dict() for r in self.sick],
            "izin": [r.to_dict() for r in self.leave],
        }


class RecapService:
    """Aggregates records fetched for a date range into recap tables."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        roll_call: RollCallRepository,
        students: StudentRepository,
        classes: ClassRepository,
    ):
        self._attendance = attendance
        self._roll_call = roll_call
        self._students = students
        self._classes = classes

    def overall_percentage(self, institution: InstitutionType, *, start: date, end: date) -> float:
        records = self._attendance.list_range(institution, start=start_of_day(start), end=end_of_day(end))
        hadir = sum(1 for r in records if r.status == AttendanceStatus.HADIR)
        alfa = sum(1 for r in records if r.status == AttendanceStatus.ALFA)
        return attendance_percentage(hadir, alfa)

    def subject_recap(self, institution: InstitutionType, *, class_id: str, start: date, end: date) -> SubjectRecap:
        classroom = self._classes.get_by_id(institution, class_id)
        if not classroom:
            raise NotFoundError(f"{labels_for(institution).class_} tidak ditemukan.")

        students = sorted(self._students.list_by_class(institution, class_id), key=lambda s: s.name.lower())
        records = self._attendance.list_range(
            institution, start=start_of_day(start), end=end_of_day(end), class_id=class_id
        )

        stats = {s.id: StudentStats(student=s) for s in students}
        for r in records:
            # records of students who left the class are ignored
            if r.student_id in stats:
                stats[r.student_id].add(r.status)

        return SubjectRecap(
            classroom=classroom,
            start=start,
            end=end,
            rows=list(stats.values()),
            overall_percentage=self.overall_percentage(institution, start=start, end=end),
        )

    def _detailed_roll_call(self, institution: InstitutionType, *, start: date, end: date) -> tuple[list[DetailedRollCall], Sequence[Student]]:
        students = self._students.list_all(institution)
        by_id = {s.id: s for s in students}
        class_names = {c.id: c.name for c in self._classes.list_all(institution)}
        records = self._roll_call.list_range(institution, start=start_of_day(start), end=end_of_day(end))

        detailed = []
        for r in sorted(records, key=lambda x: x.date):
            student = by_id.get(r.student_id)
            detailed.append(
                DetailedRollCall(
                    record=r,
                    student_name=student.name if student else UNKNOWN_STUDENT_NAME,
                    class_name=class_names.get(student.class_id, UNKNOWN_CLASS_NAME) if student else UNKNOWN_CLASS_NAME,
                )
            )
        return detailed, students

    def roll_call_recap(self, institution: InstitutionType, *, start: date, end: date) -> RollCallRecap:
        detailed, students = self._detailed_roll_call(institution, start=start, end=end)
        return RollCallRecap(start=start, end=end, records=detailed, total_students=len(students))

    def sick_leave_recap(self, institution: InstitutionType, *, start: date, end: date) -> SickLeaveRecap:
        detailed, _ = self._detailed_roll_call(institution, start=start, end=end)
        return SickLeaveRecap(
            start=start,
            end=end,
            sick=[r for r in detailed if r.record.status == RollCallStatus.SAKIT],
            leave=[r for r in detailed if r.record.status == RollCallStatus.IZIN],
        )
