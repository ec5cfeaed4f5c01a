from __future__ import annotations

from dataclasses import dataclass

from .attendance.firestore_attendance_repository import FirestoreAttendanceRepository
from .attendance.service import AttendanceService
from .institutions.service import InstitutionService
from .recap.service import RecapService
from .reference.firestore_reference_repository import (
    FirestoreClassRepository,
    FirestoreDormitoryRepository,
    FirestoreStudentRepository,
    FirestoreSubjectRepository,
)
from .reference.service import ClassService, NamedEntityService, StudentService
from .roll_call.firestore_roll_call_repository import FirestoreRollCallRepository
from .roll_call.service import RollCallService


@dataclass(frozen=True)
class Container:
    classes_repo: object
    students_repo: object
    subjects_repo: object
    dormitories_repo: object
    attendance_repo: object
    roll_call_repo: object

    institution_service: InstitutionService
    class_service: ClassService
    student_service: StudentService
    subject_service: NamedEntityService
    dormitory_service: NamedEntityService
    attendance_service: AttendanceService
    roll_call_service: RollCallService
    recap_service: RecapService


def wire(
    *,
    classes_repo,
    students_repo,
    subjects_repo,
    dormitories_repo,
    attendance_repo,
    roll_call_repo,
    default_institution: str = "formal",
) -> Container:
    """Build services on top of any repositories satisfying the repository protocols."""
    return Container(
        classes_repo=classes_repo,
        students_repo=students_repo,
        subjects_repo=subjects_repo,
        dormitories_repo=dormitories_repo,
        attendance_repo=attendance_repo,
        roll_call_repo=roll_call_repo,
        institution_service=InstitutionService(default_institution=default_institution),
        class_service=ClassService(classes_repo),
        student_service=StudentService(students_repo, classes_repo),
        subject_service=NamedEntityService(subjects_repo, label_attr="subject"),
        dormitory_service=NamedEntityService(dormitories_repo, label_attr="dormitory"),
        attendance_service=AttendanceService(attendance_repo, classes_repo, students_repo, subjects_repo),
        roll_call_service=RollCallService(roll_call_repo, students_repo, classes_repo),
        recap_service=RecapService(attendance_repo, roll_call_repo, students_repo, classes_repo),
    )


def build_container(*, client, default_institution: str = "formal") -> Container:
    return wire(
        classes_repo=FirestoreClassRepository(client),
        students_repo=FirestoreStudentRepository(client),
        subjects_repo=FirestoreSubjectRepository(client),
        dormitories_repo=FirestoreDormitoryRepository(client),
        attendance_repo=FirestoreAttendanceRepository(client),
        roll_call_repo=FirestoreRollCallRepository(client),
        default_institution=default_institution,
    )
