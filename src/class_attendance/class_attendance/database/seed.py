"""Demo data for both institutions.

Documents are written with fixed ids so re-running the seed overwrites
instead of duplicating. An institution that already has classes is skipped.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import (
    ATTENDANCE_COLLECTION,
    CLASSES_COLLECTION,
    DORMITORIES_COLLECTION,
    STUDENTS_COLLECTION,
    SUBJECTS_COLLECTION,
)
from ..core.enums import InstitutionType
from .firestore_base import institution_collection, write_in_batches

logger = logging.getLogger(__name__)

DEMO_DATA = {
    InstitutionType.FORMAL: {
        CLASSES_COLLECTION: [
            {"id": "C101", "name": "X IPA 1", "grade": "10"},
            {"id": "C102", "name": "X IPS 2", "grade": "10"},
            {"id": "C201", "name": "XI IPA 3", "grade": "11"},
            {"id": "C202", "name": "XI IPS 1", "grade": "11"},
            {"id": "C301", "name": "XII IPA 2", "grade": "12"},
        ],
        STUDENTS_COLLECTION: [
            {"id": "S001", "name": "Ahmad Dahlan", "classId": "C101", "dormitory": "Asrama Putra 1"},
            {"id": "S002", "name": "Budi Santoso", "classId": "C101", "dormitory": "Asrama Putra 1"},
            {"id": "S003", "name": "Citra Lestari", "classId": "C101", "dormitory": "Asrama Putri 1"},
            {"id": "S004", "name": "Dewi Anggraini", "classId": "C101", "dormitory": "Asrama Putri 1"},
            {"id": "S005", "name": "Eko Prasetyo", "classId": "C101", "dormitory": ""},
            {"id": "S006", "name": "Fitriani", "classId": "C102", "dormitory": "Asrama Putri 1"},
            {"id": "S007", "name": "Gunawan", "classId": "C102", "dormitory": ""},
        ],
        SUBJECTS_COLLECTION: [
            {"id": "SUB01", "name": "Matematika"},
            {"id": "SUB02", "name": "Fisika"},
            {"id": "SUB03", "name": "Sejarah Indonesia"},
            {"id": "SUB04", "name": "Bahasa Inggris"},
        ],
        DORMITORIES_COLLECTION: [
            {"id": "D01", "name": "Asrama Putra 1"},
            {"id": "D02", "name": "Asrama Putri 1"},
        ],
        # (studentId, classId, subjectId, status, days ago)
        ATTENDANCE_COLLECTION: [
            ("S001", "C101", "SUB01", "hadir", 0),
            ("S002", "C101", "SUB01", "sakit", 0),
            ("S003", "C101", "SUB01", "hadir", 0),
            ("S001", "C101", "SUB04", "hadir", 1),
            ("S006", "C102", "SUB03", "izin", 1),
            ("S007", "C102", "SUB03", "alfa", 1),
        ],
    },
    InstitutionType.PESANTREN: {
        CLASSES_COLLECTION: [
            {"id": "H101", "name": "Halaqah Al-Fatihah", "grade": "Ula"},
            {"id": "H102", "name": "Halaqah Al-Ikhlas", "grade": "Ula"},
            {"id": "H201", "name": "Halaqah An-Nas", "grade": "Wustha"},
        ],
        STUDENTS_COLLECTION: [
            {"id": "P001", "name": "Abdullah bin Mas'ud", "classId": "H101", "dormitory": "Kamar Abu Bakar"},
            {"id": "P002", "name": "Zaid bin Tsabit", "classId": "H101", "dormitory": "Kamar Abu Bakar"},
            {"id": "P003", "name": "Fatimah az-Zahra", "classId": "H102", "dormitory": "Kamar Khadijah"},
            {"id": "P004", "name": "Umar bin Khattab", "classId": "H201", "dormitory": "Kamar Utsman"},
            {"id": "P005", "name": "Aisyah binti Abu Bakar", "classId": "H201", "dormitory": "Kamar Khadijah"},
        ],
        SUBJECTS_COLLECTION: [
            {"id": "KIT01", "name": "Aqidatul Awam"},
            {"id": "KIT02", "name": "Safinatun Najah"},
            {"id": "KIT03", "name": "Tijan ad-Darori"},
            {"id": "KIT04", "name": "Fathul Qorib"},
        ],
        DORMITORIES_COLLECTION: [
            {"id": "K01", "name": "Kamar Abu Bakar"},
            {"id": "K02", "name": "Kamar Utsman"},
            {"id": "K03", "name": "Kamar Khadijah"},
        ],
        ATTENDANCE_COLLECTION: [
            ("P001", "H101", "KIT01", "hadir", 0),
            ("P002", "H101", "KIT01", "izin", 0),
            ("P004", "H201", "KIT04", "hadir", 1),
            ("P005", "H201", "KIT04", "sakit", 1),
        ],
    },
}


def _writes(client, institution: InstitutionType, now: datetime):
    data = DEMO_DATA[institution]
    for name in (CLASSES_COLLECTION, STUDENTS_COLLECTION, SUBJECTS_COLLECTION, DORMITORIES_COLLECTION):
        collection = institution_collection(client, institution, name)
        for row in data[name]:
            body = {k: v for k, v in row.items() if k != "id"}
            yield collection.document(row["id"]), body

    attendance = institution_collection(client, institution, ATTENDANCE_COLLECTION)
    for i, (student_id, class_id, subject_id, status, days_ago) in enumerate(data[ATTENDANCE_COLLECTION], start=1):
        yield attendance.document(f"seed-{i:03d}"), {
            "studentId": student_id,
            "classId": class_id,
            "subjectId": subject_id,
            "status": status,
            "date": now - timedelta(days=days_ago),
        }


def has_data(client, institution: InstitutionType) -> bool:
    query = institution_collection(client, institution, CLASSES_COLLECTION).limit(1)
    return any(True for _ in query.stream())


def seed_demo_data(client, *, now: Optional[datetime] = None, force: bool = False) -> dict[str, int]:
    """Seed both institutions; returns documents written per institution."""
    now = now or now_local()
    written: dict[str, int] = {}
    for institution in InstitutionType:
        if not force and has_data(client, institution):
            logger.info("Skipping seed for %s: data already present", institution.value)
            written[institution.value] = 0
            continue
        written[institution.value] = write_in_batches(client, _writes(client, institution, now))
        logger.info("Seeded %d documents", written[institution.value], extra={"institution": institution.value})
    return written
