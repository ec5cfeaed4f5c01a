from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from src.class_attendance.class_attendance.attendance.service import resolve_statuses, summarize
from src.class_attendance.class_attendance.core.enums import AttendanceStatus, InstitutionType
from src.class_attendance.class_attendance.core.exceptions import NotFoundError, ValidationError
from src.class_attendance.class_attendance.reference.model import Student

FORMAL = InstitutionType.FORMAL
NOW = datetime(2024, 5, 15, 8, 30, tzinfo=ZoneInfo("Asia/Jakarta"))


def test_summarize_counts_every_status():
    assert summarize([]) == {"hadir": 0, "sakit": 0, "izin": 0, "alfa": 0}
    assert summarize(["hadir", AttendanceStatus.ALFA, "hadir"]) == {"hadir": 2, "sakit": 0, "izin": 0, "alfa": 1}


def test_resolve_statuses_defaults_to_hadir():
    students = [Student(id="S1", name="A", class_id="C"), Student(id="S2", name="B", class_id="C")]
    assert resolve_statuses(students, {"S2": "Sakit"}) == {"S1": AttendanceStatus.HADIR, "S2": AttendanceStatus.SAKIT}
    assert resolve_statuses(students, None) == {"S1": AttendanceStatus.HADIR, "S2": AttendanceStatus.HADIR}


def test_resolve_statuses_rejects_outsiders_and_unknown_values():
    students = [Student(id="S1", name="A", class_id="C")]
    with pytest.raises(ValidationError, match="S9"):
        resolve_statuses(students, {"S9": "hadir"})
    with pytest.raises(ValidationError, match="Status kehadiran tidak dikenal"):
        resolve_statuses(students, {"S1": "telat"})


@pytest.mark.parametrize("submitted", [["S1"], "S1", 5])
def test_resolve_statuses_requires_a_mapping(submitted):
    students = [Student(id="S1", name="A", class_id="C")]
    with pytest.raises(ValidationError, match="statuses harus berupa objek"):
        resolve_statuses(students, submitted)


def test_roster_lists_students_and_subjects_with_default_status(container):
    roster = container.attendance_service.roster(FORMAL, "C101").to_dict()
    assert roster["class"]["name"] == "X IPA 1"
    assert [s["name"] for s in roster["students"]] == ["Ahmad Dahlan", "Budi Santoso", "Citra Lestari"]
    assert [s["name"] for s in roster["subjects"]] == ["Matematika", "Sejarah Indonesia"]
    assert roster["defaultStatus"] == "hadir"
    assert roster["summary"] == {"hadir": 3, "sakit": 0, "izin": 0, "alfa": 0}


def test_record_class_attendance_writes_one_record_per_student(container, repos):
    result = container.attendance_service.record_class_attendance(
        FORMAL,
        class_id="C101",
        subject_id="SUB01",
        statuses={"S002": "sakit", "S003": "alfa"},
        now=NOW,
    )

    assert result.saved == 3
    assert result.summary == {"hadir": 1, "sakit": 1, "izin": 0, "alfa": 1}
    assert repos.attendance.batches == [3]

    saved = repos.attendance.list_range(FORMAL, start=NOW, end=NOW)
    assert {(r.student_id, r.status.value) for r in saved} == {("S001", "hadir"), ("S002", "sakit"), ("S003", "alfa")}
    assert {r.date for r in saved} == {date(2024, 5, 15)}
    assert {(r.class_id, r.subject_id) for r in saved} == {("C101", "SUB01")}


def test_resubmission_duplicates_records(container, repos):
    for _ in range(2):
        container.attendance_service.record_class_attendance(FORMAL, class_id="C102", subject_id="SUB03", now=NOW)
    assert len(repos.attendance.list_range(FORMAL, start=NOW, end=NOW)) == 4


def test_subject_must_be_chosen(container):
    with pytest.raises(ValidationError, match="Silakan pilih mata pelajaran terlebih dahulu."):
        container.attendance_service.record_class_attendance(FORMAL, class_id="C101", subject_id=None)
    with pytest.raises(ValidationError, match="Silakan pilih kitab terlebih dahulu."):
        container.attendance_service.record_class_attendance(InstitutionType.PESANTREN, class_id="H101", subject_id="")


def test_class_and_subject_must_exist(container):
    with pytest.raises(NotFoundError, match="Kelas tidak ditemukan"):
        container.attendance_service.record_class_attendance(FORMAL, class_id="C999", subject_id="SUB01")
    with pytest.raises(NotFoundError, match="Mata Pelajaran tidak ditemukan"):
        container.attendance_service.record_class_attendance(FORMAL, class_id="C101", subject_id="SUB99")


def test_class_without_students_is_rejected(container, repos):
    with pytest.raises(ValidationError, match="Belum ada siswa"):
        container.attendance_service.record_class_attendance(FORMAL, class_id="C201", subject_id="SUB01")
    assert repos.attendance.batches == []


def test_student_from_another_class_is_rejected(container, repos):
    with pytest.raises(ValidationError, match="S006"):
        container.attendance_service.record_class_attendance(
            FORMAL, class_id="C101", subject_id="SUB01", statuses={"S006": "hadir"}
        )
    assert repos.attendance.batches == []
