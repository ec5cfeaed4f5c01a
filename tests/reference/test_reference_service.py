from __future__ import annotations

import pytest

from src.class_attendance.class_attendance.core.enums import InstitutionType
from src.class_attendance.class_attendance.core.exceptions import NotFoundError, ValidationError

FORMAL = InstitutionType.FORMAL
PESANTREN = InstitutionType.PESANTREN


def test_classes_are_listed_by_name_and_searchable(container):
    names = [c.name for c in container.class_service.list(FORMAL)]
    assert names == ["X IPA 1", "X IPS 2", "XI IPA 3"]

    found = container.class_service.list(FORMAL, search="  ipa ")
    assert [c.id for c in found] == ["C101", "C201"]


def test_classes_are_partitioned_per_institution(container):
    assert [c.id for c in container.class_service.list(PESANTREN)] == ["H101"]


def test_create_class_requires_name_and_grade(container):
    with pytest.raises(ValidationError, match="Nama wajib diisi"):
        container.class_service.create(FORMAL, name="  ", grade="10")
    with pytest.raises(ValidationError, match="Tingkat wajib diisi"):
        container.class_service.create(FORMAL, name="X IPA 2", grade=None)

    created = container.class_service.create(FORMAL, name=" X IPA 2 ", grade="10")
    assert created.name == "X IPA 2"
    assert container.class_service.get(FORMAL, created.id).grade == "10"


def test_update_class_is_partial(container):
    updated = container.class_service.update(FORMAL, "C101", {"grade": "11", "ignored": "x"})
    assert updated.name == "X IPA 1"
    assert updated.grade == "11"


def test_update_class_without_known_fields_is_rejected(container):
    with pytest.raises(ValidationError, match="Tidak ada data yang diubah"):
        container.class_service.update(FORMAL, "C101", {"foo": "bar"})


def test_missing_class_uses_institution_label(container):
    with pytest.raises(NotFoundError, match="Kelas tidak ditemukan"):
        container.class_service.get(FORMAL, "NOPE")
    with pytest.raises(NotFoundError, match="Halaqah tidak ditemukan"):
        container.class_service.delete(PESANTREN, "NOPE")


def test_delete_class_keeps_its_students(container, repos):
    container.class_service.delete(FORMAL, "C102")
    assert repos.classes.get_by_id(FORMAL, "C102") is None
    assert [s.id for s in container.student_service.list(FORMAL, class_id="C102")] == ["S006", "S007"]


def test_subject_and_dormitory_crud(container):
    subject = container.subject_service.create(FORMAL, name="Fisika")
    assert [s.name for s in container.subject_service.list(FORMAL)] == ["Fisika", "Matematika", "Sejarah Indonesia"]

    renamed = container.subject_service.update(FORMAL, subject.id, {"name": "Fisika Dasar"})
    assert renamed.name == "Fisika Dasar"

    container.subject_service.delete(FORMAL, subject.id)
    with pytest.raises(NotFoundError, match="Mata Pelajaran tidak ditemukan"):
        container.subject_service.get(FORMAL, subject.id)

    with pytest.raises(NotFoundError, match="Asrama/Kamar tidak ditemukan"):
        container.dormitory_service.update(PESANTREN, "NOPE", {"name": "Kamar"})
    with pytest.raises(ValidationError):
        container.dormitory_service.create(FORMAL, name="")


def test_student_filters(container):
    assert [s.id for s in container.student_service.list(FORMAL, class_id="C101")] == ["S001", "S002", "S003"]
    assert [s.id for s in container.student_service.list(FORMAL, dormitory="Asrama Putri 1")] == ["S003", "S006"]
    assert [s.id for s in container.student_service.list(FORMAL, search="AN")] == ["S001", "S002", "S006", "S007"]


def test_students_grouped_by_class_skip_empty_classes(container):
    groups = container.student_service.grouped_by_class(FORMAL)
    assert [g.classroom.id for g in groups] == ["C101", "C102"]
    data = groups[0].to_dict()
    assert data["name"] == "X IPA 1"
    assert [s["id"] for s in data["students"]] == ["S001", "S002", "S003"]


def test_create_student_requires_existing_class(container):
    with pytest.raises(ValidationError, match="Kelas ID tidak ditemukan"):
        container.student_service.create(FORMAL, name="Baru", class_id="C999")

    created = container.student_service.create(FORMAL, name="Baru", class_id="C201", dormitory=None)
    assert created.dormitory == ""
    assert created.to_dict()["classId"] == "C201"


def test_update_student_moves_class(container):
    updated = container.student_service.update(FORMAL, "S007", {"class_id": "C201", "dormitory": " Asrama Putra 1 "})
    assert updated.class_id == "C201"
    assert updated.dormitory == "Asrama Putra 1"

    with pytest.raises(ValidationError):
        container.student_service.update(FORMAL, "S007", {"class_id": "C999"})
    with pytest.raises(NotFoundError, match="Siswa tidak ditemukan"):
        container.student_service.update(FORMAL, "S999", {"name": "X"})


def test_delete_student(container):
    container.student_service.delete(FORMAL, "S001")
    with pytest.raises(NotFoundError):
        container.student_service.get(FORMAL, "S001")
    with pytest.raises(NotFoundError, match="Santri tidak ditemukan"):
        container.student_service.delete(PESANTREN, "S001")
