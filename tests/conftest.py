from __future__ import annotations

import itertools
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest
from google.api_core.exceptions import NotFound

from src.class_attendance.class_attendance.attendance.model import AttendanceRecord
from src.class_attendance.class_attendance.common.datetime_utils import to_local_date
from src.class_attendance.class_attendance.container import wire
from src.class_attendance.class_attendance.core.enums import AttendanceStatus, InstitutionType, RollCallStatus
from src.class_attendance.class_attendance.reference.model import ClassRoom, Dormitory, Student, Subject
from src.class_attendance.class_attendance.roll_call.model import RollCallRecord

JAKARTA = ZoneInfo("Asia/Jakarta")
FORMAL = InstitutionType.FORMAL
PESANTREN = InstitutionType.PESANTREN


def at(year, month, day, hour=9, minute=0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=JAKARTA)


# --- In-memory repositories (service tests) ---


class _Partitioned:
    """Rows kept per institution, ids handed out from a counter."""

    prefix = "X"

    def __init__(self):
        self._rows: dict[InstitutionType, dict[str, object]] = {}
        self._ids = itertools.count(1)

    def _bucket(self, institution) -> dict:
        return self._rows.setdefault(InstitutionType(institution), {})

    def _next_id(self) -> str:
        return f"{self.prefix}{next(self._ids):03d}"

    def list_all(self, institution):
        return list(self._bucket(institution).values())

    def get_by_id(self, institution, doc_id) -> Optional[object]:
        return self._bucket(institution).get(doc_id)

    def delete(self, institution, doc_id) -> bool:
        return self._bucket(institution).pop(doc_id, None) is not None

    def put(self, institution, row):
        self._bucket(institution)[row.id] = row
        return row


class InMemoryClasses(_Partitioned):
    prefix = "C"

    def create(self, institution, *, name, grade):
        return self.put(institution, ClassRoom(id=self._next_id(), name=name, grade=grade)).id

    def update(self, institution, class_id, changes) -> bool:
        row = self.get_by_id(institution, class_id)
        if not row:
            return False
        self.put(institution, ClassRoom(id=row.id, name=changes.get("name", row.name), grade=changes.get("grade", row.grade)))
        return True


class InMemoryStudents(_Partitioned):
    prefix = "S"

    def __init__(self):
        super().__init__()
        self.batches: list[int] = []

    def list_by_class(self, institution, class_id):
        return [s for s in self.list_all(institution) if s.class_id == class_id]

    def create(self, institution, *, name, class_id, dormitory=""):
        return self.put(institution, Student(id=self._next_id(), name=name, class_id=class_id, dormitory=dormitory)).id

    def create_many(self, institution, rows):
        self.batches.append(len(rows))
        return [self.create(institution, **r) for r in rows]

    def update(self, institution, student_id, changes) -> bool:
        row = self.get_by_id(institution, student_id)
        if not row:
            return False
        self.put(
            institution,
            Student(
                id=row.id,
                name=changes.get("name", row.name),
                class_id=changes.get("class_id", row.class_id),
                dormitory=changes.get("dormitory", row.dormitory),
            ),
        )
        return True


class InMemoryNamed(_Partitioned):
    def __init__(self, entity, prefix):
        super().__init__()
        self.entity = entity
        self.prefix = prefix

    def create(self, institution, *, name):
        return self.put(institution, self.entity(id=self._next_id(), name=name)).id

    def update(self, institution, doc_id, changes) -> bool:
        if not self.get_by_id(institution, doc_id):
            return False
        self.put(institution, self.entity(id=doc_id, name=changes["name"]))
        return True


class InMemoryAttendance:
    def __init__(self):
        self._rows: list[tuple[InstitutionType, datetime, AttendanceRecord]] = []
        self._ids = itertools.count(1)
        self.batches: list[int] = []

    def add(self, institution, *, student_id, class_id, subject_id, status, when: datetime) -> None:
        record = AttendanceRecord(
            id=f"A{next(self._ids):04d}",
            student_id=student_id,
            subject_id=subject_id,
            class_id=class_id,
            status=AttendanceStatus(status),
            date=to_local_date(when),
        )
        self._rows.append((InstitutionType(institution), when, record))

    def save_batch(self, institution, *, class_id, subject_id, statuses, recorded_at) -> int:
        for student_id, status in statuses.items():
            self.add(institution, student_id=student_id, class_id=class_id, subject_id=subject_id, status=status, when=recorded_at)
        self.batches.append(len(statuses))
        return len(statuses)

    def list_range(self, institution, *, start, end, class_id=None):
        return [
            r
            for inst, when, r in self._rows
            if inst == institution and start <= when <= end and (class_id is None or r.class_id == class_id)
        ]


class InMemoryRollCall:
    def __init__(self):
        self._rows: list[tuple[InstitutionType, datetime, RollCallRecord]] = []
        self._ids = itertools.count(1)
        self.batches: list[int] = []

    def add(self, institution, *, student_id, status, when: datetime, notes: str = "") -> None:
        record = RollCallRecord(
            id=f"R{next(self._ids):04d}",
            student_id=student_id,
            status=RollCallStatus(status),
            date=to_local_date(when),
            notes=notes,
        )
        self._rows.append((InstitutionType(institution), when, record))

    def save_batch(self, institution, entries, *, recorded_at) -> int:
        for e in entries:
            self.add(institution, student_id=e.student_id, status=e.status, when=recorded_at, notes=e.notes)
        self.batches.append(len(entries))
        return len(entries)

    def list_range(self, institution, *, start, end):
        return [r for inst, when, r in self._rows if inst == institution and start <= when <= end]

    def saved(self, institution):
        return [r for inst, _, r in self._rows if inst == institution]


class Repos:
    def __init__(self):
        self.classes = InMemoryClasses()
        self.students = InMemoryStudents()
        self.subjects = InMemoryNamed(Subject, "SUB")
        self.dormitories = InMemoryNamed(Dormitory, "D")
        self.attendance = InMemoryAttendance()
        self.roll_call = InMemoryRollCall()

    def container(self, default_institution: str = "formal"):
        return wire(
            classes_repo=self.classes,
            students_repo=self.students,
            subjects_repo=self.subjects,
            dormitories_repo=self.dormitories,
            attendance_repo=self.attendance,
            roll_call_repo=self.roll_call,
            default_institution=default_institution,
        )


@pytest.fixture()
def repos() -> Repos:
    r = Repos()
    r.classes.put(FORMAL, ClassRoom(id="C101", name="X IPA 1", grade="10"))
    r.classes.put(FORMAL, ClassRoom(id="C102", name="X IPS 2", grade="10"))
    r.classes.put(FORMAL, ClassRoom(id="C201", name="XI IPA 3", grade="11"))
    r.students.put(FORMAL, Student(id="S001", name="Ahmad Dahlan", class_id="C101", dormitory="Asrama Putra 1"))
    r.students.put(FORMAL, Student(id="S002", name="Budi Santoso", class_id="C101", dormitory="Asrama Putra 1"))
    r.students.put(FORMAL, Student(id="S003", name="Citra Lestari", class_id="C101", dormitory="Asrama Putri 1"))
    r.students.put(FORMAL, Student(id="S006", name="Fitriani", class_id="C102", dormitory="Asrama Putri 1"))
    r.students.put(FORMAL, Student(id="S007", name="Gunawan", class_id="C102"))
    r.subjects.put(FORMAL, Subject(id="SUB01", name="Matematika"))
    r.subjects.put(FORMAL, Subject(id="SUB03", name="Sejarah Indonesia"))
    r.dormitories.put(FORMAL, Dormitory(id="D01", name="Asrama Putra 1"))

    r.classes.put(PESANTREN, ClassRoom(id="H101", name="Halaqah Al-Fatihah", grade="Ula"))
    r.students.put(PESANTREN, Student(id="P001", name="Abdullah bin Mas'ud", class_id="H101", dormitory="Kamar Abu Bakar"))
    r.subjects.put(PESANTREN, Subject(id="KIT01", name="Aqidatul Awam"))
    return r


@pytest.fixture()
def container(repos):
    return repos.container()


# --- Fake Firestore client (repository tests) ---


class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[dict]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, client: "FakeFirestore", path: str):
        self._client = client
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self._client, f"{self.path}/{name}")

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._client.docs.get(self.path))

    def set(self, data: dict) -> None:
        self._client.docs[self.path] = dict(data)

    def update(self, data: dict) -> None:
        if self.path not in self._client.docs:
            raise NotFound(f"No document to update: {self.path}")
        self._client.docs[self.path].update(data)

    def delete(self) -> None:
        self._client.docs.pop(self.path, None)


_OPS = {
    "==": lambda a, b: a == b,
    ">=": lambda a, b: a is not None and a >= b,
    "<=": lambda a, b: a is not None and a <= b,
}


class FakeQuery:
    def __init__(self, client: "FakeFirestore", path: str, filters=(), limit_to: Optional[int] = None):
        self._client = client
        self.path = path
        self._filters = tuple(filters)
        self._limit = limit_to

    def where(self, *, filter):
        return FakeQuery(
            self._client,
            self.path,
            self._filters + ((filter.field_path, filter.op_string, filter.value),),
            self._limit,
        )

    def limit(self, count: int):
        return FakeQuery(self._client, self.path, self._filters, count)

    def stream(self):
        out = []
        for doc_path, data in sorted(self._client.docs.items()):
            parent, doc_id = doc_path.rsplit("/", 1)
            if parent != self.path:
                continue
            if all(_OPS[op](data.get(field), value) for field, op, value in self._filters):
                out.append(FakeSnapshot(doc_id, data))
        return iter(out[: self._limit] if self._limit is not None else out)


class FakeCollection(FakeQuery):
    def __init__(self, client: "FakeFirestore", path: str):
        super().__init__(client, path)

    def document(self, doc_id: Optional[str] = None) -> FakeDocument:
        if doc_id is None:
            doc_id = f"auto{next(self._client.auto_ids):05d}"
        return FakeDocument(self._client, f"{self.path}/{doc_id}")


class FakeBatch:
    def __init__(self, client: "FakeFirestore"):
        self._client = client
        self._ops: list[tuple[FakeDocument, dict]] = []

    def set(self, ref: FakeDocument, data: dict) -> None:
        self._ops.append((ref, data))

    def commit(self) -> None:
        for ref, data in self._ops:
            ref.set(data)
        self._client.commits.append(len(self._ops))


class FakeFirestore:
    def __init__(self):
        self.docs: dict[str, dict] = {}
        self.commits: list[int] = []
        self.auto_ids = itertools.count(1)

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def batch(self) -> FakeBatch:
        return FakeBatch(self)


@pytest.fixture()
def firestore_client() -> FakeFirestore:
    return FakeFirestore()
