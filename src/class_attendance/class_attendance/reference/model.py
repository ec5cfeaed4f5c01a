from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassRoom:
    """A class (formal school) or halaqah (pesantren)."""

    id: str
    name: str
    grade: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "grade": self.grade}


@dataclass(frozen=True)
class Student:
    id: str
    name: str
    class_id: str
    dormitory: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "classId": self.class_id, "dormitory": self.dormitory}


@dataclass(frozen=True)
class Subject:
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Dormitory:
    id: str
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name}
