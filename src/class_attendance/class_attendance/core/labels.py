from __future__ import annotations

from dataclasses import asdict, dataclass

from .enums import InstitutionType


@dataclass(frozen=True)
class LabelSet:
    """Nouns that differ between a formal school and a pesantren."""

    student: str
    class_: str
    subject: str
    dormitory: str
    teacher_dashboard: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["class"] = data.pop("class_")
        return data


_LABELS = {
    InstitutionType.FORMAL: LabelSet(
        student="Siswa",
        class_="Kelas",
        subject="Mata Pelajaran",
        dormitory="Asrama",
        teacher_dashboard="Dashboard Guru",
    ),
    InstitutionType.PESANTREN: LabelSet(
        student="Santri",
        class_="Halaqah",
        subject="Kitab",
        dormitory="Asrama/Kamar",
        teacher_dashboard="Dashboard Guru KurPes",
    ),
}


def labels_for(institution: InstitutionType) -> LabelSet:
    return _LABELS[InstitutionType(institution)]
