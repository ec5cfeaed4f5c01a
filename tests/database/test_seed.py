from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from src.class_attendance.class_attendance.container import build_container
from src.class_attendance.class_attendance.core.enums import InstitutionType
from src.class_attendance.class_attendance.database.seed import DEMO_DATA, has_data, seed_demo_data

NOW = datetime(2024, 5, 15, 10, 0, tzinfo=ZoneInfo("Asia/Jakarta"))


def test_seed_writes_both_institutions(firestore_client):
    written = seed_demo_data(firestore_client, now=NOW)

    # 5 classes + 7 students + 4 subjects + 2 dormitories + 6 attendance
    assert written == {"formal": 24, "pesantren": 19}
    assert firestore_client.docs["institutions/formal/classes/C101"] == {"name": "X IPA 1", "grade": "10"}
    assert firestore_client.docs["institutions/pesantren/students/P001"]["classId"] == "H101"
    assert has_data(firestore_client, InstitutionType.FORMAL)


def test_seed_skips_institutions_with_data(firestore_client):
    seed_demo_data(firestore_client, now=NOW)
    assert seed_demo_data(firestore_client, now=NOW) == {"formal": 0, "pesantren": 0}

    # fixed ids: forcing overwrites instead of duplicating
    seed_demo_data(firestore_client, now=NOW, force=True)
    classes = [p for p in firestore_client.docs if p.startswith("institutions/formal/classes/")]
    assert len(classes) == len(DEMO_DATA[InstitutionType.FORMAL]["classes"])


def test_seeded_data_is_visible_through_services(firestore_client):
    seed_demo_data(firestore_client, now=NOW)
    container = build_container(client=firestore_client)

    labels = [c.name for c in container.class_service.list(InstitutionType.PESANTREN)]
    assert labels == ["Halaqah Al-Fatihah", "Halaqah Al-Ikhlas", "Halaqah An-Nas"]

    recap = container.recap_service.subject_recap(
        InstitutionType.FORMAL, class_id="C101", start=NOW.date(), end=NOW.date()
    )
    assert recap.totals == {"hadir": 2, "sakit": 1, "izin": 0, "alfa": 0, "total": 3}
