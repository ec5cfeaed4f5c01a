"""Example: use the service layer directly (without Flask).

Controllers are thin; the recap logic lives in the services.
"""

import importlib

from config import get_settings_module

from src.class_attendance.class_attendance.common.datetime_utils import resolve_range
from src.class_attendance.class_attendance.container import build_container
from src.class_attendance.class_attendance.core.enums import InstitutionType
from src.class_attendance.class_attendance.database.connection import FirestoreConfig, FirestoreConnection


def main():
    settings = importlib.import_module(get_settings_module())
    client = FirestoreConnection.get_instance(FirestoreConfig(**settings.FIRESTORE_CONFIG)).client()
    container = build_container(client=client)

    start, end = resolve_range(period="weekly", start=None, end=None)
    for classroom in container.class_service.list(InstitutionType.FORMAL):
        recap = container.recap_service.subject_recap(InstitutionType.FORMAL, class_id=classroom.id, start=start, end=end)
        print(classroom.name, recap.totals)


if __name__ == "__main__":
    main()
