from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from ..common.datetime_utils import to_local_date
from ..core.constants import ATTENDANCE_COLLECTION
from ..core.enums import AttendanceStatus, InstitutionType
from ..database.firestore_base import (
    FirestoreCollectionRepository,
    where_between,
    where_eq,
    write_in_batches,
)
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


class FirestoreAttendanceRepository(FirestoreCollectionRepository):
    collection_name = ATTENDANCE_COLLECTION

    @staticmethod
    def _map(row: Dict[str, Any]) -> AttendanceRecord:
        return AttendanceRecord(
            id=str(row["id"]),
            student_id=str(row.get("studentId") or ""),
            subject_id=str(row.get("subjectId") or ""),
            class_id=str(row.get("classId") or ""),
            status=AttendanceStatus(row["status"]),
            date=to_local_date(row["date"]),
        )

    def save_batch(
        self,
        institution: InstitutionType,
        *,
        class_id: str,
        subject_id: str,
        statuses: Mapping[str, AttendanceStatus],
        recorded_at: datetime,
    ) -> int:
        collection = self._collection(institution)
        writes = (
            (
                collection.document(),
                {
                    "studentId": student_id,
                    "classId": class_id,
                    "subjectId": subject_id,
                    "status": AttendanceStatus(status).value,
                    "date": recorded_at,
                },
            )
            for student_id, status in statuses.items()
        )
        written = write_in_batches(self._client, writes)
        logger.info(
            "Saved %d attendance records for class %s subject %s",
            written,
            class_id,
            subject_id,
            extra={"institution": institution.value},
        )
        return written

    def list_range(
        self,
        institution: InstitutionType,
        *,
        start: datetime,
        end: datetime,
        class_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        query = self._collection(institution)
        if class_id:
            query = where_eq(query, "classId", class_id)
        query = where_between(query, "date", start, end)
        return [self._map(r) for r in self._stream(query)]
