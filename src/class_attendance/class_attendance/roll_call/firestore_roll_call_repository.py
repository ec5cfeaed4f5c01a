from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Sequence

from ..common.datetime_utils import to_local_date
from ..core.constants import ROLL_CALL_COLLECTION
from ..core.enums import InstitutionType, RollCallStatus
from ..database.firestore_base import FirestoreCollectionRepository, where_between, write_in_batches
from .model import RollCallEntry, RollCallRecord

logger = logging.getLogger(__name__)


class FirestoreRollCallRepository(FirestoreCollectionRepository):
    collection_name = ROLL_CALL_COLLECTION

    @staticmethod
    def _map(row: Dict[str, Any]) -> RollCallRecord:
        return RollCallRecord(
            id=str(row["id"]),
            student_id=str(row.get("studentId") or ""),
            status=RollCallStatus(row["status"]),
            date=to_local_date(row["date"]),
            notes=str(row.get("notes") or ""),
        )

    def save_batch(
        self,
        institution: InstitutionType,
        entries: Sequence[RollCallEntry],
        *,
        recorded_at: datetime,
    ) -> int:
        collection = self._collection(institution)
        writes = (
            (
                collection.document(),
                {
                    "studentId": e.student_id,
                    "status": RollCallStatus(e.status).value,
                    "date": recorded_at,
                    # always stored, "" when empty
                    "notes": e.notes or "",
                },
            )
            for e in entries
        )
        written = write_in_batches(self._client, writes)
        logger.info("Saved %d roll-call records", written, extra={"institution": institution.value})
        return written

    def list_range(self, institution: InstitutionType, *, start: datetime, end: datetime) -> Sequence[RollCallRecord]:
        query = where_between(self._collection(institution), "date", start, end)
        return [self._map(r) for r in self._stream(query)]
