from __future__ import annotations

from datetime import datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, InstitutionType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def save_batch(
        self,
        institution: InstitutionType,
        *,
        class_id: str,
        subject_id: str,
        statuses: Mapping[str, AttendanceStatus],
        recorded_at: datetime,
    ) -> int:
        """Write one record per student in a single batched write."""

        raise NotImplementedError

    def list_range(
        self,
        institution: InstitutionType,
        *,
        start: datetime,
        end: datetime,
        class_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records whose timestamp falls within [start, end]."""

        raise NotImplementedError
