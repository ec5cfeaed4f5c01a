from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from ..core.enums import InstitutionType
from .model import RollCallEntry, RollCallRecord


class RollCallRepository(Protocol):
    def save_batch(
        self,
        institution: InstitutionType,
        entries: Sequence[RollCallEntry],
        *,
        recorded_at: datetime,
    ) -> int:
        raise NotImplementedError

    def list_range(self, institution: InstitutionType, *, start: datetime, end: datetime) -> Sequence[RollCallRecord]:
        raise NotImplementedError
