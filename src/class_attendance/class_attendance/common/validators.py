from __future__ import annotations

from typing import Optional

from ..core.enums import AttendanceStatus, InstitutionType
from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} wajib diisi")
    return str(value).strip()


def optional_text(value: Optional[str]) -> str:
    return str(value).strip() if value is not None else ""


def parse_institution(value) -> InstitutionType:
    try:
        return InstitutionType(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Jenis lembaga tidak dikenal: {value!r}") from None


def parse_status(value) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Status kehadiran tidak dikenal: {value!r}") from None
