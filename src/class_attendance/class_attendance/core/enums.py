from __future__ import annotations

from enum import Enum


class InstitutionType(str, Enum):
    """Tenant discriminator: selects the Firestore partition and the label set."""

    FORMAL = "formal"
    PESANTREN = "pesantren"


class Role(str, Enum):
    """Role chosen on the entry screen, used for route gating."""

    ADMIN = "admin"
    TEACHER = "teacher"
    ASSISTANT = "assistant"


class AttendanceStatus(str, Enum):
    """Status stored for both subject attendance and roll call."""

    HADIR = "hadir"
    IZIN = "izin"
    SAKIT = "sakit"
    ALFA = "alfa"


# Roll call uses the same four values.
RollCallStatus = AttendanceStatus


class RecapPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
