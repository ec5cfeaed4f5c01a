from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import parse_institution
from ..core.enums import InstitutionType, Role
from ..core.exceptions import ValidationError
from ..core.labels import labels_for

# Roles offered on the entry screen for each institution.
ROLES_BY_INSTITUTION = {
    InstitutionType.FORMAL: (Role.ADMIN, Role.TEACHER, Role.ASSISTANT),
    InstitutionType.PESANTREN: (Role.ADMIN, Role.TEACHER),
}


@dataclass(frozen=True)
class SessionContext:
    """What we store into Flask session when the user picks institution and role."""

    institution: InstitutionType
    role: Optional[Role]

    def to_dict(self) -> dict:
        return {
            "institution": self.institution.value,
            "role": self.role.value if self.role else None,
            "labels": labels_for(self.institution).to_dict(),
            "roles": [r.value for r in ROLES_BY_INSTITUTION[self.institution]],
        }


class InstitutionService:
    def __init__(self, *, default_institution: str = InstitutionType.FORMAL.value):
        self._default = parse_institution(default_institution)

    @property
    def default_institution(self) -> InstitutionType:
        return self._default

    def open_session(self, *, institution: Optional[str], role: Optional[str]) -> SessionContext:
        inst = parse_institution(institution) if institution else self._default
        if not role:
            return SessionContext(institution=inst, role=None)

        try:
            chosen = Role(str(role).strip().lower())
        except ValueError:
            raise ValidationError(f"Peran tidak dikenal: {role!r}") from None

        if chosen not in ROLES_BY_INSTITUTION[inst]:
            raise ValidationError(f"Peran {chosen.value} tidak tersedia untuk lembaga {inst.value}")
        return SessionContext(institution=inst, role=chosen)
