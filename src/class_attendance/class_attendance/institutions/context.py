"""Per-request institution and role, read from the Flask session."""
from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import current_app, jsonify, request, session

from ..common.validators import parse_institution
from ..core.enums import InstitutionType, Role
from ..core.exceptions import AuthorizationError
from .service import ROLES_BY_INSTITUTION

SESSION_INSTITUTION = "institution"
SESSION_ROLE = "role"


def current_institution() -> InstitutionType:
    """`?institution=` overrides the session for one request."""
    override = request.args.get("institution")
    if override:
        return parse_institution(override)
    return parse_institution(session.get(SESSION_INSTITUTION) or current_app.config["DEFAULT_INSTITUTION"])


def current_role() -> Optional[Role]:
    value = session.get(SESSION_ROLE)
    return Role(value) if value else None


def roles_required(*roles: Role):
    allowed = {r.value for r in roles}

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            role = session.get(SESSION_ROLE)
            if not role:
                return jsonify({"success": False, "message": "Silakan pilih peran terlebih dahulu"}), 401
            if role not in allowed:
                raise AuthorizationError("Anda tidak memiliki akses")
            # the role must also exist for the institution this request targets
            institution = current_institution()
            if Role(role) not in ROLES_BY_INSTITUTION[institution]:
                raise AuthorizationError(f"Peran {role} tidak tersedia untuk lembaga {institution.value}")
            return view(*args, **kwargs)

        return wrapper

    return decorator
