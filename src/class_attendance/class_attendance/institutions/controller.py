from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..container import Container
from .context import SESSION_INSTITUTION, SESSION_ROLE, current_institution, current_role
from .service import SessionContext


def register(app: Flask, container: Container) -> None:
    @app.route("/api/session", methods=["GET"], endpoint="session_get")
    def session_get():
        ctx = SessionContext(institution=current_institution(), role=current_role())
        return jsonify({"success": True, "data": ctx.to_dict()})

    @app.route("/api/session", methods=["POST"], endpoint="session_open")
    def session_open():
        payload = request.get_json(silent=True) or {}
        ctx = container.institution_service.open_session(
            institution=payload.get("institution"),
            role=payload.get("role"),
        )
        session[SESSION_INSTITUTION] = ctx.institution.value
        if ctx.role:
            session[SESSION_ROLE] = ctx.role.value
        else:
            session.pop(SESSION_ROLE, None)
        app.logger.info("Session opened institution=%s role=%s", ctx.institution.value, ctx.role.value if ctx.role else "-")
        return jsonify({"success": True, "data": ctx.to_dict()})

    @app.route("/api/session", methods=["DELETE"], endpoint="session_close")
    def session_close():
        session.clear()
        return jsonify({"success": True})

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"success": True, "status": "ok"})
