from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import Role
from ..institutions.context import current_institution, roles_required


def register(app: Flask, container: Container) -> None:
    assistant_required = roles_required(Role.ASSISTANT, Role.ADMIN)

    @app.route("/api/roll-call", methods=["GET"], endpoint="roll_call_overview")
    @assistant_required
    def roll_call_overview():
        groups = container.roll_call_service.class_overview(current_institution())
        return jsonify({"success": True, "data": [g.to_dict() for g in groups]})

    @app.route("/api/roll-call/<class_id>", methods=["POST"], endpoint="roll_call_submit")
    @assistant_required
    def roll_call_submit(class_id: str):
        payload = request.get_json(silent=True) or {}
        summary = container.roll_call_service.submit_roll_call(
            current_institution(),
            class_id=class_id,
            statuses=payload.get("statuses") or {},
        )
        return jsonify(
            {
                "success": True,
                "message": "Absensi apel untuk kelas/halaqah terpilih berhasil disimpan.",
                "data": {"summary": summary},
            }
        ), 201

    @app.route("/api/permits/dormitories", methods=["GET"], endpoint="permit_dormitories")
    @assistant_required
    def permit_dormitories():
        institution = current_institution()
        dormitory = request.args.get("dormitory")
        data = {"dormitories": container.roll_call_service.list_dormitories_in_use(institution)}
        if dormitory:
            students = container.roll_call_service.students_in_dormitory(institution, dormitory)
            data["students"] = [s.to_dict() for s in students]
        return jsonify({"success": True, "data": data})

    @app.route("/api/permits", methods=["POST"], endpoint="permit_create")
    @assistant_required
    def permit_create():
        payload = request.get_json(silent=True) or {}
        entry = container.roll_call_service.record_permit(
            current_institution(),
            dormitory=payload.get("dormitory"),
            student_id=payload.get("studentId"),
            notes=payload.get("notes"),
            status=payload.get("status") or "izin",
        )
        message = "Catatan izin berhasil disimpan." if entry.status.value == "izin" else "Catatan sakit berhasil disimpan."
        return jsonify(
            {
                "success": True,
                "message": message,
                "data": {"studentId": entry.student_id, "status": entry.status.value, "notes": entry.notes},
            }
        ), 201
