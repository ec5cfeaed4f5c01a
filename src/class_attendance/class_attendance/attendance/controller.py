from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import Role
from ..core.labels import labels_for
from ..institutions.context import current_institution, roles_required


def register(app: Flask, container: Container) -> None:
    teacher_required = roles_required(Role.TEACHER, Role.ADMIN)

    @app.route("/api/attendance/<class_id>", methods=["GET"], endpoint="attendance_roster")
    @teacher_required
    def attendance_roster(class_id: str):
        roster = container.attendance_service.roster(current_institution(), class_id)
        return jsonify({"success": True, "data": roster.to_dict()})

    @app.route("/api/attendance/<class_id>", methods=["POST"], endpoint="attendance_submit")
    @teacher_required
    def attendance_submit(class_id: str):
        """Body: {"subjectId": "...", "statuses": {"<studentId>": "hadir|izin|sakit|alfa"}}.

        Students left out of `statuses` are recorded as hadir.
        """
        institution = current_institution()
        payload = request.get_json(silent=True) or {}
        result = container.attendance_service.record_class_attendance(
            institution,
            class_id=class_id,
            subject_id=payload.get("subjectId"),
            statuses=payload.get("statuses") or {},
        )
        classroom = container.class_service.get(institution, class_id)
        return jsonify(
            {
                "success": True,
                "message": f"Absensi untuk {labels_for(institution).class_.lower()} {classroom.name} telah berhasil dicatat.",
                "data": {"saved": result.saved, "summary": result.summary},
            }
        ), 201
