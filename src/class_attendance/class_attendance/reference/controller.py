from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..core.labels import labels_for
from ..institutions.context import current_institution, roles_required
from .importer import read_student_rows


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def register(app: Flask, container: Container) -> None:
    admin_only = roles_required(Role.ADMIN)
    # Teachers pick a class on their dashboard; assistants need classes for roll call.
    any_role = roles_required(Role.ADMIN, Role.TEACHER, Role.ASSISTANT)

    # --- Classes ---

    @app.route("/api/classes", methods=["GET"], endpoint="classes_list")
    @any_role
    def classes_list():
        rows = container.class_service.list(current_institution(), search=request.args.get("q"))
        return jsonify({"success": True, "data": [c.to_dict() for c in rows]})

    @app.route("/api/classes/<class_id>", methods=["GET"], endpoint="classes_get")
    @any_role
    def classes_get(class_id: str):
        return jsonify({"success": True, "data": container.class_service.get(current_institution(), class_id).to_dict()})

    @app.route("/api/classes", methods=["POST"], endpoint="classes_create")
    @admin_only
    def classes_create():
        data = _payload()
        created = container.class_service.create(current_institution(), name=data.get("name"), grade=data.get("grade"))
        return jsonify({"success": True, "message": "Data berhasil ditambahkan.", "data": created.to_dict()}), 201

    @app.route("/api/classes/<class_id>", methods=["PUT", "PATCH"], endpoint="classes_update")
    @admin_only
    def classes_update(class_id: str):
        updated = container.class_service.update(current_institution(), class_id, _payload())
        return jsonify({"success": True, "message": "Data berhasil diperbarui.", "data": updated.to_dict()})

    @app.route("/api/classes/<class_id>", methods=["DELETE"], endpoint="classes_delete")
    @admin_only
    def classes_delete(class_id: str):
        container.class_service.delete(current_institution(), class_id)
        return jsonify({"success": True, "message": "Data berhasil dihapus."})

    # --- Subjects & dormitories (name-only documents) ---

    def _register_named(prefix: str, service):
        @app.route(f"/api/{prefix}", methods=["GET"], endpoint=f"{prefix}_list")
        @any_role
        def named_list():
            return jsonify({"success": True, "data": [x.to_dict() for x in service.list(current_institution())]})

        @app.route(f"/api/{prefix}", methods=["POST"], endpoint=f"{prefix}_create")
        @admin_only
        def named_create():
            created = service.create(current_institution(), name=_payload().get("name"))
            return jsonify({"success": True, "message": "Data berhasil ditambahkan.", "data": created.to_dict()}), 201

        @app.route(f"/api/{prefix}/<doc_id>", methods=["PUT", "PATCH"], endpoint=f"{prefix}_update")
        @admin_only
        def named_update(doc_id: str):
            updated = service.update(current_institution(), doc_id, _payload())
            return jsonify({"success": True, "message": "Data berhasil diperbarui.", "data": updated.to_dict()})

        @app.route(f"/api/{prefix}/<doc_id>", methods=["DELETE"], endpoint=f"{prefix}_delete")
        @admin_only
        def named_delete(doc_id: str):
            service.delete(current_institution(), doc_id)
            return jsonify({"success": True, "message": "Data berhasil dihapus."})

    _register_named("subjects", container.subject_service)
    _register_named("dormitories", container.dormitory_service)

    # --- Students ---

    @app.route("/api/students", methods=["GET"], endpoint="students_list")
    @any_role
    def students_list():
        rows = container.student_service.list(
            current_institution(),
            class_id=request.args.get("class_id"),
            dormitory=request.args.get("dormitory"),
            search=request.args.get("q"),
        )
        return jsonify({"success": True, "data": [s.to_dict() for s in rows]})

    @app.route("/api/students/grouped", methods=["GET"], endpoint="students_grouped")
    @admin_only
    def students_grouped():
        groups = container.student_service.grouped_by_class(current_institution())
        return jsonify({"success": True, "data": [g.to_dict() for g in groups]})

    @app.route("/api/students", methods=["POST"], endpoint="students_create")
    @admin_only
    def students_create():
        data = _payload()
        created = container.student_service.create(
            current_institution(),
            name=data.get("name"),
            class_id=data.get("classId"),
            dormitory=data.get("dormitory"),
        )
        return jsonify({"success": True, "message": "Data berhasil ditambahkan.", "data": created.to_dict()}), 201

    @app.route("/api/students/<student_id>", methods=["PUT", "PATCH"], endpoint="students_update")
    @admin_only
    def students_update(student_id: str):
        data = _payload()
        changes = {k: data[src] for k, src in (("name", "name"), ("class_id", "classId"), ("dormitory", "dormitory")) if src in data}
        updated = container.student_service.update(current_institution(), student_id, changes)
        return jsonify({"success": True, "message": "Data berhasil diperbarui.", "data": updated.to_dict()})

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="students_delete")
    @admin_only
    def students_delete(student_id: str):
        container.student_service.delete(current_institution(), student_id)
        return jsonify({"success": True, "message": "Data berhasil dihapus."})

    @app.route("/api/students/import", methods=["POST"], endpoint="students_import")
    @admin_only
    def students_import():
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("File .xlsx wajib diunggah")
        institution = current_institution()
        imported = container.student_service.import_rows(institution, read_student_rows(upload.stream))
        return jsonify(
            {
                "success": True,
                "message": f"{len(imported)} {labels_for(institution).student.lower()} berhasil diimpor.",
                "data": [s.to_dict() for s in imported],
            }
        ), 201
