from __future__ import annotations

import io
from datetime import date

from flask import Flask, jsonify, request, send_file

from ..common.datetime_utils import resolve_range
from ..container import Container
from ..core.enums import InstitutionType, Role
from ..core.exceptions import ValidationError
from ..core.labels import labels_for
from ..institutions.context import current_institution, roles_required
from . import export


def register(app: Flask, container: Container) -> None:
    admin_required = roles_required(Role.ADMIN)

    def _range(default_period: str = "monthly") -> tuple[date, date, str]:
        """(start, end, label); the label names the period in file names and titles."""
        start_s, end_s = request.args.get("start"), request.args.get("end")
        period = request.args.get("period") or default_period
        start, end = resolve_range(period=period, start=start_s, end=end_s)
        if start_s or end_s:
            period = f"{start.strftime('%Y%m%d')}_{end.strftime('%Y%m%d')}"
        return start, end, period

    def _class_id(institution: InstitutionType):
        class_id = request.args.get("class_id")
        if class_id:
            return class_id
        # Default to the first class, as the recap screen does.
        classes = container.class_service.list(institution)
        return classes[0].id if classes else None

    def _send(content: bytes, *, filename: str, mimetype: str):
        return send_file(io.BytesIO(content), mimetype=mimetype, as_attachment=True, download_name=filename)

    def _send_frame(df, *, fmt: str, basename: str, title: str, subtitle: str = ""):
        # nothing to export, same as the recap screens
        if df.empty:
            raise ValidationError("Tidak ada data untuk diekspor.")
        if fmt == "xlsx":
            return _send(export.to_xlsx(df, sheet_name=title), filename=f"{basename}.xlsx", mimetype=export.XLSX_MIMETYPE)
        return _send(export.to_pdf(df, title=title, subtitle=subtitle), filename=f"{basename}.pdf", mimetype=export.PDF_MIMETYPE)

    # --- Subject attendance ---

    @app.route("/api/recap/subjects", methods=["GET"], endpoint="recap_subjects")
    @admin_required
    def recap_subjects():
        institution = current_institution()
        start, end, period = _range()
        class_id = _class_id(institution)
        if not class_id:
            return jsonify(
                {
                    "success": True,
                    "message": f"Tidak ada data {labels_for(institution).class_} yang bisa ditampilkan.",
                    "data": None,
                    "overallPercentage": round(container.recap_service.overall_percentage(institution, start=start, end=end), 1),
                }
            )
        recap = container.recap_service.subject_recap(institution, class_id=class_id, start=start, end=end)
        return jsonify({"success": True, "period": period, "data": recap.to_dict()})

    @app.route("/api/recap/subjects.<fmt>", methods=["GET"], endpoint="recap_subjects_export")
    @admin_required
    def recap_subjects_export(fmt: str):
        if fmt not in ("xlsx", "pdf"):
            raise ValidationError("Format ekspor hanya xlsx atau pdf")
        institution = current_institution()
        labels = labels_for(institution)
        start, end, period = _range()
        class_id = _class_id(institution)
        if not class_id:
            raise ValidationError(f"Tidak ada data {labels.class_} yang bisa diekspor.")

        recap = container.recap_service.subject_recap(institution, class_id=class_id, start=start, end=end)
        class_name = recap.classroom.name
        return _send_frame(
            export.subject_recap_frame(recap, labels),
            fmt=fmt,
            basename=f"rekap_absensi_{export.slug(class_name)}_{period}",
            title=f"Rekap Absensi {labels.class_} {class_name}" if fmt == "pdf" else "Rekap Absensi",
            subtitle=f"Periode: {export.period_title(period)}",
        )

    # --- Roll call ---

    @app.route("/api/recap/roll-call", methods=["GET"], endpoint="recap_roll_call")
    @admin_required
    def recap_roll_call():
        start, end, period = _range("daily")
        recap = container.recap_service.roll_call_recap(current_institution(), start=start, end=end)
        return jsonify({"success": True, "period": period, "data": recap.to_dict()})

    @app.route("/api/recap/roll-call.<fmt>", methods=["GET"], endpoint="recap_roll_call_export")
    @admin_required
    def recap_roll_call_export(fmt: str):
        if fmt not in ("xlsx", "pdf"):
            raise ValidationError("Format ekspor hanya xlsx atau pdf")
        institution = current_institution()
        start, end, period = _range("daily")
        recap = container.recap_service.roll_call_recap(institution, start=start, end=end)
        return _send_frame(
            export.roll_call_absence_frame(recap, labels_for(institution)),
            fmt=fmt,
            basename=f"rekap_tidak_hadir_apel_{period}",
            title=(
                f"Rekap Tidak Hadir Apel - Periode {export.period_title(period)}"
                if fmt == "pdf"
                else "Tidak Hadir Apel"
            ),
        )

    # --- Sick & leave ---

    @app.route("/api/recap/sick-leave", methods=["GET"], endpoint="recap_sick_leave")
    @admin_required
    def recap_sick_leave():
        start, end, period = _range("daily")
        recap = container.recap_service.sick_leave_recap(current_institution(), start=start, end=end)
        return jsonify({"success": True, "period": period, "data": recap.to_dict()})

    @app.route("/api/recap/sick-leave.<fmt>", methods=["GET"], endpoint="recap_sick_leave_export")
    @admin_required
    def recap_sick_leave_export(fmt: str):
        if fmt not in ("xlsx", "pdf"):
            raise ValidationError("Format ekspor hanya xlsx atau pdf")
        kind = request.args.get("kind") or "sakit"
        if kind not in ("sakit", "izin"):
            raise ValidationError("Parameter kind hanya 'sakit' atau 'izin'")

        institution = current_institution()
        start, end, period = _range("daily")
        recap = container.recap_service.sick_leave_recap(institution, start=start, end=end)
        records = recap.sick if kind == "sakit" else recap.leave
        title = "Rekap Siswa Sakit" if kind == "sakit" else "Rekap Izin"
        return _send_frame(
            export.sick_leave_frame(records, labels_for(institution)),
            fmt=fmt,
            basename=f"{title.lower().replace(' ', '_')}_{period}",
            title=title,
            subtitle=f"Periode: {export.period_title(period)}",
        )
