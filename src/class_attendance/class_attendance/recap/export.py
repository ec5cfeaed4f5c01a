"""Spreadsheet and PDF rendering of recap tables.

Every export goes through a pandas DataFrame so both formats share one
column layout.
"""
from __future__ import annotations

import io
import re
from typing import Sequence

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..core.labels import LabelSet
from .service import DetailedRollCall, RollCallRecap, SubjectRecap

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"

NOTE_COLUMN = "Keterangan"
DATE_COLUMN = "Tanggal"


def subject_recap_frame(recap: SubjectRecap, labels: LabelSet) -> pd.DataFrame:
    rows = [
        {
            f"ID {labels.student}": r.student.id,
            f"Nama {labels.student}": r.student.name,
            "Hadir": r.hadir,
            "Sakit": r.sakit,
            "Izin": r.izin,
            "Alfa": r.alfa,
            "Persentase Kehadiran (%)": f"{r.percentage:.1f}",
        }
        for r in recap.rows
    ]
    columns = [f"ID {labels.student}", f"Nama {labels.student}", "Hadir", "Sakit", "Izin", "Alfa", "Persentase Kehadiran (%)"]
    return pd.DataFrame(rows, columns=columns)


def _roll_call_frame(records: Sequence[DetailedRollCall], labels: LabelSet, *, date_format: str) -> pd.DataFrame:
    columns = [DATE_COLUMN, f"Nama {labels.student}", labels.class_, NOTE_COLUMN]
    rows = [
        {
            DATE_COLUMN: r.record.date.strftime(date_format),
            f"Nama {labels.student}": r.student_name,
            labels.class_: r.class_name,
            NOTE_COLUMN: r.record.notes or "-",
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=columns)


def roll_call_absence_frame(recap: RollCallRecap, labels: LabelSet) -> pd.DataFrame:
    return _roll_call_frame(recap.absent, labels, date_format="%d %B %Y")


def sick_leave_frame(records: Sequence[DetailedRollCall], labels: LabelSet) -> pd.DataFrame:
    return _roll_call_frame(records, labels, date_format="%d/%m/%Y")


def to_xlsx(df: pd.DataFrame, *, sheet_name: str) -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        # Excel caps sheet names at 31 characters
        df.to_excel(writer, index=False, sheet_name=sheet_name[:31])
    return out.getvalue()


def to_pdf(df: pd.DataFrame, *, title: str, subtitle: str = "") -> bytes:
    out = io.BytesIO()
    doc = SimpleDocTemplate(
        out,
        pagesize=landscape(A4) if len(df.columns) > 5 else A4,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        title=title,
    )
    styles = getSampleStyleSheet()

    story = [Paragraph(title, styles["Heading2"])]
    if subtitle:
        story.append(Paragraph(subtitle, styles["Normal"]))
    story.append(Spacer(1, 0.4 * cm))

    data = [list(df.columns)] + [[str(v) for v in row] for row in df.itertuples(index=False)]
    table = Table(data, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2980b9")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f5f5f5")]),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ]
        )
    )
    story.append(table)
    doc.build(story)
    return out.getvalue()


def slug(value: str) -> str:
    """File-name friendly form: spaces to underscores, unsafe characters dropped."""
    value = re.sub(r"\s+", "_", value.strip())
    return re.sub(r"[^\w.-]", "", value) or "data"


def period_title(period_label: str) -> str:
    return period_label[:1].upper() + period_label[1:]
