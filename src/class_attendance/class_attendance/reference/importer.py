from __future__ import annotations

from typing import IO, Union

import pandas as pd

from ..core.exceptions import ValidationError


def read_student_rows(source: Union[str, IO[bytes]]) -> list[dict]:
    """Read the first sheet of an .xlsx upload into row dicts.

    Expected columns: `name`, `classId` and optionally `dormitory`.
    Empty cells come back as "".
    """
    try:
        df = pd.read_excel(source, sheet_name=0, dtype=str, engine="openpyxl")
    except Exception as e:
        raise ValidationError("Format file tidak valid. Pastikan kolom 'name' dan 'classId' ada.") from e

    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")
    return df.to_dict(orient="records")
