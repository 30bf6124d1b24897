"""Read a student roster from CSV text.

Headers are matched case-insensitively against a few common spellings.
"""
from __future__ import annotations

import csv
import io
from typing import Optional

_ALIASES = {
    "id": ("id",),
    "name": ("name", "fullname", "studentname", "student name"),
    "rollNumber": ("rollnumber", "roll", "rollno", "roll number", "roll no"),
    "email": ("email", "email address", "mail"),
    "seatRow": ("seatrow", "seat row"),
    "seatColumn": ("seatcolumn", "seat column"),
}


def _pick(row: dict, names: tuple[str, ...]) -> str:
    for n in names:
        value = row.get(n)
        if value:
            return value
    return ""


def _as_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_student_csv(text: str) -> list[dict]:
    """Return student payloads (same keys as the JSON API) for usable rows.

    Rows without a name or roll number are dropped; seats are parsed to int
    (or None when blank/non-numeric) and left for the service to validate.
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    if reader.fieldnames:
        reader.fieldnames = [h.strip().lower() for h in reader.fieldnames]

    out: list[dict] = []
    for raw in reader:
        row = {k: (v.strip() if isinstance(v, str) else v) for k, v in raw.items() if k}
        payload = {key: _pick(row, names) for key, names in _ALIASES.items()}
        if not payload["name"] or not payload["rollNumber"]:
            continue
        payload["id"] = payload["id"] or None
        payload["seatRow"] = _as_int(payload["seatRow"])
        payload["seatColumn"] = _as_int(payload["seatColumn"])
        out.append(payload)
    return out
