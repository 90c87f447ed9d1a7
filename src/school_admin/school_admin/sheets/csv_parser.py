from __future__ import annotations

import csv
import io
from typing import List


def parse_csv_line(line: str) -> List[str]:
    """Decode one delimited line into trimmed fields.

    Quoted fields may contain the delimiter; a doubled quote inside a quoted
    field is a literal quote.
    """
    rows = list(csv.reader([line]))
    if not rows:
        return []
    return [field.strip() for field in rows[0]]


def parse_csv_text(text: str) -> List[List[str]]:
    """Decode an exported tab: drops the header line and blank lines."""
    rows: List[List[str]] = []
    reader = csv.reader(io.StringIO(text or ""))
    for index, raw in enumerate(reader):
        if index == 0:
            continue
        fields = [field.strip() for field in raw]
        if not any(fields):
            continue
        rows.append(fields)
    return rows
