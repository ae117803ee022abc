from __future__ import annotations

import csv
import io
from typing import Mapping, Sequence


def to_csv(rows: Sequence[Mapping[str, object]]) -> str:
    """Render uniform records as CSV.

    Headers come from the first record's keys. Fields holding a comma or a
    quote are quoted with doubled quotes; an empty input yields an empty string.
    """
    if not rows:
        return ""

    headers = list(rows[0].keys())
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow(["" if row.get(h) is None else row.get(h) for h in headers])
    return buf.getvalue().rstrip("\n")
