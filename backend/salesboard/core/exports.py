# salesboard/core/exports.py
"""
CSV rendering for the per-profile "Exportera" download.

Column headers are the Swedish labels the sales team already uses in their
spreadsheets.
"""
from __future__ import annotations

import csv
import io
from typing import Any, Iterable
from urllib.parse import quote

from salesboard.core.points import RecordKind

LEADING = ("id", "säljare", "företag")
TRAILING = ("datum", "tid")

EXTRA_COLUMNS: dict[RecordKind, tuple[str, ...]] = {
    RecordKind.MEETING: (),
    RecordKind.BOOKING: (),
    RecordKind.OFFER: ("antal",),
    RecordKind.SALE: ("antal", "fakturering", "omsättning", "provision"),
}


def columns_for(kind: RecordKind) -> list[str]:
    return [*LEADING, *EXTRA_COLUMNS[kind], *TRAILING]


def export_row(kind: RecordKind, record: Any) -> list:
    row = [str(record.id), record.profile.name, record.name]

    if kind is RecordKind.OFFER:
        row.append(record.amount)
    elif kind is RecordKind.SALE:
        row.extend([record.amount, record.invoice, record.revenue, record.provision])

    row.extend([record.date.isoformat(), record.time])
    return row


def render_csv(kind: RecordKind, records: Iterable[Any]) -> str:
    """Records must have `profile` (and for sales `services.service`) loaded."""
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(columns_for(kind))
    for record in records:
        writer.writerow(export_row(kind, record))
    return buf.getvalue()


def content_disposition(filename: str) -> str:
    # names are free text (å, ä, ö); keep an ASCII fallback for old clients
    fallback = filename.encode("ascii", "ignore").decode() or "export.csv"
    fallback = fallback.replace('"', "")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"
