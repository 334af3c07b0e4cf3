"""Report generators for parsed return files and their groupings."""
from __future__ import annotations

import csv
import io
import re
from html import escape
from typing import Mapping, Sequence

import pandas as pd

from return_recon.domain.models import SettlementRecord
from return_recon.domain.results import CounterpartyGroup, InvoiceGroup

RECORD_COLUMNS = [
    "line_number",
    "variant",
    "bank_code",
    "title_id",
    "counterparty_id_digits",
    "counterparty_name",
    "invoice_number",
    "installment_number",
    "due_date",
    "settlement_date",
    "original_amount",
    "interest_amount",
    "discount_amount",
    "paid_amount",
    "updated_amount",
    "outstanding_amount",
    "status",
    "status_detail",
    "days_overdue",
    "warnings",
]

AMOUNT_COLUMNS = (
    "original_amount",
    "interest_amount",
    "discount_amount",
    "paid_amount",
    "updated_amount",
    "outstanding_amount",
)


def records_to_rows(records: Sequence[SettlementRecord]) -> list[dict[str, str]]:
    rows: list[dict[str, str]] = []
    for record in records:
        data = record.to_dict()
        data["warnings"] = "; ".join(data["warnings"])
        data["outstanding_amount"] = record.outstanding_amount
        rows.append({column: "" if data[column] is None else str(data[column]) for column in RECORD_COLUMNS})
    return rows


def counterparty_groups_to_rows(groups: Mapping[str, CounterpartyGroup]) -> list[dict[str, str]]:
    return [
        {
            "counterparty_id": group.counterparty_id,
            "display_name": group.display_name or "",
            "titles": str(len(group.records)),
            "total_original": str(group.total_original),
            "total_paid": str(group.total_paid),
            "outstanding": str(group.outstanding),
        }
        for group in groups.values()
    ]


def invoice_groups_to_rows(groups: Mapping[str, InvoiceGroup]) -> list[dict[str, str]]:
    return [
        {
            "invoice_number": group.invoice_number,
            "counterparty_id": group.counterparty_id,
            "display_name": group.display_name or "",
            "installments": ", ".join(r.installment_number for r in group.installments),
            "total_original": str(group.total_original),
            "total_paid": str(group.total_paid),
            "outstanding": str(group.outstanding),
        }
        for group in groups.values()
    ]


def render_csv(rows: Sequence[Mapping[str, str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(rows[0].keys()) if rows else [], delimiter=";")
    if rows:
        writer.writeheader()
        writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def render_html(rows: Sequence[Mapping[str, str]]) -> str:
    if not rows:
        return "<p>No records.</p>"
    header = "".join(f"<th>{escape(col)}</th>" for col in rows[0].keys())
    body_parts = []
    for row in rows:
        body_parts.append("<tr>" + "".join(f"<td>{escape(value)}</td>" for value in row.values()) + "</tr>")
    body_html = "".join(body_parts)
    return f"<table><thead><tr>{header}</tr></thead><tbody>{body_html}</tbody></table>"


def records_to_dataframe(records: Sequence[SettlementRecord]) -> pd.DataFrame:
    frame = pd.DataFrame(records_to_rows(records), columns=RECORD_COLUMNS)
    for column in AMOUNT_COLUMNS:
        frame[column] = pd.to_numeric(frame[column])
    return frame


def _sheet_name(name: str) -> str:
    return re.sub(r"[\[\]:*?/\\]", "_", name)[:31] or "sheet"


def render_excel(sheets: Mapping[str, Sequence[Mapping[str, str]]]) -> bytes:
    """Write each row set to its own worksheet."""
    if not sheets:
        sheets = {"records": []}
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        for name, rows in sheets.items():
            pd.DataFrame(list(rows)).to_excel(writer, sheet_name=_sheet_name(name), index=False)
    return buffer.getvalue()
