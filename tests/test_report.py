from io import BytesIO

import pandas as pd

from return_recon.application.use_cases import ProcessReturnFileUseCase
from return_recon.infrastructure.registry import build_default_registry
from return_recon.presentation.report import (
    RECORD_COLUMNS,
    counterparty_groups_to_rows,
    invoice_groups_to_rows,
    records_to_dataframe,
    records_to_rows,
    render_csv,
    render_excel,
    render_html,
)


def parsed(text):
    return ProcessReturnFileUseCase(build_default_registry()).execute(text)


def test_records_to_rows(settled_text):
    rows = records_to_rows(parsed(settled_text).records)

    assert list(rows[0].keys()) == RECORD_COLUMNS
    assert rows[0]["due_date"] == "2025-05-10"
    assert rows[0]["paid_amount"] == "950.00"
    assert rows[0]["outstanding_amount"] == "50.00"
    assert rows[0]["days_overdue"] == ""


def test_render_csv(settled_text):
    payload = render_csv(records_to_rows(parsed(settled_text).records)).decode("utf-8")
    lines = payload.strip().splitlines()

    assert lines[0].startswith("line_number;variant;bank_code")
    assert len(lines) == 3


def test_render_csv_empty():
    assert render_csv([]) == b""


def test_render_html_escapes_values():
    html = render_html([{"name": "A & B <x>"}])

    assert "<th>name</th>" in html
    assert "A &amp; B &lt;x&gt;" in html
    assert render_html([]) == "<p>No records.</p>"


def test_group_rows(settled_text):
    result = parsed(settled_text)

    payers = counterparty_groups_to_rows(result.by_counterparty())
    invoices = invoice_groups_to_rows(result.by_invoice())

    assert payers == [
        {
            "counterparty_id": "12345678901",
            "display_name": "ACME LTDA",
            "titles": "2",
            "total_original": "2000.00",
            "total_paid": "1950.00",
            "outstanding": "50.00",
        }
    ]
    assert invoices[0]["installments"] == "001, 002"


def test_records_to_dataframe(open_text):
    frame = records_to_dataframe(parsed(open_text).records)

    assert list(frame.columns) == RECORD_COLUMNS
    assert frame.loc[0, "updated_amount"] == 507.25


def test_render_excel_round_trip(settled_text):
    result = parsed(settled_text)
    payload = render_excel(
        {
            "records": records_to_rows(result.records),
            "by counterparty": counterparty_groups_to_rows(result.by_counterparty()),
        }
    )

    sheets = pd.read_excel(BytesIO(payload), sheet_name=None, engine="openpyxl", dtype=str)
    assert list(sheets) == ["records", "by counterparty"]
    assert len(sheets["records"]) == 2
    assert sheets["by counterparty"].loc[0, "counterparty_id"] == "12345678901"
