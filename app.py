"""Streamlit front-end for the return-file reconciliation pipeline."""
from __future__ import annotations

import pandas as pd
import streamlit as st

from return_recon import (
    ProcessReturnBatchUseCase,
    ProcessReturnFileUseCase,
    ReturnFile,
    build_default_registry,
)
from return_recon.application.dto import BatchSummary
from return_recon.config import SETTINGS
from return_recon.presentation.report import (
    counterparty_groups_to_rows,
    invoice_groups_to_rows,
    records_to_dataframe,
    records_to_rows,
    render_csv,
    render_excel,
)


st.set_page_config(page_title="Bank Return Reconciliation", layout="wide")
st.title("Bank Return Reconciliation")


def run_batch(uploads: list[tuple[str, bytes]], bank_code: str | None, workers: int) -> BatchSummary:
    files = [ReturnFile(file_name=name, content=content, bank_code=bank_code) for name, content in uploads]
    file_use_case = ProcessReturnFileUseCase(build_default_registry())
    return ProcessReturnBatchUseCase(file_use_case, max_workers=workers).execute(files)


if "summary" not in st.session_state:
    st.session_state["summary"] = None

bank_options = ["Detect from header"] + build_default_registry().bank_codes()
col1, col2 = st.columns([3, 1])
with col1:
    uploaded = st.file_uploader("Upload return files", type=["csv", "txt", "ret"], accept_multiple_files=True)
with col2:
    bank_choice = st.selectbox("Bank", bank_options)
    workers = st.number_input("Parallel files", min_value=1, max_value=16, value=SETTINGS.max_workers)

run_btn = st.button("Process", disabled=not uploaded)
if run_btn and uploaded:
    payload = [(item.name, item.read()) for item in uploaded]
    bank_code = None if bank_choice == bank_options[0] else bank_choice
    with st.spinner("Processing..."):
        st.session_state["summary"] = run_batch(payload, bank_code, int(workers))

summary: BatchSummary | None = st.session_state.get("summary")
if summary is None:
    st.info("Upload one or more return files and press Process.")
else:
    st.subheader("Summary")
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Files", summary.total_files)
    m2.metric("Succeeded", summary.succeeded)
    m3.metric("Failed", len(summary.failed))
    m4.metric("Aggregate balance", f"{summary.aggregate_balance:,.2f}")

    if summary.failed:
        st.error("Some files could not be processed")
        st.dataframe(pd.DataFrame(summary.to_dict()["failed"]))

    for result in summary.results:
        if not result.success:
            continue
        stats = result.stats
        st.markdown(f"### {result.file_name}: {result.bank_code} / {result.variant.value}")
        s1, s2, s3, s4 = st.columns(4)
        s1.metric("Records", stats.total_records)
        s2.metric("Original", f"{stats.sum_original:,.2f}")
        s3.metric("Paid", f"{stats.sum_paid:,.2f}")
        s4.metric("Warnings", stats.warning_count)
        st.bar_chart(pd.Series(dict(stats.status_counts), name="titles"))

        by_payer = counterparty_groups_to_rows(result.by_counterparty())
        by_invoice = invoice_groups_to_rows(result.by_invoice())
        tabs = st.tabs(["Records", "By counterparty", "By invoice"])
        with tabs[0]:
            st.dataframe(records_to_dataframe(result.records))
        with tabs[1]:
            st.dataframe(pd.DataFrame(by_payer))
        with tabs[2]:
            st.dataframe(pd.DataFrame(by_invoice))

        rows = records_to_rows(result.records)
        d1, d2 = st.columns(2)
        with d1:
            st.download_button(
                "Download records CSV",
                data=render_csv(rows),
                file_name=f"{result.file_name}.records.csv",
                mime="text/csv",
                key=f"csv-{result.file_name}",
            )
        with d2:
            st.download_button(
                "Download Excel",
                data=render_excel({"records": rows, "by counterparty": by_payer, "by invoice": by_invoice}),
                file_name=f"{result.file_name}.xlsx",
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                key=f"xlsx-{result.file_name}",
            )
