"""Command-line entrypoint for return-file processing."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from return_recon.application.dto import ReturnFile
from return_recon.application.use_cases import ProcessReturnBatchUseCase, ProcessReturnFileUseCase
from return_recon.config import SETTINGS
from return_recon.infrastructure.registry import build_default_registry
from return_recon.presentation.report import (
    counterparty_groups_to_rows,
    invoice_groups_to_rows,
    records_to_rows,
    render_csv,
    render_excel,
    render_html,
)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Parse bank return files and summarize them for reconciliation")
    parser.add_argument("files", nargs="+", type=Path, help="Return files to process")
    parser.add_argument("--bank", type=str, help="Bank code; detected from the header when omitted")
    parser.add_argument("--workers", type=positive_int, default=SETTINGS.max_workers, help="Files parsed concurrently")
    parser.add_argument("--group", choices=["counterparty", "invoice"], help="Print a grouping per file")
    parser.add_argument("--csv", type=Path, help="Write all parsed records to this CSV file")
    parser.add_argument("--excel", type=Path, help="Write records and groupings to this Excel workbook")
    parser.add_argument("--html", type=Path, help="Write all parsed records to this HTML table")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")
    return parser.parse_args(argv)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    configure_logging(args.verbose)

    files = [ReturnFile(file_name=path.name, content=path, bank_code=args.bank) for path in args.files]
    file_use_case = ProcessReturnFileUseCase(build_default_registry())
    summary = ProcessReturnBatchUseCase(file_use_case, max_workers=args.workers).execute(files)

    print("Return File Summary")
    print("===================")
    all_records = []
    for result in summary.results:
        if not result.success:
            continue
        stats = result.stats
        all_records.extend(result.records)
        print(f"{result.file_name}: bank={result.bank_code} variant={result.variant.value}")
        print(f"  Records: {stats.total_records}")
        print(f"  Original: {stats.sum_original}  Paid: {stats.sum_paid}  Interest: {stats.sum_interest}")
        print(f"  Discount: {stats.sum_discount}  Updated: {stats.sum_updated}")
        print(f"  Status: {', '.join(f'{k}={v}' for k, v in stats.status_counts.items())}")
        if stats.warning_count:
            print(f"  Warnings: {stats.warning_count}")
        if args.group == "counterparty":
            for group in result.by_counterparty().values():
                print(
                    f"  - {group.counterparty_id} {group.display_name or ''}: "
                    f"{len(group.records)} titles, original {group.total_original}, paid {group.total_paid}"
                )
        elif args.group == "invoice":
            for group in result.by_invoice().values():
                print(
                    f"  - invoice {group.invoice_number}: {len(group.installments)} installments, "
                    f"original {group.total_original}, paid {group.total_paid}"
                )

    print(f"\nFiles: {summary.total_files}  Succeeded: {summary.succeeded}  Failed: {len(summary.failed)}")
    print(f"Aggregate balance: {summary.aggregate_balance}")
    if summary.failed:
        print("\nFailures:")
        for failure in summary.failed:
            print(f"- {failure.file_name} [{failure.error_code}]: {failure.error}")

    if args.csv:
        args.csv.write_bytes(render_csv(records_to_rows(all_records)))
    if args.excel:
        sheets = {"records": records_to_rows(all_records)}
        for index, result in enumerate(summary.results, start=1):
            if result.success:
                stem = Path(result.file_name or "file").stem[:14]
                sheets[f"{index} {stem} by payer"] = counterparty_groups_to_rows(result.by_counterparty())
                sheets[f"{index} {stem} by invoice"] = invoice_groups_to_rows(result.by_invoice())
        args.excel.write_bytes(render_excel(sheets))
    if args.html:
        args.html.write_text(render_html(records_to_rows(all_records)), encoding="utf-8")

    return 0 if not summary.failed else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
