"""Application services orchestrating return-file processing."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal, localcontext
import logging
from pathlib import Path
from typing import Sequence

from return_recon.application.dto import BatchSummary, FileFailure, ReturnFile
from return_recon.config import SETTINGS
from return_recon.domain.adapters import BankFormatAdapter
from return_recon.domain.errors import MissingColumnError, ReturnFileError
from return_recon.domain.models import Variant
from return_recon.domain.results import ProcessResult
from return_recon.domain.services import StatsAggregator
from return_recon.infrastructure.parsing.tokenizer import tokenize
from return_recon.infrastructure.registry import AdapterRegistry

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "internal_error"
DECODE_ERROR = "decode_error"
READ_ERROR = "read_error"


def validate_required_columns(adapter: BankFormatAdapter, header: Sequence[str], variant: Variant) -> None:
    columns = set(header)
    for column in adapter.required_columns(variant):
        if column not in columns:
            raise MissingColumnError(column)


class ProcessReturnFileUseCase:
    """Parses one return file into records and statistics.

    Never raises: file-level problems come back as a failed ``ProcessResult``.
    """

    def __init__(self, registry: AdapterRegistry, aggregator: StatsAggregator | None = None) -> None:
        self._registry = registry
        self._aggregator = aggregator or StatsAggregator()

    def execute(
        self,
        content: str,
        bank_code: str | None = None,
        file_name: str | None = None,
    ) -> ProcessResult:
        resolved_code = bank_code.strip().upper() if bank_code else None
        try:
            adapter = self._resolve(content, bank_code, file_name)
            resolved_code = adapter.bank_code
            tokenized = tokenize(content, adapter.splitter)
            header = adapter.normalize_header(tokenized.header)
            variant = adapter.detect_variant(header)
            validate_required_columns(adapter, header, variant)

            records = tuple(
                adapter.build_record(header, row.fields, variant, row.line_number)
                for row in tokenized.rows
            )
            stats = self._aggregator.aggregate(records)
        except ReturnFileError as exc:
            logger.warning("Rejected return file %s (%s): %s", file_name or "<memory>", exc.code, exc)
            return ProcessResult(
                success=False,
                bank_code=resolved_code,
                file_name=file_name,
                error=str(exc),
                error_code=exc.code,
            )
        except Exception:
            logger.exception("Unexpected failure processing return file %s", file_name or "<memory>")
            return ProcessResult(
                success=False,
                bank_code=resolved_code,
                file_name=file_name,
                error="Unexpected error while processing return file",
                error_code=INTERNAL_ERROR,
            )

        for record in records:
            for warning in record.warnings:
                logger.debug("%s line %s: %s", file_name or "<memory>", record.line_number, warning)
        logger.info(
            "Parsed %s: bank=%s variant=%s records=%d warnings=%d",
            file_name or "<memory>",
            resolved_code,
            variant.value,
            stats.total_records,
            stats.warning_count,
        )
        return ProcessResult(
            success=True,
            bank_code=resolved_code,
            file_name=file_name,
            variant=variant,
            records=records,
            stats=stats,
        )

    def _resolve(self, content: str, bank_code: str | None, file_name: str | None) -> BankFormatAdapter:
        if bank_code:
            return self._registry.get(bank_code)
        return self._registry.detect(content, hint=file_name)


class ProcessReturnBatchUseCase:
    """Processes several independent files concurrently, isolating failures per file."""

    def __init__(self, file_use_case: ProcessReturnFileUseCase, max_workers: int | None = None) -> None:
        if max_workers is None:
            max_workers = SETTINGS.max_workers
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._file_use_case = file_use_case
        self._max_workers = max_workers

    def execute(self, files: Sequence[ReturnFile]) -> BatchSummary:
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            results = list(pool.map(self._process, files))

        failed: list[FileFailure] = []
        balance = Decimal("0")
        with localcontext(SETTINGS.decimal_context):
            for item, result in zip(files, results):
                if result.success and result.stats is not None:
                    balance += result.stats.balance
                else:
                    failed.append(
                        FileFailure(
                            file_name=item.file_name,
                            error=result.error or "unknown error",
                            error_code=result.error_code,
                        )
                    )

        summary = BatchSummary(
            total_files=len(files),
            succeeded=len(files) - len(failed),
            failed=tuple(failed),
            aggregate_balance=balance,
            results=tuple(results),
        )
        logger.info(
            "Batch finished: %d files, %d succeeded, %d failed",
            summary.total_files,
            summary.succeeded,
            len(summary.failed),
        )
        return summary

    def _process(self, item: ReturnFile) -> ProcessResult:
        content = item.content
        if isinstance(content, Path):
            try:
                content = content.read_bytes()
            except OSError as exc:
                logger.warning("Could not read %s: %s", item.file_name, exc)
                return ProcessResult(
                    success=False,
                    bank_code=item.bank_code,
                    file_name=item.file_name,
                    error=f"Could not read file: {exc.strerror or exc}",
                    error_code=READ_ERROR,
                )
        try:
            content = content.decode(SETTINGS.encoding) if isinstance(content, bytes) else content
        except UnicodeDecodeError as exc:
            logger.warning("Could not decode %s as %s: %s", item.file_name, SETTINGS.encoding, exc)
            return ProcessResult(
                success=False,
                bank_code=item.bank_code,
                file_name=item.file_name,
                error=f"File is not valid {SETTINGS.encoding} text",
                error_code=DECODE_ERROR,
            )
        return self._file_use_case.execute(content, bank_code=item.bank_code, file_name=item.file_name)
