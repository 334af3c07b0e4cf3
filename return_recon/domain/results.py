"""Domain-level results for return-file processing."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Sequence

from .models import SettlementRecord, Variant


@dataclass(frozen=True)
class ReturnFileStats:
    total_records: int
    sum_original: Decimal
    sum_paid: Decimal
    sum_interest: Decimal
    sum_discount: Decimal
    sum_updated: Decimal
    status_counts: Mapping[str, int] = field(default_factory=dict)
    warning_count: int = 0

    @property
    def balance(self) -> Decimal:
        return self.sum_original - self.sum_paid

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_records": self.total_records,
            "sum_original": str(self.sum_original),
            "sum_paid": str(self.sum_paid),
            "sum_interest": str(self.sum_interest),
            "sum_discount": str(self.sum_discount),
            "sum_updated": str(self.sum_updated),
            "status_counts": dict(self.status_counts),
            "warning_count": self.warning_count,
        }


@dataclass(frozen=True)
class CounterpartyGroup:
    """Titles of one payer, in file order."""

    counterparty_id: str
    display_name: str | None
    records: Sequence[SettlementRecord]
    total_original: Decimal
    total_paid: Decimal

    @property
    def outstanding(self) -> Decimal:
        return self.total_original - self.total_paid


@dataclass(frozen=True)
class InvoiceGroup:
    """Installments of one invoice, in file order."""

    invoice_number: str
    counterparty_id: str
    display_name: str | None
    installments: Sequence[SettlementRecord]
    total_original: Decimal
    total_paid: Decimal

    @property
    def outstanding(self) -> Decimal:
        return self.total_original - self.total_paid


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of processing one return file.

    Failures never raise past the use case; they come back with
    ``success=False`` and a stable ``error_code``.
    """

    success: bool
    bank_code: str | None
    file_name: str | None = None
    variant: Variant | None = None
    records: Sequence[SettlementRecord] = field(default_factory=tuple)
    stats: ReturnFileStats | None = None
    error: str | None = None
    error_code: str | None = None

    def by_counterparty(self) -> dict[str, CounterpartyGroup]:
        from .services import group_by_counterparty

        return group_by_counterparty(self.records)

    def by_invoice(self) -> dict[str, InvoiceGroup]:
        from .services import group_by_invoice

        return group_by_invoice(self.records)

    def to_dict(self) -> dict[str, Any]:
        if not self.success:
            return {
                "success": False,
                "error": self.error,
                "error_code": self.error_code,
                "bank_code": self.bank_code,
                "file_name": self.file_name,
            }
        return {
            "success": True,
            "records": [record.to_dict() for record in self.records],
            "stats": self.stats.to_dict() if self.stats else None,
            "variant": self.variant.value if self.variant else None,
            "bank_code": self.bank_code,
            "file_name": self.file_name,
        }
