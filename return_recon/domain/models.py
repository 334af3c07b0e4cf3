"""Domain models for the bank-return ingestion pipeline.

These dataclasses capture the canonical schema for normalized return-file
records, whatever bank or sub-format they were parsed from.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

ZERO = Decimal("0")


class Variant(str, Enum):
    """File sub-format; decides which fields of a record are meaningful."""

    SETTLED = "SETTLED"
    OPEN = "OPEN"
    LEDGER = "LEDGER"


@dataclass(frozen=True)
class ParseWarning:
    """A field that could not be normalized and fell back to its default."""

    column: str
    value: str
    reason: str

    def __str__(self) -> str:
        return f"{self.column}={self.value!r}: {self.reason}"


@dataclass(frozen=True)
class SettlementRecord:
    """One title from a bank return file, normalized."""

    variant: Variant
    bank_code: str
    title_id: str | None = None
    batch_sequence: str | None = None
    bordereau_id: str | None = None
    branch_id: str | None = None
    client_id: str | None = None
    trade_name: str | None = None
    bank_reference: str | None = None

    counterparty_id_raw: str | None = None
    counterparty_id_digits: str = ""
    counterparty_name: str | None = None

    invoice_number: str = ""
    installment_number: str = "001"

    original_amount: Decimal = ZERO
    interest_amount: Decimal = ZERO
    discount_amount: Decimal = ZERO
    paid_amount: Decimal = ZERO
    title_amount: Decimal = ZERO
    updated_amount: Decimal = ZERO

    due_date: date | None = None
    settlement_date: date | None = None
    issue_date: date | None = None
    original_due_date: date | None = None

    title_type: str | None = None
    status: str | None = None
    status_detail: str | None = None
    write_off_description: str | None = None
    portfolio_type: str | None = None
    days_overdue: int | None = None
    collection_agency: str | None = None

    line_number: int | None = None
    warnings: tuple[ParseWarning, ...] = field(default_factory=tuple)

    @property
    def outstanding_amount(self) -> Decimal:
        return self.original_amount - self.paid_amount

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready projection: decimals as strings, dates as ISO text."""
        return {
            "variant": self.variant.value,
            "bank_code": self.bank_code,
            "title_id": self.title_id,
            "batch_sequence": self.batch_sequence,
            "bordereau_id": self.bordereau_id,
            "branch_id": self.branch_id,
            "client_id": self.client_id,
            "trade_name": self.trade_name,
            "bank_reference": self.bank_reference,
            "counterparty_id_raw": self.counterparty_id_raw,
            "counterparty_id_digits": self.counterparty_id_digits,
            "counterparty_name": self.counterparty_name,
            "invoice_number": self.invoice_number,
            "installment_number": self.installment_number,
            "original_amount": str(self.original_amount),
            "interest_amount": str(self.interest_amount),
            "discount_amount": str(self.discount_amount),
            "paid_amount": str(self.paid_amount),
            "title_amount": str(self.title_amount),
            "updated_amount": str(self.updated_amount),
            "due_date": _iso(self.due_date),
            "settlement_date": _iso(self.settlement_date),
            "issue_date": _iso(self.issue_date),
            "original_due_date": _iso(self.original_due_date),
            "title_type": self.title_type,
            "status": self.status,
            "status_detail": self.status_detail,
            "write_off_description": self.write_off_description,
            "portfolio_type": self.portfolio_type,
            "days_overdue": self.days_overdue,
            "collection_agency": self.collection_agency,
            "line_number": self.line_number,
            "warnings": [str(w) for w in self.warnings],
        }


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value else None
