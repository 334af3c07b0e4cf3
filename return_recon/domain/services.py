"""Domain services: statistics and reconciliation groupings over parsed records."""
from __future__ import annotations

from collections import Counter
from decimal import Context, Decimal, localcontext
from typing import Callable, Iterable, Sequence

from return_recon.config import SETTINGS

from .models import SettlementRecord
from .results import CounterpartyGroup, InvoiceGroup, ReturnFileStats

NamePolicy = Callable[[str | None, str | None], str | None]


def first_seen_wins(current: str | None, incoming: str | None) -> str | None:
    """Keep the name of the first record seen for a key; later names are ignored."""
    return current if current is not None else incoming


def last_seen_wins(current: str | None, incoming: str | None) -> str | None:
    return incoming if incoming is not None else current


class StatsAggregator:
    """Folds a record list into file-level totals in a single pass."""

    def __init__(self, decimal_context: Context | None = None, other_bucket: str | None = None) -> None:
        self._context = decimal_context or SETTINGS.decimal_context
        self._other_bucket = other_bucket or SETTINGS.other_status_bucket

    def aggregate(self, records: Iterable[SettlementRecord]) -> ReturnFileStats:
        total = 0
        warnings = 0
        sum_original = sum_paid = sum_interest = sum_discount = sum_updated = Decimal("0")
        statuses: Counter[str] = Counter()

        with localcontext(self._context):
            for record in records:
                total += 1
                warnings += len(record.warnings)
                sum_original += record.original_amount
                sum_paid += record.paid_amount
                sum_interest += record.interest_amount
                sum_discount += record.discount_amount
                sum_updated += record.updated_amount
                statuses[(record.status or "").strip() or self._other_bucket] += 1

        return ReturnFileStats(
            total_records=total,
            sum_original=sum_original,
            sum_paid=sum_paid,
            sum_interest=sum_interest,
            sum_discount=sum_discount,
            sum_updated=sum_updated,
            status_counts=dict(statuses),
            warning_count=warnings,
        )


class _Bucket:
    __slots__ = ("name", "counterparty_id", "members", "total_original", "total_paid")

    def __init__(self, counterparty_id: str) -> None:
        self.name: str | None = None
        self.counterparty_id = counterparty_id
        self.members: list[SettlementRecord] = []
        self.total_original = Decimal("0")
        self.total_paid = Decimal("0")

    def add(self, record: SettlementRecord, name_policy: NamePolicy) -> None:
        self.name = name_policy(self.name, record.counterparty_name)
        self.members.append(record)
        self.total_original += record.original_amount
        self.total_paid += record.paid_amount


def _fold(
    records: Sequence[SettlementRecord],
    key: Callable[[SettlementRecord], str],
    name_policy: NamePolicy,
) -> dict[str, _Bucket]:
    buckets: dict[str, _Bucket] = {}
    with localcontext(SETTINGS.decimal_context):
        for record in records:
            group_key = key(record)
            bucket = buckets.get(group_key)
            if bucket is None:
                bucket = buckets[group_key] = _Bucket(record.counterparty_id_digits)
            bucket.add(record, name_policy)
    return buckets


def group_by_counterparty(
    records: Sequence[SettlementRecord],
    name_policy: NamePolicy = first_seen_wins,
) -> dict[str, CounterpartyGroup]:
    """Group records by payer document digits, preserving file order."""
    buckets = _fold(records, lambda r: r.counterparty_id_digits, name_policy)
    return {
        key: CounterpartyGroup(
            counterparty_id=key,
            display_name=bucket.name,
            records=tuple(bucket.members),
            total_original=bucket.total_original,
            total_paid=bucket.total_paid,
        )
        for key, bucket in buckets.items()
    }


def group_by_invoice(
    records: Sequence[SettlementRecord],
    name_policy: NamePolicy = first_seen_wins,
) -> dict[str, InvoiceGroup]:
    """Group records by invoice number; members are the invoice's installments."""
    buckets = _fold(records, lambda r: r.invoice_number, name_policy)
    return {
        key: InvoiceGroup(
            invoice_number=key,
            counterparty_id=bucket.counterparty_id,
            display_name=bucket.name,
            installments=tuple(bucket.members),
            total_original=bucket.total_original,
            total_paid=bucket.total_paid,
        )
        for key, bucket in buckets.items()
    }
