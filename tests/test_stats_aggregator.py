from decimal import Decimal

from return_recon.domain.models import SettlementRecord, Variant
from return_recon.domain.services import StatsAggregator


def make_record(original: str, paid: str = "0", status: str | None = "PAGO", **kwargs) -> SettlementRecord:
    return SettlementRecord(
        variant=Variant.SETTLED,
        bank_code="TEST",
        original_amount=Decimal(original),
        paid_amount=Decimal(paid),
        status=status,
        **kwargs,
    )


FIXTURE = [
    make_record("0.10", "0.10"),
    make_record("0.20", "0.20"),
    make_record("1234.56", "1000.00", status="PARCIAL"),
    make_record("999999.99", "0", status=None),
    make_record("0.03", "0.03", status=""),
]


def test_sum_original_is_exact():
    stats = StatsAggregator().aggregate(FIXTURE)

    assert stats.total_records == 5
    assert stats.sum_original == sum((r.original_amount for r in FIXTURE), Decimal("0"))
    assert stats.sum_original == Decimal("1001234.88")
    assert stats.sum_paid == Decimal("1000.33")
    assert stats.balance == Decimal("1000234.55")


def test_status_counts_bucket_unknown():
    stats = StatsAggregator().aggregate(FIXTURE)

    assert stats.status_counts == {"PAGO": 2, "PARCIAL": 1, "OTHER": 2}


def test_other_totals():
    records = [
        make_record("10", interest_amount=Decimal("1.5"), discount_amount=Decimal("0.5"), updated_amount=Decimal("11")),
        make_record("20", interest_amount=Decimal("2.5")),
    ]

    stats = StatsAggregator().aggregate(records)

    assert stats.sum_interest == Decimal("4.0")
    assert stats.sum_discount == Decimal("0.5")
    assert stats.sum_updated == Decimal("11")


def test_empty_input():
    stats = StatsAggregator().aggregate([])

    assert stats.total_records == 0
    assert stats.sum_original == Decimal("0")
    assert stats.status_counts == {}


def test_accepts_a_generator():
    stats = StatsAggregator().aggregate(make_record("1") for _ in range(3))
    assert stats.total_records == 3
    assert stats.sum_original == Decimal("3")
