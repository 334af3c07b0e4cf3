from decimal import Decimal

from return_recon.domain.models import SettlementRecord, Variant
from return_recon.domain.services import group_by_counterparty, group_by_invoice, last_seen_wins


def make_record(payer: str, name: str, invoice: str, installment: str, original: str, paid: str) -> SettlementRecord:
    return SettlementRecord(
        variant=Variant.SETTLED,
        bank_code="TEST",
        counterparty_id_digits=payer,
        counterparty_name=name,
        invoice_number=invoice,
        installment_number=installment,
        original_amount=Decimal(original),
        paid_amount=Decimal(paid),
    )


RECORDS = [
    make_record("111", "ACME LTDA", "100", "001", "50.00", "50.00"),
    make_record("222", "BETA SA", "200", "001", "70.00", "0"),
    make_record("111", "ACME LTDA ME", "100", "002", "50.00", "20.00"),
    make_record("111", "ACME", "101", "001", "10.00", "0"),
]


def test_group_by_counterparty():
    groups = group_by_counterparty(RECORDS)

    assert list(groups) == ["111", "222"]
    acme = groups["111"]
    assert acme.display_name == "ACME LTDA"
    assert acme.records == (RECORDS[0], RECORDS[2], RECORDS[3])
    assert acme.total_original == Decimal("110.00")
    assert acme.total_paid == Decimal("70.00")
    assert acme.outstanding == Decimal("40.00")


def test_records_are_shared_not_copied():
    by_payer = group_by_counterparty(RECORDS)
    by_invoice = group_by_invoice(RECORDS)

    assert by_payer["111"].records[0] is RECORDS[0]
    assert by_invoice["100"].installments[0] is RECORDS[0]


def test_group_by_invoice():
    groups = group_by_invoice(RECORDS)

    assert list(groups) == ["100", "200", "101"]
    invoice = groups["100"]
    assert [r.installment_number for r in invoice.installments] == ["001", "002"]
    assert invoice.counterparty_id == "111"
    assert invoice.total_original == Decimal("100.00")
    assert invoice.total_paid == Decimal("70.00")


def test_regrouping_is_deterministic():
    first = group_by_counterparty(RECORDS)
    second = group_by_counterparty(RECORDS)

    assert first == second


def test_name_policy_is_swappable():
    groups = group_by_counterparty(RECORDS, name_policy=last_seen_wins)

    assert groups["111"].display_name == "ACME"
