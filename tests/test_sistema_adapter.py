from datetime import date
from decimal import Decimal

import pytest

from return_recon.application.use_cases import ProcessReturnFileUseCase
from return_recon.domain.errors import UnclassifiedFormatError
from return_recon.domain.models import Variant
from return_recon.infrastructure.parsing.sistema import SistemaAdapter, canonical_header
from return_recon.infrastructure.parsing.tokenizer import tokenize
from return_recon.infrastructure.registry import build_default_registry


def parse(text: str):
    adapter = SistemaAdapter()
    tokenized = tokenize(text, adapter.splitter)
    header = adapter.normalize_header(tokenized.header)
    variant = adapter.detect_variant(header)
    return [adapter.build_record(header, row.fields, variant, row.line_number) for row in tokenized.rows]


def test_canonical_header_maps_aliases():
    assert canonical_header(["Cliente", "", "CNPJ", "Liquidação", "Valor"]) == [
        "CLIENTE",
        "",
        "CPF/CNPJ",
        "LIQUIDACAO",
        "VALOR FATURA",
    ]


def test_ledger_records(sistema_text):
    settled, open_title = parse(sistema_text)

    assert settled.variant is Variant.LEDGER
    assert settled.bank_code == "SISTEMA"
    assert settled.client_id == "44748"
    assert settled.counterparty_name == "COLLYER & SOARES LTDA"
    assert settled.counterparty_id_digits == "57220226000115"
    assert settled.branch_id == "100"
    assert settled.invoice_number == "390.048"
    assert settled.installment_number == "1"
    assert settled.issue_date == date(2024, 10, 24)
    assert settled.original_due_date == date(2024, 11, 23)
    assert settled.due_date == date(2024, 11, 23)
    assert settled.settlement_date == date(2024, 11, 25)
    assert settled.original_amount == Decimal("30168.98")
    assert settled.status == "LIQUIDADO"
    assert settled.portfolio_type == "422"
    assert settled.paid_amount == Decimal("0")

    assert open_title.settlement_date is None
    assert open_title.status == "EM ABERTO"
    assert open_title.original_amount == Decimal("1500.00")
    assert open_title.warnings == ()


def test_bank_header_is_not_ledger():
    with pytest.raises(UnclassifiedFormatError):
        SistemaAdapter().detect_variant(["TITU_ID", "NUME_DOCT", "SACA_ID"])


def test_canonical_header_matches_decorated_names():
    header = ["Cliente", "", "CPF/CNPJ", "Fatura", "Vencimento", "Liquidação", "Valor Fatura (R$)"]

    assert canonical_header(header) == [
        "CLIENTE",
        "",
        "CPF/CNPJ",
        "FATURA",
        "VENCIMENTO",
        "LIQUIDACAO",
        "VALOR FATURA",
    ]


def test_decorated_amount_column_is_processed(sistema_text):
    text = sistema_text.replace(";VALOR FATURA", ";VALOR FATURA (R$)", 1)

    result = ProcessReturnFileUseCase(build_default_registry()).execute(text, bank_code="SISTEMA")

    assert result.success
    assert result.stats.sum_original == Decimal("31668.98")
