"""Banco Confianca return-file adapter (settled and open title exports).

Settled export columns:
    TITU_ID;SEQU_BAIX;BORD_ID;CLIE_ID;FANT;NUME_DOCT;DATA_TITU;SACA_ID;NOME;VALO_TITU_ORIG;
    VALO_JURO;VALO_DESC;VALO_PAGO;VALO_TITU;TIPO_TITU;SITUACAO;DATA_PAGA;BAIX_CADA_DETA_ID;TIPO_CART;FILI_ID

Open export columns:
    TITU_ID;FILI_ID;CLIE_ID;FANT;SEQU_BAIX;NUME_DOCT;NUME_BANC;PERC_JURO;PERC_MULT;VALO_TITU;VALO_TITU_ORIG;
    caVALO_JURO;caVALO_ATUA;DATA_TITU;DATA_DEPO;SACA_ID;NOME;caSACADO;TIPO_TITU;TIPO_PESS;AGEN_COBR_ID;
    SITUACAO;TIPO_CART;SITU;BORD_ID;DATA_CRIA;DIAS_ATRA;...
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Sequence

from return_recon.config import SETTINGS
from return_recon.domain.adapters import LineSplitter
from return_recon.domain.errors import UnclassifiedFormatError
from return_recon.domain.models import SettlementRecord, Variant
from return_recon.infrastructure.parsing.tokenizer import DelimitedSplitter
from return_recon.infrastructure.parsing.utils import RowReader, digits_only, split_document

BANK_CODE = "CONFIANCA"

PAID_DATE = "DATA_PAGA"
PAID_AMOUNT = "VALO_PAGO"
DAYS_OVERDUE = "DIAS_ATRA"
UPDATED_AMOUNT = "caVALO_ATUA"

SIGNATURE_COLUMNS = ("TITU_ID", "NUME_DOCT", "SACA_ID")

REQUIRED_SETTLED = (
    "TITU_ID",
    "NUME_DOCT",
    "DATA_TITU",
    "SACA_ID",
    "NOME",
    "VALO_TITU_ORIG",
    "VALO_PAGO",
    "SITUACAO",
    "DATA_PAGA",
)

REQUIRED_OPEN = (
    "TITU_ID",
    "NUME_DOCT",
    "DATA_TITU",
    "SACA_ID",
    "NOME",
    "VALO_TITU_ORIG",
    "SITUACAO",
)


@dataclass(frozen=True)
class ConfiancaAdapter:
    bank_code: str = BANK_CODE
    splitter: LineSplitter = field(default_factory=DelimitedSplitter)

    def normalize_header(self, header: Sequence[str]) -> list[str]:
        return list(header)

    def recognizes(self, header: Sequence[str]) -> bool:
        return all(column in header for column in SIGNATURE_COLUMNS)

    def detect_variant(self, header: Sequence[str]) -> Variant:
        columns = set(header)
        if PAID_DATE in columns and PAID_AMOUNT in columns:
            return Variant.SETTLED
        if DAYS_OVERDUE in columns or UPDATED_AMOUNT in columns:
            return Variant.OPEN
        raise UnclassifiedFormatError(self.bank_code)

    def required_columns(self, variant: Variant) -> Sequence[str]:
        if variant is Variant.SETTLED:
            return REQUIRED_SETTLED
        if variant is Variant.OPEN:
            return REQUIRED_OPEN
        raise UnclassifiedFormatError(self.bank_code)

    def build_record(
        self,
        header: Sequence[str],
        fields: Sequence[str],
        variant: Variant,
        line_number: int | None = None,
    ) -> SettlementRecord:
        reader = RowReader(header, fields)
        document = reader.text("NUME_DOCT") or ""
        invoice_number, installment_number = split_document(document, SETTINGS.default_installment)

        interest = reader.as_decimal("VALO_JURO")
        paid = Decimal("0")
        updated = Decimal("0")
        settlement_date = None
        write_off = None
        status_detail = None
        days_overdue = None
        agency = None

        if variant is Variant.SETTLED:
            paid = reader.as_decimal(PAID_AMOUNT)
            settlement_date = reader.as_date(PAID_DATE)
            write_off = reader.text("BAIX_CADA_DETA_ID")
        else:
            if not interest:
                interest = reader.as_decimal("caVALO_JURO")
            updated = reader.as_decimal(UPDATED_AMOUNT)
            days_overdue = reader.as_int(DAYS_OVERDUE)
            agency = reader.text("AGEN_COBR_ID")
            status_detail = reader.text("SITU")

        counterparty_raw = reader.text("SACA_ID")
        return SettlementRecord(
            variant=variant,
            bank_code=self.bank_code,
            title_id=reader.text("TITU_ID"),
            batch_sequence=reader.text("SEQU_BAIX"),
            bordereau_id=reader.text("BORD_ID"),
            branch_id=reader.text("FILI_ID"),
            client_id=reader.text("CLIE_ID"),
            trade_name=reader.text("FANT"),
            bank_reference=reader.text("NUME_BANC") or document or None,
            counterparty_id_raw=counterparty_raw,
            counterparty_id_digits=digits_only(counterparty_raw),
            counterparty_name=reader.text("NOME"),
            invoice_number=invoice_number,
            installment_number=installment_number,
            original_amount=reader.as_decimal("VALO_TITU_ORIG"),
            interest_amount=interest,
            discount_amount=reader.as_decimal("VALO_DESC"),
            paid_amount=paid,
            title_amount=reader.as_decimal("VALO_TITU"),
            updated_amount=updated,
            due_date=reader.as_date("DATA_TITU"),
            settlement_date=settlement_date,
            title_type=reader.text("TIPO_TITU"),
            status=reader.text("SITUACAO"),
            status_detail=status_detail,
            write_off_description=write_off,
            portfolio_type=reader.text("TIPO_CART"),
            days_overdue=days_overdue,
            collection_agency=agency,
            line_number=line_number,
            warnings=tuple(reader.warnings),
        )
