"""Accounts-receivable system export adapter (SISTEMA).

Used when titles come from the receivables system instead of the bank:

    CLIENTE;;CPF/CNPJ;EMPRESA;FATURA;PARCELA;DOCUMENTO;PORTADOR;EMISSAO;VENC.ORIG.;VENCIMENTO;LIQUIDACAO;VALOR FATURA
    44748;COLLYER & SOARES LTDA;57.220.226.0001/15;100;390.048;1;Fatura;422;24/10/2024;23/11/2024;23/11/2024;25/11/2024;30.168,98

The column after CLIENTE has no header and carries the client name.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from return_recon.config import SETTINGS
from return_recon.domain.adapters import LineSplitter
from return_recon.domain.errors import UnclassifiedFormatError
from return_recon.domain.models import SettlementRecord, Variant
from return_recon.infrastructure.parsing.tokenizer import DelimitedSplitter
from return_recon.infrastructure.parsing.utils import RowReader, digits_only

BANK_CODE = "SISTEMA"

STATUS_SETTLED = "LIQUIDADO"
STATUS_OPEN = "EM ABERTO"

REQUIRED_LEDGER = ("CLIENTE", "CPF/CNPJ", "FATURA", "VENCIMENTO", "VALOR FATURA")

COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "CLIENTE": ("CLIENTE",),
    "CPF/CNPJ": ("CPF/CNPJ", "CNPJ", "CPF"),
    "EMPRESA": ("EMPRESA",),
    "FATURA": ("FATURA",),
    "PARCELA": ("PARCELA",),
    "DOCUMENTO": ("DOCUMENTO",),
    "PORTADOR": ("PORTADOR",),
    "EMISSAO": ("EMISSAO", "EMISSÃO"),
    "VENC.ORIG.": ("VENC.ORIG.", "VENC.ORIG", "VENC ORIG"),
    "VENCIMENTO": ("VENCIMENTO",),
    "LIQUIDACAO": ("LIQUIDACAO", "LIQUIDAÇÃO"),
    "VALOR FATURA": ("VALOR FATURA", "VALOR"),
}


def canonical_header(header: Sequence[str]) -> list[str]:
    """Rename columns to their canonical names.

    Exact alias matches are taken first; remaining columns are matched by
    case-insensitive containment, trying aliases in priority order, so a
    decorated header such as ``VALOR FATURA (R$)`` still resolves. Each source
    column is claimed at most once.
    """
    upper = [column.strip().upper() for column in header]
    resolved = list(header)
    claimed: set[int] = set()
    pending = []
    for name, aliases in COLUMN_ALIASES.items():
        position = next((i for i, col in enumerate(upper) if col in aliases and i not in claimed), None)
        if position is None:
            pending.append((name, aliases))
            continue
        resolved[position] = name
        claimed.add(position)

    for name, aliases in pending:
        for alias in aliases:
            position = next((i for i, col in enumerate(upper) if alias in col and i not in claimed), None)
            if position is not None:
                resolved[position] = name
                claimed.add(position)
                break
    return resolved


@dataclass(frozen=True)
class SistemaAdapter:
    bank_code: str = BANK_CODE
    splitter: LineSplitter = field(default_factory=DelimitedSplitter)

    def normalize_header(self, header: Sequence[str]) -> list[str]:
        return canonical_header(header)

    def recognizes(self, header: Sequence[str]) -> bool:
        columns = set(canonical_header(header))
        return {"CLIENTE", "CPF/CNPJ", "FATURA", "LIQUIDACAO"} <= columns

    def detect_variant(self, header: Sequence[str]) -> Variant:
        if not self.recognizes(header):
            raise UnclassifiedFormatError(self.bank_code)
        return Variant.LEDGER

    def required_columns(self, variant: Variant) -> Sequence[str]:
        if variant is not Variant.LEDGER:
            raise UnclassifiedFormatError(self.bank_code)
        return REQUIRED_LEDGER

    def build_record(
        self,
        header: Sequence[str],
        fields: Sequence[str],
        variant: Variant,
        line_number: int | None = None,
    ) -> SettlementRecord:
        columns = list(header)
        reader = RowReader(columns, fields)

        name = None
        if "CLIENTE" in columns:
            name_position = columns.index("CLIENTE") + 1
            if name_position < len(columns) and not columns[name_position]:
                name = reader.at(name_position)

        settlement_date = reader.as_date("LIQUIDACAO")
        counterparty_raw = reader.text("CPF/CNPJ")
        invoice = reader.text("FATURA") or ""
        amount = reader.as_decimal("VALOR FATURA")
        return SettlementRecord(
            variant=variant,
            bank_code=self.bank_code,
            branch_id=reader.text("EMPRESA"),
            client_id=reader.text("CLIENTE"),
            bank_reference=invoice or None,
            counterparty_id_raw=counterparty_raw,
            counterparty_id_digits=digits_only(counterparty_raw),
            counterparty_name=name,
            invoice_number=invoice,
            installment_number=reader.text("PARCELA") or SETTINGS.default_installment,
            original_amount=amount,
            title_amount=amount,
            issue_date=reader.as_date("EMISSAO"),
            original_due_date=reader.as_date("VENC.ORIG."),
            due_date=reader.as_date("VENCIMENTO"),
            settlement_date=settlement_date,
            title_type=reader.text("DOCUMENTO"),
            status=STATUS_SETTLED if settlement_date else STATUS_OPEN,
            portfolio_type=reader.text("PORTADOR"),
            line_number=line_number,
            warnings=tuple(reader.warnings),
        )
