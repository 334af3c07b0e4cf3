"""Adapter interfaces anchoring the domain layer."""
from __future__ import annotations

from typing import Protocol, Sequence

from .models import SettlementRecord, Variant


class LineSplitter(Protocol):
    """Splits one physical line of a return file into raw fields."""

    def split(self, line: str) -> list[str]:
        ...


class BankFormatAdapter(Protocol):
    """Everything bank-specific the pipeline needs to read one bank's files."""

    bank_code: str
    splitter: LineSplitter

    def normalize_header(self, header: Sequence[str]) -> list[str]:
        ...

    def recognizes(self, header: Sequence[str]) -> bool:
        ...

    def detect_variant(self, header: Sequence[str]) -> Variant:
        ...

    def required_columns(self, variant: Variant) -> Sequence[str]:
        ...

    def build_record(
        self,
        header: Sequence[str],
        fields: Sequence[str],
        variant: Variant,
        line_number: int | None = None,
    ) -> SettlementRecord:
        ...
