"""Shared field normalizers for Brazilian-locale return files."""
from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
import re
from typing import Sequence

from return_recon.config import SETTINGS
from return_recon.domain.models import ParseWarning

_NON_DIGITS = re.compile(r"\D")
_CURRENCY_PREFIX = re.compile(r"^R\$\s*", re.IGNORECASE)
_PLAIN_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)", re.ASCII)


def clean_token(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip().strip(SETTINGS.quote_chars).strip()


def try_parse_br_decimal(value: object) -> Decimal | None:
    """Parse ``1.234,56`` style amounts; ``None`` when the token is not a number."""
    s = clean_token(value)
    if not s:
        return Decimal("0")
    s = _CURRENCY_PREFIX.sub("", s).replace(" ", "")
    s = s.replace(".", "").replace(",", ".")
    if not _PLAIN_NUMBER.fullmatch(s):
        return None
    try:
        result = Decimal(s)
    except InvalidOperation:
        return None
    # wider than the working precision
    if result and result.adjusted() >= SETTINGS.decimal_context.prec:
        return None
    return result


def parse_br_decimal(value: object) -> Decimal:
    result = try_parse_br_decimal(value)
    return Decimal("0") if result is None else result


def parse_br_date_strict(value: object) -> date | None:
    """Parse ``DD/MM/YYYY``; empty is ``None``, anything else malformed raises ``ValueError``."""
    s = clean_token(value)
    if not s:
        return None
    parts = s.split("/")
    if len(parts) != 3 or not all(p.strip().isdigit() for p in parts):
        raise ValueError(f"expected DD/MM/YYYY, got {s!r}")
    day, month, year = (int(p) for p in parts)
    return date(year, month, day)


def parse_br_date(value: object) -> date | None:
    try:
        return parse_br_date_strict(value)
    except ValueError:
        return None


def try_parse_int(value: object) -> int | None:
    s = clean_token(value)
    if not s:
        return 0
    try:
        return int(s)
    except ValueError:
        return None


def digits_only(value: object) -> str:
    return _NON_DIGITS.sub("", clean_token(value))


def split_document(value: object, default_installment: str | None = None) -> tuple[str, str]:
    """Split ``573456/001`` into invoice and installment."""
    default_installment = default_installment or SETTINGS.default_installment
    s = clean_token(value)
    parts = s.split("/")
    invoice = parts[0].strip() or s
    installment = parts[1].strip() if len(parts) > 1 else ""
    return invoice, installment or default_installment


class RowReader:
    """Column access over one data row that records normalization problems."""

    def __init__(self, header: Sequence[str], fields: Sequence[str]) -> None:
        self._index: dict[str, int] = {}
        for idx, column in enumerate(header):
            self._index.setdefault(column, idx)
        self._fields = fields
        self.warnings: list[ParseWarning] = []
        if len(fields) != len(header):
            self.warnings.append(
                ParseWarning(
                    column="*",
                    value=str(len(fields)),
                    reason=f"expected {len(header)} fields, got {len(fields)}",
                )
            )

    def raw(self, column: str) -> str | None:
        idx = self._index.get(column)
        if idx is None or idx >= len(self._fields):
            return None
        return self._fields[idx]

    def at(self, position: int) -> str | None:
        if position < 0 or position >= len(self._fields):
            return None
        return self._fields[position] or None

    def text(self, column: str) -> str | None:
        return self.raw(column) or None

    def as_decimal(self, column: str) -> Decimal:
        value = self.raw(column)
        result = try_parse_br_decimal(value)
        if result is None:
            self.warnings.append(ParseWarning(column, str(value), "not a number, using 0"))
            return Decimal("0")
        return result

    def as_date(self, column: str) -> date | None:
        value = self.raw(column)
        try:
            return parse_br_date_strict(value)
        except ValueError:
            self.warnings.append(ParseWarning(column, str(value), "not a DD/MM/YYYY date"))
            return None

    def as_int(self, column: str) -> int:
        value = self.raw(column)
        result = try_parse_int(value)
        if result is None:
            self.warnings.append(ParseWarning(column, str(value), "not an integer, using 0"))
            return 0
        return result
