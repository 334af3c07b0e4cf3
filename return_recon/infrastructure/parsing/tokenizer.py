"""Splits raw return-file text into a header and data rows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from return_recon.config import SETTINGS
from return_recon.domain.adapters import LineSplitter
from return_recon.domain.errors import EmptyFileError
from return_recon.infrastructure.parsing.utils import clean_token

_BOM = "\ufeff"


@dataclass(frozen=True)
class DelimitedSplitter:
    delimiter: str = SETTINGS.delimiter

    def split(self, line: str) -> list[str]:
        return line.split(self.delimiter)


@dataclass(frozen=True)
class FixedWidthSplitter:
    """Slices a line into consecutive fields of the given widths."""

    widths: Sequence[int]

    def split(self, line: str) -> list[str]:
        fields: list[str] = []
        start = 0
        for width in self.widths:
            fields.append(line[start:start + width])
            start += width
        return fields


@dataclass(frozen=True)
class TokenizedRow:
    line_number: int
    fields: Sequence[str]


@dataclass(frozen=True)
class TokenizedFile:
    header: Sequence[str]
    rows: Sequence[TokenizedRow] = field(default_factory=tuple)


def split_fields(line: str, splitter: LineSplitter) -> list[str]:
    return [clean_token(token) for token in splitter.split(line)]


def read_header(text: str, splitter: LineSplitter | None = None) -> list[str]:
    splitter = splitter or DelimitedSplitter()
    text = text.lstrip(_BOM)
    for line in text.splitlines():
        if line.strip():
            return split_fields(line, splitter)
    raise EmptyFileError()


def tokenize(text: str, splitter: LineSplitter | None = None) -> TokenizedFile:
    splitter = splitter or DelimitedSplitter()
    text = text.lstrip(_BOM)
    header: list[str] | None = None
    rows: list[TokenizedRow] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        fields = split_fields(line, splitter)
        if header is None:
            header = fields
            continue
        rows.append(TokenizedRow(line_number=line_number, fields=tuple(fields)))
    if header is None:
        raise EmptyFileError()
    return TokenizedFile(header=tuple(header), rows=tuple(rows))
