"""Registry of bank format adapters keyed by bank code."""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from return_recon.domain.adapters import BankFormatAdapter
from return_recon.domain.errors import UnknownBankError
from return_recon.infrastructure.parsing.confianca import ConfiancaAdapter
from return_recon.infrastructure.parsing.sistema import SistemaAdapter
from return_recon.infrastructure.parsing.tokenizer import read_header

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """Holds the adapters a caller wants available; built explicitly, never global."""

    def __init__(self, adapters: Iterable[BankFormatAdapter] = ()) -> None:
        self._adapters: dict[str, BankFormatAdapter] = {}
        for adapter in adapters:
            self.register(adapter)

    def register(self, adapter: BankFormatAdapter) -> None:
        code = adapter.bank_code.upper()
        if code in self._adapters:
            raise ValueError(f"Adapter already registered for bank {code}")
        self._adapters[code] = adapter

    def __contains__(self, bank_code: object) -> bool:
        return isinstance(bank_code, str) and bank_code.upper() in self._adapters

    def bank_codes(self) -> list[str]:
        return list(self._adapters)

    def get(self, bank_code: str) -> BankFormatAdapter:
        adapter = self._adapters.get(bank_code.strip().upper())
        if adapter is None:
            raise UnknownBankError(bank_code, self.bank_codes())
        return adapter

    def detect(self, text: str, hint: str | None = None) -> BankFormatAdapter:
        """Pick the adapter whose header signature matches ``text``.

        ``hint`` (usually derived from a file name) only breaks ties; the
        header content decides.
        """
        candidates = self._recognizing(text)
        if not candidates:
            raise UnknownBankError(None, self.bank_codes())
        if hint:
            hinted = hint.upper()
            for adapter in candidates:
                if adapter.bank_code.upper() in hinted:
                    return adapter
            logger.debug("Bank hint %s does not match header; using content detection", hint)
        return candidates[0]

    def _recognizing(self, text: str) -> Sequence[BankFormatAdapter]:
        matches: list[BankFormatAdapter] = []
        for adapter in self._adapters.values():
            header = read_header(text, adapter.splitter)
            if adapter.recognizes(header):
                matches.append(adapter)
        return matches


def build_default_registry() -> AdapterRegistry:
    return AdapterRegistry([ConfiancaAdapter(), SistemaAdapter()])
