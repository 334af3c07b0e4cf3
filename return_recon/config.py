"""Central configuration for the return reconciliation package."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Context


@dataclass(slots=True, frozen=True)
class Settings:
    decimal_context: Context
    delimiter: str
    quote_chars: str
    default_installment: str
    other_status_bucket: str
    max_workers: int
    encoding: str


SETTINGS = Settings(
    decimal_context=Context(prec=28),
    delimiter=";",
    quote_chars="\"'",
    default_installment="001",
    other_status_bucket="OTHER",
    max_workers=4,
    encoding="utf-8",
)
