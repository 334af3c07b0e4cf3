"""Bank return-file ingestion and reconciliation toolkit."""
from return_recon.application.dto import BatchSummary, FileFailure, ReturnFile
from return_recon.application.use_cases import ProcessReturnBatchUseCase, ProcessReturnFileUseCase
from return_recon.domain.models import ParseWarning, SettlementRecord, Variant
from return_recon.domain.results import CounterpartyGroup, InvoiceGroup, ProcessResult, ReturnFileStats
from return_recon.domain.services import StatsAggregator, group_by_counterparty, group_by_invoice
from return_recon.infrastructure.registry import AdapterRegistry, build_default_registry

__all__ = [
    "AdapterRegistry",
    "BatchSummary",
    "CounterpartyGroup",
    "FileFailure",
    "InvoiceGroup",
    "ParseWarning",
    "ProcessResult",
    "ProcessReturnBatchUseCase",
    "ProcessReturnFileUseCase",
    "ReturnFile",
    "ReturnFileStats",
    "SettlementRecord",
    "StatsAggregator",
    "Variant",
    "build_default_registry",
    "group_by_counterparty",
    "group_by_invoice",
]
