"""Application-level DTOs for return-file processing."""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Any, Sequence

from return_recon.domain.results import ProcessResult


@dataclass(slots=True, frozen=True)
class ReturnFile:
    file_name: str
    content: str | bytes | Path
    bank_code: str | None = None


@dataclass(slots=True, frozen=True)
class FileFailure:
    file_name: str
    error: str
    error_code: str | None = None


@dataclass(slots=True, frozen=True)
class BatchSummary:
    total_files: int
    succeeded: int
    failed: Sequence[FileFailure]
    aggregate_balance: Decimal
    results: Sequence[ProcessResult] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files,
            "succeeded": self.succeeded,
            "failed": [
                {"file_name": f.file_name, "error": f.error, "error_code": f.error_code}
                for f in self.failed
            ],
            "aggregate_balance": str(self.aggregate_balance),
        }
