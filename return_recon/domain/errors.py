"""File-level failures raised while parsing a return file."""
from __future__ import annotations


class ReturnFileError(Exception):
    """Base class; ``code`` is a stable machine-readable identifier."""

    code = "return_file_error"


class EmptyFileError(ReturnFileError):
    code = "empty_file"

    def __init__(self) -> None:
        super().__init__("Return file is empty or has no header line")


class UnknownBankError(ReturnFileError):
    code = "unknown_bank"

    def __init__(self, bank_code: str | None, available: list[str]) -> None:
        self.bank_code = bank_code
        self.available = available
        if bank_code:
            message = f"Unsupported bank: {bank_code}. Available banks: {', '.join(available)}"
        else:
            message = f"No registered bank recognizes this header. Available banks: {', '.join(available)}"
        super().__init__(message)


class UnclassifiedFormatError(ReturnFileError):
    code = "unclassified_format"

    def __init__(self, bank_code: str) -> None:
        self.bank_code = bank_code
        super().__init__(f"Header does not match any known {bank_code} file variant")


class MissingColumnError(ReturnFileError):
    code = "missing_column"

    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"Required column not found: {column}")
