"""User input validation exceptions."""

from .base import DomainException


class InvalidTransactionException(DomainException):
    """Raised when a new transaction fails validation."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_TRANSACTION",
        )


class InvalidBudgetException(DomainException):
    """Raised when a budget value is not a positive number."""

    def __init__(self, amount: object):
        super().__init__(
            message=f"Budget must be a positive amount: {amount}",
            code="INVALID_BUDGET",
        )
        self.amount = amount


class InvalidImportFileException(DomainException):
    """Raised when an import file does not have the backup shape."""

    def __init__(self, message: str = "Invalid file format"):
        super().__init__(
            message=message,
            code="INVALID_IMPORT_FILE",
        )


class NothingToExportException(DomainException):
    """Raised when an export is requested with no transactions."""

    def __init__(self):
        super().__init__(
            message="No data to export. Add some transactions first.",
            code="NOTHING_TO_EXPORT",
        )
