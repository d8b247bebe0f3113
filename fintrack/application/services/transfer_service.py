"""Transfer service - backup export and import."""

from datetime import date, datetime, timezone
from typing import Any, Optional

import structlog

from fintrack.domain.entities import Transaction
from fintrack.domain.exceptions import InvalidImportFileException, NothingToExportException
from fintrack.application.dto import ExportResult, ImportMode, ImportResult
from .transaction_store import TransactionStore

logger = structlog.get_logger(__name__)


class TransferService:
    """Builds backup documents and applies imported ones to the store."""

    def __init__(self, store: TransactionStore, app_version: str = "1.0"):
        self._store = store
        self._app_version = app_version

    def export(self, now: Optional[datetime] = None) -> ExportResult:
        """
        Build a backup of the whole list.

        Raises:
            NothingToExportException: If there are no transactions
        """
        transactions = self._store.list()
        if not transactions:
            raise NothingToExportException()

        now = now or datetime.now(timezone.utc)
        document = {
            "exportDate": now.isoformat().replace("+00:00", "Z"),
            "appVersion": self._app_version,
            "transactions": [t.to_dict() for t in transactions],
        }

        logger.info("transactions_exported", count=len(transactions))
        return ExportResult(
            filename=backup_filename(now.date()),
            document=document,
        )

    def import_document(self, document: Any, mode: ImportMode) -> ImportResult:
        """
        Apply a backup document to the store.

        Every record is validated before the store is touched, so a bad
        file never leaves a partial import behind.

        Args:
            document: Parsed backup content
            mode: Merge by id or replace wholesale

        Raises:
            InvalidImportFileException: If the document shape or any record is invalid
        """
        if not isinstance(document, dict) or not isinstance(document.get("transactions"), list):
            raise InvalidImportFileException()

        records = []
        for index, item in enumerate(document["transactions"]):
            try:
                records.append(Transaction.from_dict(item))
            except ValueError as e:
                raise InvalidImportFileException(
                    f"Invalid file format: transaction {index}: {e}"
                ) from e

        if mode == ImportMode.MERGE:
            imported = self._store.merge_import(records)
        elif mode == ImportMode.REPLACE:
            imported = self._store.replace_all(records)
        else:
            raise ValueError(f"Unknown import mode: {mode!r}")

        result = ImportResult(
            mode=mode,
            received=len(records),
            imported=imported,
            skipped=len(records) - imported,
            total=len(self._store),
        )
        logger.info(
            "transactions_imported",
            mode=mode.value,
            imported=result.imported,
            skipped=result.skipped,
        )
        return result


def backup_filename(day: date) -> str:
    """Suggested file name for a backup taken on ``day``."""
    return f"finance-tracker-backup-{day.isoformat()}.json"
