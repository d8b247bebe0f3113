"""Persistence service - reads and writes the local storage slots."""

import json
from typing import List

import structlog

from fintrack.core.metrics import record_persistence_failure
from fintrack.domain.entities import SyncCredentials, Theme, Transaction, is_positive_amount
from fintrack.domain.exceptions import PersistenceException
from fintrack.domain.interfaces import KeyValueStore

logger = structlog.get_logger(__name__)

TRANSACTIONS_KEY = "finance-tracker-transactions"
BUDGET_KEY = "finance-tracker-budget"
THEME_KEY = "finance-tracker-theme"
CREDENTIALS_KEY = "finance-tracker-github-config"


class PersistenceService:
    """
    Saves and loads each slot independently.

    Saves overwrite the whole slot. Loads treat a missing or unparseable
    value as "no data" and fall back to a default; storage failures raise
    PersistenceException in both directions.
    """

    def __init__(self, store: KeyValueStore, default_budget: float = 1000.0):
        self._store = store
        self._default_budget = default_budget

    # === Transactions ===

    def save_transactions(self, transactions: List[Transaction]) -> None:
        self._write(
            TRANSACTIONS_KEY,
            json.dumps([t.to_dict() for t in transactions], ensure_ascii=False),
        )

    def load_transactions(self) -> List[Transaction]:
        """
        Load the saved list, or an empty list when absent or unparseable.

        Individual malformed records are skipped with a warning.
        """
        data = self._read_json(TRANSACTIONS_KEY)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("stored_value_unparseable", key=TRANSACTIONS_KEY)
            return []

        transactions = []
        for index, item in enumerate(data):
            try:
                transactions.append(Transaction.from_dict(item))
            except ValueError as e:
                logger.warning(
                    "stored_transaction_skipped",
                    index=index,
                    error=str(e),
                )
        return transactions

    # === Budget ===

    def save_budget(self, amount: float) -> None:
        self._write(BUDGET_KEY, json.dumps(amount))

    def load_budget(self) -> float:
        data = self._read_json(BUDGET_KEY)
        if not is_positive_amount(data):
            if data is not None:
                logger.warning("stored_value_unparseable", key=BUDGET_KEY)
            return self._default_budget
        return float(data)

    # === Theme ===

    def save_theme(self, theme: Theme) -> None:
        self._write(THEME_KEY, theme.value)

    def load_theme(self) -> Theme:
        raw = self._read(THEME_KEY)
        if raw is None:
            return Theme.DARK
        try:
            return Theme(raw)
        except ValueError:
            logger.warning("stored_value_unparseable", key=THEME_KEY)
            return Theme.DARK

    # === Remote sync credentials ===

    def save_credentials(self, credentials: SyncCredentials) -> None:
        self._write(CREDENTIALS_KEY, json.dumps(credentials.to_dict()))

    def load_credentials(self) -> SyncCredentials:
        data = self._read_json(CREDENTIALS_KEY)
        if not isinstance(data, dict):
            if data is not None:
                logger.warning("stored_value_unparseable", key=CREDENTIALS_KEY)
            return SyncCredentials()
        return SyncCredentials.from_dict(data)

    # === Helpers ===

    def _read(self, key: str):
        try:
            return self._store.get(key)
        except PersistenceException:
            record_persistence_failure(key)
            raise

    def _read_json(self, key: str):
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("stored_value_unparseable", key=key)
            return None

    def _write(self, key: str, value: str) -> None:
        try:
            self._store.set(key, value)
        except PersistenceException:
            record_persistence_failure(key)
            raise
