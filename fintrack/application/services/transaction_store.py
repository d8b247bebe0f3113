"""Transaction store - the canonical in-memory transaction list."""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set

import structlog

from fintrack.core.metrics import record_mutation
from fintrack.domain.entities import Transaction, TransactionType
from fintrack.domain.exceptions import InvalidTransactionException
from fintrack.application.dto import NewTransactionRequest

logger = structlog.get_logger(__name__)


class MutationKind(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    TOGGLE_SPLIT = "toggle_split"
    REPLACE_ALL = "replace_all"
    MERGE_IMPORT = "merge_import"
    CLEAR = "clear"


class MutationOrigin(str, Enum):
    """Where a mutation came from."""
    LOCAL = "local"
    REMOTE = "remote"


@dataclass(frozen=True)
class MutationEvent:
    """Passed to every post-mutation hook."""
    kind: MutationKind
    origin: MutationOrigin = MutationOrigin.LOCAL


MutationHook = Callable[[MutationEvent], None]


class IdGenerator:
    """
    Issues timestamp-derived ids in milliseconds.

    Two calls within the same millisecond would produce the same
    timestamp, so each id is bumped to at least one more than the last
    id issued, and past any id already in the store.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last = 0

    def next_id(self, taken: Set[int]) -> int:
        candidate = max(int(self._clock() * 1000), self._last + 1)
        while candidate in taken:
            candidate += 1
        self._last = candidate
        return candidate


class TransactionStore:
    """
    Single source of truth for the running process.

    Every mutation that changes the list runs the registered hooks in
    registration order. Reads return copies of the list, never the list
    itself.
    """

    def __init__(
        self,
        transactions: Optional[Iterable[Transaction]] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self._transactions: List[Transaction] = self._dedupe(transactions or [])
        self._ids = id_generator or IdGenerator()
        self._hooks: List[MutationHook] = []

    def add_hook(self, hook: MutationHook) -> None:
        """Append a post-mutation hook; hooks run in the order added."""
        self._hooks.append(hook)

    def list(self) -> List[Transaction]:
        """The current list, newest first."""
        return list(self._transactions)

    def get(self, transaction_id: int) -> Optional[Transaction]:
        for t in self._transactions:
            if t.id == transaction_id:
                return t
        return None

    def __len__(self) -> int:
        return len(self._transactions)

    def add(self, request: NewTransactionRequest) -> Transaction:
        """
        Record a new transaction at the head of the list.

        Args:
            request: Validated form input

        Returns:
            The stored transaction with its assigned id

        Raises:
            InvalidTransactionException: If the request fails validation
        """
        errors = request.validate()
        if errors:
            raise InvalidTransactionException("; ".join(errors))

        transaction = Transaction(
            id=self._ids.next_id({t.id for t in self._transactions}),
            type=TransactionType(request.type),
            description=request.description.strip(),
            category=request.category,
            amount=float(request.amount),
            date=request.date,
            is_splitwise=request.is_splitwise,
        )
        self._transactions.insert(0, transaction)

        logger.info(
            "transaction_added",
            transaction_id=transaction.id,
            type=transaction.type.value,
            amount=transaction.amount,
        )
        self._notify(MutationEvent(MutationKind.ADD))
        return transaction

    def remove(self, transaction_id: int) -> bool:
        """Delete by id. Returns False, without running hooks, if absent."""
        remaining = [t for t in self._transactions if t.id != transaction_id]
        if len(remaining) == len(self._transactions):
            return False

        self._transactions = remaining
        logger.info("transaction_removed", transaction_id=transaction_id)
        self._notify(MutationEvent(MutationKind.REMOVE))
        return True

    def toggle_split(self, transaction_id: int) -> Optional[Transaction]:
        """Flip the shared flag in place. Returns None if absent."""
        transaction = self.get(transaction_id)
        if transaction is None:
            return None

        transaction.is_splitwise = not transaction.is_splitwise
        logger.info(
            "transaction_split_toggled",
            transaction_id=transaction_id,
            is_splitwise=transaction.is_splitwise,
        )
        self._notify(MutationEvent(MutationKind.TOGGLE_SPLIT))
        return transaction

    def replace_all(
        self,
        transactions: Iterable[Transaction],
        origin: MutationOrigin = MutationOrigin.LOCAL,
    ) -> int:
        """
        Discard the current list and take the given one.

        Later records repeating an earlier id are dropped so ids stay
        unique.

        Returns:
            Number of transactions now in the store
        """
        self._transactions = self._dedupe(transactions)
        logger.info(
            "transactions_replaced",
            count=len(self._transactions),
            origin=origin.value,
        )
        self._notify(MutationEvent(MutationKind.REPLACE_ALL, origin))
        return len(self._transactions)

    def merge_import(self, transactions: Iterable[Transaction]) -> int:
        """
        Append incoming records whose id is not already present.

        A colliding record is discarded whole; the existing one is never
        updated.

        Returns:
            Number of records appended
        """
        seen = {t.id for t in self._transactions}
        added = []
        for t in transactions:
            if t.id in seen:
                continue
            seen.add(t.id)
            added.append(t)

        if not added:
            logger.info("transactions_merged", added=0)
            return 0

        self._transactions.extend(added)
        logger.info("transactions_merged", added=len(added), total=len(self._transactions))
        self._notify(MutationEvent(MutationKind.MERGE_IMPORT))
        return len(added)

    def clear(self) -> int:
        """Delete every transaction. Returns how many were removed."""
        removed = len(self._transactions)
        if removed == 0:
            return 0

        self._transactions = []
        logger.info("transactions_cleared", removed=removed)
        self._notify(MutationEvent(MutationKind.CLEAR))
        return removed

    def _notify(self, event: MutationEvent) -> None:
        record_mutation(event.kind.value)
        for hook in self._hooks:
            hook(event)

    @staticmethod
    def _dedupe(transactions: Iterable[Transaction]) -> List[Transaction]:
        seen: Set[int] = set()
        result = []
        for t in transactions:
            if t.id in seen:
                logger.warning("duplicate_transaction_id_dropped", transaction_id=t.id)
                continue
            seen.add(t.id)
            result.append(t)
        return result
