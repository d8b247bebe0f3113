"""Data transfer objects for transaction operations."""

from dataclasses import dataclass
from typing import List, Optional

from fintrack.domain.entities import (
    Transaction,
    TransactionType,
    categories_for,
    is_positive_amount,
    parse_iso_date,
)


@dataclass(frozen=True)
class NewTransactionRequest:
    """Input data for recording a new transaction."""
    type: str
    description: str
    category: str
    amount: float
    date: str
    is_splitwise: bool = False

    def validate(self) -> List[str]:
        errors = []

        try:
            txn_type = TransactionType(self.type)
        except ValueError:
            txn_type = None
            errors.append("type must be 'income' or 'expense'")

        if not self.description or not self.description.strip():
            errors.append("description is required")

        if not is_positive_amount(self.amount):
            errors.append("amount must be positive")

        if not self.category:
            errors.append("category is required")
        elif txn_type is not None and self.category not in categories_for(txn_type):
            errors.append(f"category '{self.category}' is not a {txn_type.value} category")

        try:
            parse_iso_date(self.date)
        except ValueError:
            errors.append("date must be YYYY-MM-DD")

        return errors


@dataclass(frozen=True)
class MutationResult:
    """
    Outcome of a store mutation.

    ``changed`` is False when the target id did not exist. The message is
    the short confirmation a client would show to the user.
    """
    message: str
    changed: bool = True
    transaction: Optional[Transaction] = None
    storage_warning: Optional[str] = None
