"""Transaction entity representing one recorded income or expense."""

import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict

ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


def is_positive_amount(value: Any) -> bool:
    """True for a finite number greater than zero (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def parse_iso_date(value: Any) -> str:
    """
    Validate a calendar date in the zero-padded ``YYYY-MM-DD`` form.

    Month, period and series filters compare date strings, so only the
    padded form is accepted.

    Raises:
        ValueError: If the value is not a real date in that form
    """
    if not isinstance(value, str) or not ISO_DATE.fullmatch(value):
        raise ValueError(f"Date must be YYYY-MM-DD: {value!r}")
    return date.fromisoformat(value).isoformat()


@dataclass
class Transaction:
    """
    A single income or expense record.

    Only ``is_splitwise`` changes after creation; every other field is
    fixed once the record enters the store.

    Attributes:
        id: Timestamp-derived identifier, unique within the store
        type: Income or expense
        description: Free-form text entered by the user
        category: Category label (see ``categories``)
        amount: Positive amount in currency units
        date: Calendar date as ``YYYY-MM-DD``
        is_splitwise: True when the expense is shared with others
    """

    id: int
    type: TransactionType
    description: str
    category: str
    amount: float
    date: str
    is_splitwise: bool = False

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    @property
    def month(self) -> str:
        """The ``YYYY-MM`` month the transaction falls in."""
        return self.date[:7]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the storage/interchange field names."""
        return {
            "id": self.id,
            "type": self.type.value,
            "description": self.description,
            "category": self.category,
            "amount": self.amount,
            "date": self.date,
            "isSplitwise": self.is_splitwise,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """
        Build a transaction from its storage/interchange form.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ValueError("Transaction record must be an object")

        try:
            raw_id = data["id"]
            raw_type = data["type"]
            raw_amount = data["amount"]
            raw_date = data["date"]
        except KeyError as e:
            raise ValueError(f"Transaction record missing field: {e.args[0]}")

        if isinstance(raw_id, bool) or not isinstance(raw_id, (int, float)):
            raise ValueError(f"Invalid transaction id: {raw_id!r}")
        if isinstance(raw_id, float) and not raw_id.is_integer():
            raise ValueError(f"Invalid transaction id: {raw_id!r}")
        if not is_positive_amount(raw_amount):
            raise ValueError(f"Amount must be a positive number: {raw_amount!r}")

        return cls(
            id=int(raw_id),
            type=TransactionType(raw_type),
            description=str(data.get("description", "")),
            category=str(data.get("category", "")),
            amount=float(raw_amount),
            date=parse_iso_date(raw_date),
            is_splitwise=bool(data.get("isSplitwise", False)),
        )
