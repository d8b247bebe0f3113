"""Transaction-related Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fintrack.application.dto import MutationResult
from fintrack.domain.entities import Transaction, TransactionType


class TransactionCreateSchema(BaseModel):
    """
    Schema for POST /v1/transactions request body.

    Field content is checked by the application layer so that form
    mistakes come back as INVALID_TRANSACTION errors.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": "expense",
                    "description": "Groceries",
                    "category": "🍔 Food & Dining",
                    "amount": 42.5,
                    "date": "2026-10-19",
                    "is_splitwise": False,
                }
            ]
        }
    )
    type: str = Field(..., description="income or expense", examples=["expense"])
    description: str = Field(..., max_length=500, examples=["Groceries"])
    category: str = Field(..., max_length=100, examples=["🍔 Food & Dining"])
    amount: float = Field(..., description="Positive amount", examples=[42.5])
    date: str = Field(..., description="YYYY-MM-DD", examples=["2026-10-19"])
    is_splitwise: bool = Field(False, description="Shared with others")


class TransactionSchema(BaseModel):
    """Schema for a stored transaction."""

    id: int
    type: TransactionType
    description: str
    category: str
    amount: float
    date: str
    is_splitwise: bool

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionSchema":
        return cls(
            id=transaction.id,
            type=transaction.type,
            description=transaction.description,
            category=transaction.category,
            amount=transaction.amount,
            date=transaction.date,
            is_splitwise=transaction.is_splitwise,
        )


class TransactionListSchema(BaseModel):
    """Schema for the filtered transaction list."""

    count: int = Field(..., ge=0)
    transactions: List[TransactionSchema]


class MutationResponseSchema(BaseModel):
    """Schema for the outcome of a mutation."""

    message: str = Field(..., examples=["Expense added: -$42.50 💸"])
    changed: bool = Field(..., description="False when the target did not exist")
    transaction: Optional[TransactionSchema] = None
    storage_warning: Optional[str] = Field(
        None,
        description="Set when the change could not be saved to local storage",
    )

    @classmethod
    def from_result(cls, result: MutationResult) -> "MutationResponseSchema":
        return cls(
            message=result.message,
            changed=result.changed,
            transaction=(
                TransactionSchema.from_entity(result.transaction)
                if result.transaction else None
            ),
            storage_warning=result.storage_warning,
        )


class CategoriesSchema(BaseModel):
    """Schema for the fixed category sets."""

    income: List[str]
    expense: List[str]
