"""Fixed category sets, one per transaction type."""

from typing import Tuple

from .transaction import TransactionType

INCOME_CATEGORIES: Tuple[str, ...] = (
    "💼 Salary",
    "💰 Freelance",
    "📈 Investment",
    "🎁 Gift",
    "🏦 Interest",
    "💵 Other Income",
)

EXPENSE_CATEGORIES: Tuple[str, ...] = (
    "🍔 Food & Dining",
    "🚗 Transportation",
    "🏠 Housing",
    "🛒 Shopping",
    "🎬 Entertainment",
    "💊 Healthcare",
    "📚 Education",
    "✈️ Travel",
    "💡 Utilities",
    "💳 Other Expense",
)


def categories_for(txn_type: TransactionType) -> Tuple[str, ...]:
    """Return the category labels offered for a transaction type."""
    if txn_type == TransactionType.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES
