"""Domain Entities - Core business objects."""

from .categories import EXPENSE_CATEGORIES, INCOME_CATEGORIES, categories_for
from .filters import FilterState, PeriodFilter, SplitFilter, TypeFilter
from .preferences import SyncCredentials, Theme
from .transaction import Transaction, TransactionType, is_positive_amount, parse_iso_date

__all__ = [
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "categories_for",
    "FilterState",
    "PeriodFilter",
    "SplitFilter",
    "TypeFilter",
    "SyncCredentials",
    "Theme",
    "Transaction",
    "TransactionType",
    "is_positive_amount",
    "parse_iso_date",
]
