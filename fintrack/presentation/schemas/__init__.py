"""Pydantic schemas for API request/response validation."""

from .transaction import (
    CategoriesSchema,
    MutationResponseSchema,
    TransactionCreateSchema,
    TransactionListSchema,
    TransactionSchema,
)
from .dashboard import DashboardSchema, FiltersSchema, FilterUpdateSchema
from .settings import BudgetUpdateSchema, SettingsSchema, ThemeUpdateSchema
from .sync import ConnectRequestSchema, SyncResultSchema, SyncStatusSchema
from .data import ImportResultSchema
from .error import ErrorResponseSchema

__all__ = [
    "CategoriesSchema",
    "MutationResponseSchema",
    "TransactionCreateSchema",
    "TransactionListSchema",
    "TransactionSchema",
    "DashboardSchema",
    "FiltersSchema",
    "FilterUpdateSchema",
    "BudgetUpdateSchema",
    "SettingsSchema",
    "ThemeUpdateSchema",
    "ConnectRequestSchema",
    "SyncResultSchema",
    "SyncStatusSchema",
    "ImportResultSchema",
    "ErrorResponseSchema",
]
