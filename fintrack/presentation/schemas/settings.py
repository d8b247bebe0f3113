"""User settings Pydantic schemas."""

from typing import Optional

from pydantic import BaseModel, Field

from fintrack.domain.entities import Theme


class BudgetUpdateSchema(BaseModel):
    """
    Schema for PUT /v1/settings/budget.

    Positivity is enforced by the application layer (INVALID_BUDGET).
    """

    amount: float = Field(..., examples=[1500.0])


class ThemeUpdateSchema(BaseModel):
    """Schema for PUT /v1/settings/theme."""

    theme: Theme = Field(..., examples=["light"])


class SettingsSchema(BaseModel):
    """Schema for the current user settings."""

    budget: float
    theme: Theme
    storage_warning: Optional[str] = None
