"""
Data models for derived dashboard views.

Every model here is computed from the transaction list and the active
filters; none of them is ever persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass(frozen=True)
class Totals:
    """Income, expense and net over a subset of transactions."""
    income: float
    expense: float

    @property
    def net(self) -> float:
        return self.income - self.expense


@dataclass(frozen=True)
class CategoryTotal:
    """Summed amount for one category."""
    category: str
    total: float


@dataclass(frozen=True)
class MonthlyPoint:
    """
    Income and expense sums for one calendar month.

    Attributes:
        month: ``YYYY-MM`` key
        label: Short display label, e.g. ``Oct 26``
    """
    month: str
    label: str
    income: float
    expense: float


class BudgetBand(str, Enum):
    """Budget consumption classification."""
    ON_TRACK = "on_track"
    MIDWAY = "midway"
    WARNING = "warning"
    EXCEEDED = "exceeded"


@dataclass(frozen=True)
class BudgetProgress:
    """
    This calendar month's spending against the monthly budget.

    ``percentage`` is clamped to 100 for display.
    """
    spent: float
    budget: float
    percentage: float
    band: BudgetBand
    message: str


@dataclass(frozen=True)
class Insights:
    """
    Savings figures and the tip shown for the active filter scope.

    Attributes:
        savings_rate: Percent of income saved, one decimal (0 without income)
        top_category: Largest expense category, or ``N/A``
        pending_split: Personal expenses that may need sharing
    """
    savings: float
    savings_rate: float
    top_category: str
    transaction_count: int
    pending_split: int
    tip: str


@dataclass(frozen=True)
class QuickStats:
    """Headline numbers independent of the month filter."""
    month_expense: float
    daily_average: float
    top_category: str
    total_transactions: int


@dataclass(frozen=True)
class CategoryBreakdown:
    """Per-category sums for both transaction types."""
    income: List[CategoryTotal] = field(default_factory=list)
    expense: List[CategoryTotal] = field(default_factory=list)
