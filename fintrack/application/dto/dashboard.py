"""Data transfer objects for derived dashboard views."""

from dataclasses import dataclass, field
from typing import List, Optional

from fintrack.domain.entities import FilterState, Transaction
from fintrack.service.analytics import (
    BudgetProgress,
    CategoryBreakdown,
    Insights,
    MonthlyPoint,
    QuickStats,
    Totals,
)


@dataclass(frozen=True)
class DashboardView:
    """Every derived view, recomputed from the full list and filters."""
    filters: FilterState
    totals: Totals
    breakdown: CategoryBreakdown
    monthly: List[MonthlyPoint]
    budget: BudgetProgress
    insights: Insights
    quick_stats: QuickStats
    transactions: List[Transaction] = field(default_factory=list)
    storage_warning: Optional[str] = None
