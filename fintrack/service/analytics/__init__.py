"""
Aggregation Module for fintrack dashboard views
"""

from .models import (
    Totals,
    CategoryTotal,
    CategoryBreakdown,
    MonthlyPoint,
    BudgetBand,
    BudgetProgress,
    Insights,
    QuickStats,
)
from .settings import AnalyticsSettings, analytics_settings
from .filters import (
    apply_filters,
    apply_predicates,
    month_scope,
    month_predicate,
    search_predicate,
    type_predicate,
    period_predicate,
    split_predicate,
)
from .totals import calculate_totals, category_totals, category_breakdown, top_expense_category
from .timeline import monthly_series, trailing_months
from .budget import BUDGET_MESSAGES, budget_progress, classify_budget, month_expense
from .insights import build_insights, savings_rate, select_tip
from .stats import quick_stats

__all__ = [
    # Settings
    "AnalyticsSettings",
    "analytics_settings",
    # Models
    "Totals",
    "CategoryTotal",
    "CategoryBreakdown",
    "MonthlyPoint",
    "BudgetBand",
    "BudgetProgress",
    "Insights",
    "QuickStats",
    # Filters
    "apply_filters",
    "apply_predicates",
    "month_scope",
    "month_predicate",
    "search_predicate",
    "type_predicate",
    "period_predicate",
    "split_predicate",
    # Totals
    "calculate_totals",
    "category_totals",
    "category_breakdown",
    "top_expense_category",
    # Timeline
    "monthly_series",
    "trailing_months",
    # Budget
    "BUDGET_MESSAGES",
    "budget_progress",
    "classify_budget",
    "month_expense",
    # Insights
    "build_insights",
    "savings_rate",
    "select_tip",
    # Stats
    "quick_stats",
]
