"""
Insights and Tip Selection for fintrack.

Savings figures are computed over the month-scoped subset. The tip is
chosen by a fixed priority order; the first matching rule wins:

1. No transactions at all
2. Personal expenses exist and the split filter is not isolating shared ones
3. Spending exceeds income
4. Savings rate tiers (excellent / good / not bad)
5. Default encouragement
"""

from typing import Iterable

from fintrack.domain.entities import FilterState, SplitFilter, Transaction

from .models import Insights, Totals
from .settings import AnalyticsSettings, analytics_settings
from .totals import calculate_totals, top_expense_category

NO_CATEGORY = "N/A"

TIP_NO_DATA = "💡 Add your income and expenses to see insights!"
TIP_FAIR = "💪 Not bad! Try to increase your savings rate above 20%"
TIP_DEFAULT = "💡 Tip: Aim to save at least 20% of your income for financial security"


def savings_rate(totals: Totals) -> float:
    """
    Percent of income saved, rounded to one decimal.

    Returns 0 when there is no income rather than dividing by zero.
    """
    if totals.income <= 0:
        return 0.0
    return round(totals.net / totals.income * 100, 1)


def count_pending_split(transactions: Iterable[Transaction]) -> int:
    """Personal expenses not yet marked as shared."""
    return sum(1 for t in transactions if t.is_expense and not t.is_splitwise)


def select_tip(
    totals: Totals,
    rate: float,
    transaction_count: int,
    pending_split: int,
    top_category: str,
    split_filter: SplitFilter,
    settings: AnalyticsSettings = analytics_settings,
) -> str:
    """
    Pick the single tip shown with the insights panel.

    Args:
        totals: Totals over the scoped subset
        rate: Savings rate for the same subset
        transaction_count: Number of transactions in the subset
        pending_split: Personal expenses in the subset
        top_category: Largest expense category (or ``N/A``)
        split_filter: Active split filter
        settings: Analytics settings

    Returns:
        Tip text
    """
    if transaction_count == 0:
        return TIP_NO_DATA

    if pending_split > 0 and split_filter != SplitFilter.SHARED:
        return (
            f"💡 You have {pending_split} personal expenses. "
            "Don't forget to add shared items to Splitwise! 👥"
        )

    if totals.expense > totals.income:
        return f"⚠️ You're spending more than you earn! Try to cut back on {top_category}"

    if rate >= settings.savings_excellent_rate:
        return f"🎉 Excellent! You're saving {rate}% of your income!"
    elif rate >= settings.savings_good_rate:
        return f"👍 Good job! You're on track with {rate}% savings rate!"
    elif rate >= settings.savings_fair_rate:
        return TIP_FAIR

    return TIP_DEFAULT


def build_insights(
    transactions: Iterable[Transaction],
    filters: FilterState,
    settings: AnalyticsSettings = analytics_settings,
) -> Insights:
    """
    Build the insights panel for an already month-scoped subset.

    Args:
        transactions: Month-scoped transactions
        filters: Active filter state (the split filter affects the tip)
        settings: Analytics settings

    Returns:
        Insights with the selected tip
    """
    subset = list(transactions)
    totals = calculate_totals(subset)
    rate = savings_rate(totals)
    top = top_expense_category(subset) or NO_CATEGORY
    pending = count_pending_split(subset)

    tip = select_tip(
        totals=totals,
        rate=rate,
        transaction_count=len(subset),
        pending_split=pending,
        top_category=top,
        split_filter=filters.split,
        settings=settings,
    )

    return Insights(
        savings=totals.net,
        savings_rate=rate,
        top_category=top,
        transaction_count=len(subset),
        pending_split=pending,
        tip=tip,
    )
