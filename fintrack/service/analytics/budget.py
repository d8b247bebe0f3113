"""
Budget Consumption for the current calendar month.

Only expenses dated in the month containing ``today`` count; the month
filter chosen by the user does not affect the budget bar.
"""

from datetime import date
from typing import Iterable, Optional

from fintrack.domain.entities import Transaction, TransactionType

from .models import BudgetBand, BudgetProgress
from .settings import AnalyticsSettings, analytics_settings

BUDGET_MESSAGES = {
    BudgetBand.EXCEEDED: "🚨 Budget exceeded! Time to cut back.",
    BudgetBand.WARNING: "⚠️ Almost there! Spend carefully.",
    BudgetBand.MIDWAY: "📊 Halfway through your budget.",
    BudgetBand.ON_TRACK: "💪 On track! Keep it up!",
}


def month_expense(transactions: Iterable[Transaction], today: date) -> float:
    """Sum of expenses dated in the month containing ``today``."""
    current = today.strftime("%Y-%m")
    return sum(
        t.amount for t in transactions
        if t.type == TransactionType.EXPENSE and t.month == current
    )


def classify_budget(
    percentage: float,
    settings: AnalyticsSettings = analytics_settings,
) -> BudgetBand:
    """Map a consumption percentage onto a band."""
    if percentage >= settings.budget_exceeded_pct:
        return BudgetBand.EXCEEDED
    elif percentage >= settings.budget_warning_pct:
        return BudgetBand.WARNING
    elif percentage >= settings.budget_midway_pct:
        return BudgetBand.MIDWAY
    return BudgetBand.ON_TRACK


def budget_progress(
    transactions: Iterable[Transaction],
    monthly_budget: float,
    today: Optional[date] = None,
    settings: AnalyticsSettings = analytics_settings,
) -> BudgetProgress:
    """
    Compare this month's expenses with the monthly budget.

    The percentage is monotonically non-decreasing in spending and is
    clamped to exactly 100 once spending reaches the budget.

    Args:
        transactions: Whole transaction list
        monthly_budget: Positive budget target
        today: Reference date (defaults to today)
        settings: Analytics settings

    Raises:
        ValueError: If the budget is not positive
    """
    if monthly_budget <= 0:
        raise ValueError("Monthly budget must be positive")

    today = today or date.today()
    spent = month_expense(transactions, today)
    percentage = min(spent / monthly_budget * 100, 100.0)
    band = classify_budget(percentage, settings)

    return BudgetProgress(
        spent=spent,
        budget=monthly_budget,
        percentage=percentage,
        band=band,
        message=BUDGET_MESSAGES[band],
    )
