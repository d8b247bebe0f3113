"""Quick stats shown above the dashboard, independent of the month filter."""

from datetime import date
from typing import Iterable, Optional

from fintrack.domain.entities import Transaction

from .budget import month_expense
from .insights import NO_CATEGORY
from .models import QuickStats
from .totals import top_expense_category


def quick_stats(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
) -> QuickStats:
    """
    Compute headline numbers over the whole list.

    The daily average divides this month's expenses by the current day of
    the month, so it is never a division by zero.

    Args:
        transactions: Whole transaction list
        today: Reference date (defaults to today)
    """
    today = today or date.today()
    subset = list(transactions)
    spent = month_expense(subset, today)

    return QuickStats(
        month_expense=spent,
        daily_average=spent / today.day,
        top_category=top_expense_category(subset) or NO_CATEGORY,
        total_transactions=len(subset),
    )
