"""Monthly time series over the trailing calendar months."""

from datetime import date
from typing import Dict, Iterable, List, Optional

from fintrack.domain.entities import Transaction, TransactionType

from .models import MonthlyPoint
from .settings import AnalyticsSettings, analytics_settings


def trailing_months(today: date, count: int) -> List[date]:
    """
    First days of the last ``count`` calendar months, oldest first.

    The month containing ``today`` is always the last element.
    """
    months = []
    for offset in range(count - 1, -1, -1):
        index = today.year * 12 + (today.month - 1) - offset
        months.append(date(index // 12, index % 12 + 1, 1))
    return months


def monthly_series(
    transactions: Iterable[Transaction],
    today: Optional[date] = None,
    settings: AnalyticsSettings = analytics_settings,
) -> List[MonthlyPoint]:
    """
    Income and expense sums for each trailing month.

    Months without transactions are included with zero sums so the
    series always has ``settings.trailing_months`` points.

    Args:
        transactions: Transactions to bucket (typically the whole list)
        today: Reference date (defaults to today)
        settings: Analytics settings

    Returns:
        Points ordered oldest to newest
    """
    today = today or date.today()
    starts = trailing_months(today, settings.trailing_months)

    income: Dict[str, float] = {}
    expense: Dict[str, float] = {}
    for t in transactions:
        bucket = income if t.type == TransactionType.INCOME else expense
        bucket[t.month] = bucket.get(t.month, 0.0) + t.amount

    points = []
    for start in starts:
        key = start.strftime("%Y-%m")
        points.append(
            MonthlyPoint(
                month=key,
                label=start.strftime("%b %y"),
                income=income.get(key, 0.0),
                expense=expense.get(key, 0.0),
            )
        )
    return points
