"""
Filtering Pipeline for fintrack views.

Each stage is a pure predicate over one transaction. Stages compose as a
logical AND, so applying them in any order yields the same subset:

- Month: transactions dated in the selected ``YYYY-MM`` (None = all time)
- Search: case-insensitive substring of description or category
- Type: income / expense / all
- Period: today / last N days / since the first of this month / all
- Split: shared / personal / all
"""

from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional

from fintrack.domain.entities import (
    FilterState,
    PeriodFilter,
    SplitFilter,
    Transaction,
    TransactionType,
    TypeFilter,
)

from .settings import AnalyticsSettings, analytics_settings

Predicate = Callable[[Transaction], bool]


def month_predicate(selected_month: Optional[str]) -> Predicate:
    """Match transactions in the selected month; None matches everything."""
    if not selected_month:
        return lambda t: True
    return lambda t: t.month == selected_month


def search_predicate(term: str) -> Predicate:
    """Match a case-insensitive substring of description or category."""
    needle = (term or "").strip().lower()
    if not needle:
        return lambda t: True
    return lambda t: needle in t.description.lower() or needle in t.category.lower()


def type_predicate(type_filter: TypeFilter) -> Predicate:
    if type_filter == TypeFilter.ALL:
        return lambda t: True
    elif type_filter == TypeFilter.INCOME:
        return lambda t: t.type == TransactionType.INCOME
    elif type_filter == TypeFilter.EXPENSE:
        return lambda t: t.type == TransactionType.EXPENSE
    raise ValueError(f"Unknown type filter: {type_filter!r}")


def period_predicate(
    period: PeriodFilter,
    today: Optional[date] = None,
    settings: AnalyticsSettings = analytics_settings,
) -> Predicate:
    """
    Match transactions on or after the start of a relative window.

    The window is open-ended: future-dated transactions always match.
    """
    if period == PeriodFilter.ALL:
        return lambda t: True

    today = today or date.today()
    if period == PeriodFilter.TODAY:
        start = today
    elif period == PeriodFilter.WEEK:
        start = today - timedelta(days=settings.week_days)
    elif period == PeriodFilter.MONTH:
        start = today.replace(day=1)
    else:
        raise ValueError(f"Unknown period filter: {period!r}")

    # ISO dates compare correctly as strings
    start_str = start.isoformat()
    return lambda t: t.date >= start_str


def split_predicate(split: SplitFilter) -> Predicate:
    if split == SplitFilter.ALL:
        return lambda t: True
    elif split == SplitFilter.SHARED:
        return lambda t: t.is_splitwise
    elif split == SplitFilter.PERSONAL:
        return lambda t: not t.is_splitwise
    raise ValueError(f"Unknown split filter: {split!r}")


def apply_predicates(
    transactions: Iterable[Transaction],
    predicates: Iterable[Predicate],
) -> List[Transaction]:
    """Keep transactions matching every predicate, preserving list order."""
    stages = list(predicates)
    return [t for t in transactions if all(p(t) for p in stages)]


def month_scope(
    transactions: Iterable[Transaction],
    filters: FilterState,
) -> List[Transaction]:
    """Subset used by the summary, breakdown and insights views."""
    return apply_predicates(transactions, [month_predicate(filters.selected_month)])


def apply_filters(
    transactions: Iterable[Transaction],
    filters: FilterState,
    today: Optional[date] = None,
    settings: AnalyticsSettings = analytics_settings,
) -> List[Transaction]:
    """
    Run the full pipeline used for the visible transaction list.

    Args:
        transactions: Canonical list, newest first
        filters: Active filter state
        today: Reference date for relative periods (defaults to today)
        settings: Analytics settings

    Returns:
        The matching transactions in their original order
    """
    return apply_predicates(
        transactions,
        [
            month_predicate(filters.selected_month),
            search_predicate(filters.search),
            type_predicate(filters.type),
            period_predicate(filters.period, today, settings),
            split_predicate(filters.split),
        ],
    )
