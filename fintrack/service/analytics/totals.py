"""
Totals and Category Breakdown calculations.

Both work on an already-filtered subset, so the per-category sums of a
type always add up to that type's total for the same subset.
"""

from typing import Dict, Iterable, List

from fintrack.domain.entities import Transaction, TransactionType

from .models import CategoryBreakdown, CategoryTotal, Totals


def sum_amounts(transactions: Iterable[Transaction], txn_type: TransactionType) -> float:
    """Sum the amounts of one transaction type."""
    return sum(t.amount for t in transactions if t.type == txn_type)


def calculate_totals(transactions: Iterable[Transaction]) -> Totals:
    """
    Calculate income, expense and net for a subset.

    Args:
        transactions: Already-filtered transactions

    Returns:
        Totals (net = income - expense)
    """
    subset = list(transactions)
    return Totals(
        income=sum_amounts(subset, TransactionType.INCOME),
        expense=sum_amounts(subset, TransactionType.EXPENSE),
    )


def category_totals(
    transactions: Iterable[Transaction],
    txn_type: TransactionType,
) -> List[CategoryTotal]:
    """
    Group one transaction type by category and sum the amounts.

    Algorithm:
        1. Walk the subset in list order, accumulating per category
           (dicts keep first-insertion order)
        2. Sort descending by sum; the sort is stable, so ties keep
           first-encountered order

    Args:
        transactions: Already-filtered transactions
        txn_type: Which type to break down

    Returns:
        Category totals, largest first
    """
    sums: Dict[str, float] = {}
    for t in transactions:
        if t.type != txn_type:
            continue
        sums[t.category] = sums.get(t.category, 0.0) + t.amount

    ordered = sorted(sums.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=c, total=v) for c, v in ordered]


def category_breakdown(transactions: Iterable[Transaction]) -> CategoryBreakdown:
    """Category totals for both income and expense."""
    subset = list(transactions)
    return CategoryBreakdown(
        income=category_totals(subset, TransactionType.INCOME),
        expense=category_totals(subset, TransactionType.EXPENSE),
    )


def top_expense_category(transactions: Iterable[Transaction]) -> str | None:
    """Largest expense category by summed amount, or None without expenses."""
    ranked = category_totals(transactions, TransactionType.EXPENSE)
    return ranked[0].category if ranked else None
