"""View filter dimensions and the selection state that holds them."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SplitFilter(str, Enum):
    """Shared-expense filter."""

    ALL = "all"
    SHARED = "shared"
    PERSONAL = "personal"


class TypeFilter(str, Enum):
    """Transaction type filter."""

    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


class PeriodFilter(str, Enum):
    """Relative date window, anchored on today."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


@dataclass
class FilterState:
    """
    User-controlled view parameters.

    ``selected_month`` is a ``YYYY-MM`` string, or None for all time.
    None of these fields ever mutate the transaction list.
    """

    selected_month: Optional[str] = None
    split: SplitFilter = SplitFilter.ALL
    search: str = ""
    type: TypeFilter = TypeFilter.ALL
    period: PeriodFilter = PeriodFilter.ALL
