"""Application state owned by the controller."""

from dataclasses import dataclass, field
from typing import Optional

from fintrack.domain.entities import FilterState, Theme
from fintrack.application.dto import DashboardView


@dataclass
class AppState:
    """
    Everything the running process holds besides the transaction list.

    Attributes:
        filters: Active view filters
        budget: Monthly budget target
        theme: Display preference
        storage_warning: Set while local storage is failing
        view: Last computed dashboard view
    """

    filters: FilterState = field(default_factory=FilterState)
    budget: float = 1000.0
    theme: Theme = Theme.DARK
    storage_warning: Optional[str] = None
    view: Optional[DashboardView] = None
