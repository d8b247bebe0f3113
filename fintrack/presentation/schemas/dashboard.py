"""Dashboard and filter Pydantic schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from fintrack.application.dto import DashboardView
from fintrack.domain.entities import FilterState, PeriodFilter, SplitFilter, TypeFilter
from fintrack.service.analytics import BudgetBand

from .transaction import TransactionSchema

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class FiltersSchema(BaseModel):
    """Schema for the active filter state."""

    selected_month: Optional[str] = Field(
        None,
        description="YYYY-MM, or null for all time",
        examples=["2026-10"],
    )
    split: SplitFilter = SplitFilter.ALL
    search: str = ""
    type: TypeFilter = TypeFilter.ALL
    period: PeriodFilter = PeriodFilter.ALL

    @classmethod
    def from_state(cls, filters: FilterState) -> "FiltersSchema":
        return cls(
            selected_month=filters.selected_month,
            split=filters.split,
            search=filters.search,
            type=filters.type,
            period=filters.period,
        )


class FilterUpdateSchema(BaseModel):
    """
    Schema for PATCH /v1/filters.

    Only the fields present in the body change; an explicit null
    ``selected_month`` selects all time.
    """

    selected_month: Optional[str] = Field(None, pattern=MONTH_PATTERN)
    split: Optional[SplitFilter] = None
    search: Optional[str] = Field(None, max_length=200)
    type: Optional[TypeFilter] = None
    period: Optional[PeriodFilter] = None


class TotalsSchema(BaseModel):
    income: float
    expense: float
    net: float


class CategoryTotalSchema(BaseModel):
    category: str
    total: float


class BreakdownSchema(BaseModel):
    income: List[CategoryTotalSchema]
    expense: List[CategoryTotalSchema]


class MonthlyPointSchema(BaseModel):
    month: str = Field(..., examples=["2026-10"])
    label: str = Field(..., examples=["Oct 26"])
    income: float
    expense: float


class BudgetSchema(BaseModel):
    spent: float
    budget: float
    percentage: float = Field(..., ge=0, le=100)
    band: BudgetBand
    message: str


class InsightsSchema(BaseModel):
    savings: float
    savings_rate: float
    top_category: str
    transaction_count: int
    pending_split: int
    tip: str


class QuickStatsSchema(BaseModel):
    month_expense: float
    daily_average: float
    top_category: str
    total_transactions: int


class DashboardSchema(BaseModel):
    """Schema for every derived view at once."""

    filters: FiltersSchema
    totals: TotalsSchema
    breakdown: BreakdownSchema
    monthly: List[MonthlyPointSchema]
    budget: BudgetSchema
    insights: InsightsSchema
    quick_stats: QuickStatsSchema
    transactions: List[TransactionSchema]
    storage_warning: Optional[str] = None

    @classmethod
    def from_view(cls, view: DashboardView) -> "DashboardSchema":
        return cls(
            filters=FiltersSchema.from_state(view.filters),
            totals=TotalsSchema(
                income=view.totals.income,
                expense=view.totals.expense,
                net=view.totals.net,
            ),
            breakdown=BreakdownSchema(
                income=[
                    CategoryTotalSchema(category=c.category, total=c.total)
                    for c in view.breakdown.income
                ],
                expense=[
                    CategoryTotalSchema(category=c.category, total=c.total)
                    for c in view.breakdown.expense
                ],
            ),
            monthly=[
                MonthlyPointSchema(
                    month=p.month,
                    label=p.label,
                    income=p.income,
                    expense=p.expense,
                )
                for p in view.monthly
            ],
            budget=BudgetSchema(
                spent=view.budget.spent,
                budget=view.budget.budget,
                percentage=view.budget.percentage,
                band=view.budget.band,
                message=view.budget.message,
            ),
            insights=InsightsSchema(
                savings=view.insights.savings,
                savings_rate=view.insights.savings_rate,
                top_category=view.insights.top_category,
                transaction_count=view.insights.transaction_count,
                pending_split=view.insights.pending_split,
                tip=view.insights.tip,
            ),
            quick_stats=QuickStatsSchema(
                month_expense=view.quick_stats.month_expense,
                daily_average=view.quick_stats.daily_average,
                top_category=view.quick_stats.top_category,
                total_transactions=view.quick_stats.total_transactions,
            ),
            transactions=[TransactionSchema.from_entity(t) for t in view.transactions],
            storage_warning=view.storage_warning,
        )
