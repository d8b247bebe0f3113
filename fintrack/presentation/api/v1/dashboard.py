"""Dashboard and filter API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack.application.controller import FinanceController
from fintrack.core.dependencies import get_controller
from fintrack.presentation.schemas import (
    DashboardSchema,
    FiltersSchema,
    FilterUpdateSchema,
)

dashboard_router = APIRouter(prefix="/dashboard")
filters_router = APIRouter(prefix="/filters")

Controller = Annotated[FinanceController, Depends(get_controller)]


@dashboard_router.get(
    "",
    response_model=DashboardSchema,
    summary="Get Dashboard",
    description="""
    Every derived view for the active filters: month totals, category
    breakdown, trailing monthly series, budget consumption, insights,
    quick stats and the filtered transaction list.
    """,
)
async def get_dashboard(controller: Controller) -> DashboardSchema:
    return DashboardSchema.from_view(controller.view)


@filters_router.get(
    "",
    response_model=FiltersSchema,
    summary="Get Filters",
)
async def get_filters(controller: Controller) -> FiltersSchema:
    return FiltersSchema.from_state(controller.state.filters)


@filters_router.patch(
    "",
    response_model=DashboardSchema,
    summary="Update Filters",
    description="Change any subset of the filters and return the recomputed dashboard.",
)
async def update_filters(
    request: FilterUpdateSchema,
    controller: Controller,
) -> DashboardSchema:
    changes = request.model_dump(exclude_unset=True)

    # Only selected_month accepts null (all time)
    changes = {
        key: value for key, value in changes.items()
        if value is not None or key == "selected_month"
    }
    return DashboardSchema.from_view(controller.set_filters(**changes))


@filters_router.delete(
    "",
    response_model=DashboardSchema,
    summary="Reset Filters",
    description="Back to the current month with every other filter cleared.",
)
async def reset_filters(controller: Controller) -> DashboardSchema:
    return DashboardSchema.from_view(controller.reset_filters())
