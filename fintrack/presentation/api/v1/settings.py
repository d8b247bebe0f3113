"""User settings API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack.application.controller import FinanceController
from fintrack.core.dependencies import get_controller
from fintrack.presentation.schemas import (
    BudgetUpdateSchema,
    ErrorResponseSchema,
    MutationResponseSchema,
    SettingsSchema,
    ThemeUpdateSchema,
)

settings_router = APIRouter(
    prefix="/settings",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid value"},
    },
)

Controller = Annotated[FinanceController, Depends(get_controller)]


@settings_router.get(
    "",
    response_model=SettingsSchema,
    summary="Get Settings",
)
async def get_settings(controller: Controller) -> SettingsSchema:
    return SettingsSchema(
        budget=controller.state.budget,
        theme=controller.state.theme,
        storage_warning=controller.state.storage_warning,
    )


@settings_router.put(
    "/budget",
    response_model=MutationResponseSchema,
    summary="Set Monthly Budget",
)
async def set_budget(
    request: BudgetUpdateSchema,
    controller: Controller,
) -> MutationResponseSchema:
    return MutationResponseSchema.from_result(controller.set_budget(request.amount))


@settings_router.put(
    "/theme",
    response_model=MutationResponseSchema,
    summary="Set Theme",
)
async def set_theme(
    request: ThemeUpdateSchema,
    controller: Controller,
) -> MutationResponseSchema:
    return MutationResponseSchema.from_result(controller.set_theme(request.theme))


@settings_router.post(
    "/theme/toggle",
    response_model=MutationResponseSchema,
    summary="Toggle Theme",
)
async def toggle_theme(controller: Controller) -> MutationResponseSchema:
    return MutationResponseSchema.from_result(controller.toggle_theme())
