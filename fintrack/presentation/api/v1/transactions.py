"""Transaction API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from fintrack.application.controller import FinanceController
from fintrack.application.dto import NewTransactionRequest
from fintrack.core.dependencies import get_controller
from fintrack.domain.entities import EXPENSE_CATEGORIES, INCOME_CATEGORIES
from fintrack.presentation.schemas import (
    CategoriesSchema,
    ErrorResponseSchema,
    MutationResponseSchema,
    TransactionCreateSchema,
    TransactionListSchema,
    TransactionSchema,
)

transactions_router = APIRouter(
    prefix="/transactions",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid transaction"},
    },
)

categories_router = APIRouter(prefix="/categories")

Controller = Annotated[FinanceController, Depends(get_controller)]
TransactionId = Annotated[int, Path(description="Transaction id")]


@transactions_router.get(
    "",
    response_model=TransactionListSchema,
    summary="List Transactions",
    description="Transactions matching every active filter, newest first.",
)
async def list_transactions(controller: Controller) -> TransactionListSchema:
    transactions = controller.list_transactions()
    return TransactionListSchema(
        count=len(transactions),
        transactions=[TransactionSchema.from_entity(t) for t in transactions],
    )


@transactions_router.post(
    "",
    response_model=MutationResponseSchema,
    status_code=201,
    summary="Add Transaction",
)
async def add_transaction(
    request: TransactionCreateSchema,
    controller: Controller,
) -> MutationResponseSchema:
    """
    Record a new income or expense.

    The search, type and period filters are reset so the new entry shows
    up in the list.
    """
    dto = NewTransactionRequest(
        type=request.type,
        description=request.description,
        category=request.category,
        amount=request.amount,
        date=request.date,
        is_splitwise=request.is_splitwise,
    )
    return MutationResponseSchema.from_result(controller.add_transaction(dto))


@transactions_router.delete(
    "/{transaction_id}",
    response_model=MutationResponseSchema,
    summary="Delete Transaction",
    description="Deleting an unknown id is a no-op and reports changed=false.",
)
async def delete_transaction(
    transaction_id: TransactionId,
    controller: Controller,
) -> MutationResponseSchema:
    return MutationResponseSchema.from_result(controller.delete_transaction(transaction_id))


@transactions_router.post(
    "/{transaction_id}/toggle-split",
    response_model=MutationResponseSchema,
    summary="Toggle Shared Flag",
    description="Flip between shared and personal. Unknown ids are a no-op.",
)
async def toggle_split(
    transaction_id: TransactionId,
    controller: Controller,
) -> MutationResponseSchema:
    return MutationResponseSchema.from_result(controller.toggle_split(transaction_id))


@transactions_router.delete(
    "",
    response_model=MutationResponseSchema,
    summary="Clear All Transactions",
)
async def clear_transactions(controller: Controller) -> MutationResponseSchema:
    return MutationResponseSchema.from_result(controller.clear_transactions())


@categories_router.get(
    "",
    response_model=CategoriesSchema,
    summary="List Categories",
    description="The fixed category labels for each transaction type.",
)
async def list_categories() -> CategoriesSchema:
    return CategoriesSchema(
        income=list(INCOME_CATEGORIES),
        expense=list(EXPENSE_CATEGORIES),
    )
