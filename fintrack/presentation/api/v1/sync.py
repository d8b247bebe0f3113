"""Remote sync API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack.application.controller import FinanceController
from fintrack.core.dependencies import get_controller
from fintrack.presentation.schemas import (
    ConnectRequestSchema,
    ErrorResponseSchema,
    SyncResultSchema,
    SyncStatusSchema,
)

sync_router = APIRouter(
    prefix="/sync",
    responses={
        409: {"model": ErrorResponseSchema, "description": "Sync not configured"},
        502: {"model": ErrorResponseSchema, "description": "Remote sync failed"},
        503: {"model": ErrorResponseSchema, "description": "Remote sync timed out"},
    },
)

Controller = Annotated[FinanceController, Depends(get_controller)]


@sync_router.get(
    "",
    response_model=SyncStatusSchema,
    summary="Get Sync Status",
)
async def get_sync_status(controller: Controller) -> SyncStatusSchema:
    return SyncStatusSchema.from_status(controller.sync.status())


@sync_router.post(
    "/connect",
    response_model=SyncResultSchema,
    summary="Connect Remote Sync",
    description="""
    Enable sync with an access credential.

    - With document_id: pull that document, replacing local data
    - Without it, when a document is already known: push to it
    - Otherwise: create a new private document from local data

    Credentials are stored only when the remote call succeeds.
    """,
)
async def connect(
    request: ConnectRequestSchema,
    controller: Controller,
) -> SyncResultSchema:
    result = await controller.connect(request.credential, request.document_id)
    return SyncResultSchema.from_result(result)


@sync_router.post(
    "/disconnect",
    response_model=SyncResultSchema,
    summary="Disconnect Remote Sync",
    description="Forget the credentials and drop any pending push. Local data is kept.",
)
async def disconnect(controller: Controller) -> SyncResultSchema:
    return SyncResultSchema.from_result(controller.disconnect())


@sync_router.post(
    "/push",
    response_model=SyncResultSchema,
    summary="Save To Remote Now",
)
async def push(controller: Controller) -> SyncResultSchema:
    return SyncResultSchema.from_result(await controller.push_now())


@sync_router.post(
    "/pull",
    response_model=SyncResultSchema,
    summary="Load From Remote",
    description="Replace local data with the remote document's transactions.",
)
async def pull(controller: Controller) -> SyncResultSchema:
    return SyncResultSchema.from_result(await controller.pull())
