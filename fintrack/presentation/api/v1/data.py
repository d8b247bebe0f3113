"""Backup export/import API endpoints."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from fintrack.application.controller import FinanceController
from fintrack.application.dto import ImportMode
from fintrack.core.dependencies import get_controller
from fintrack.domain.exceptions import InvalidImportFileException
from fintrack.presentation.schemas import ErrorResponseSchema, ImportResultSchema

data_router = APIRouter(
    prefix="/data",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid backup file"},
        409: {"model": ErrorResponseSchema, "description": "Nothing to export"},
    },
)

Controller = Annotated[FinanceController, Depends(get_controller)]


@data_router.get(
    "/export",
    summary="Export Backup",
    description="Download every transaction as a backup file.",
)
async def export_data(controller: Controller) -> JSONResponse:
    result = controller.export_data()
    return JSONResponse(
        content=result.document,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@data_router.post(
    "/import",
    response_model=ImportResultSchema,
    summary="Import Backup",
    description="""
    Apply a backup file (the body is the file content).

    - merge: add only transactions whose id is not already present
    - replace: discard current transactions and take the file's
    """,
)
async def import_data(
    request: Request,
    controller: Controller,
    mode: Annotated[ImportMode, Query(description="merge or replace")] = ImportMode.MERGE,
) -> ImportResultSchema:
    try:
        document = json.loads(await request.body())
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidImportFileException() from e

    return ImportResultSchema.from_result(controller.import_data(document, mode))
