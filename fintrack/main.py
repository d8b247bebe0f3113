"""
fintrack - Main Application Entry Point

A local-first personal finance tracker that keeps its transaction list in
local storage and optionally mirrors it to a private GitHub Gist.
"""

from contextlib import asynccontextmanager
from typing import Annotated, AsyncGenerator, Optional

import structlog
from fastapi import Depends, FastAPI, Query, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from fintrack import __version__
from fintrack.application.controller import FinanceController
from fintrack.core.config import settings
from fintrack.core.dependencies import build_controller, get_controller
from fintrack.core.logging import setup_logging
from fintrack.core.metrics import get_metrics, get_metrics_content_type
from fintrack.infrastructure.database import db_manager
from fintrack.presentation.api import api_router
from fintrack.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events:
    - Set up logging and local storage
    - Load state and pull from the remote document once
    - Drop any pending remote push on shutdown
    """
    setup_logging()
    db_manager.init()

    logger = structlog.get_logger(__name__)

    controller = build_controller()
    app.state.controller = controller
    await controller.startup()

    logger.info("application_started", version=__version__)

    yield

    await controller.shutdown()
    db_manager.close()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Personal finance tracker with optional Gist sync",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestContextMiddleware)

error_handler_middleware(app)

app.include_router(api_router)


@app.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=get_metrics(),
        media_type=get_metrics_content_type(),
    )


@app.get("/", include_in_schema=False)
async def root(
    controller: Annotated[FinanceController, Depends(get_controller)],
    token: Annotated[Optional[str], Query()] = None,
    gist: Annotated[Optional[str], Query()] = None,
):
    """
    Redirect to API documentation.

    When both ``token`` and ``gist`` are given they are stored as the sync
    credentials and pulled once before redirecting, so the credential
    does not stay in the address.
    """
    if token and gist:
        await controller.bootstrap(token, gist)

    return RedirectResponse(url="/docs")
