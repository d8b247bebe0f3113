"""Dependency injection for FastAPI."""

from fastapi import Request

from fintrack.core.config import Settings, settings
from fintrack.infrastructure.database import db_manager
from fintrack.infrastructure.repositories import SqlKeyValueStore
from fintrack.infrastructure.clients import HttpGistClient
from fintrack.application.controller import FinanceController


def build_controller(config: Settings = settings) -> FinanceController:
    """
    Build the process-wide controller over the configured storage.

    The database must already be initialized.
    """
    return FinanceController.from_storage(
        kv_store=SqlKeyValueStore(db_manager),
        remote_client=HttpGistClient(
            base_url=config.github_api_url,
            timeout=config.github_api_timeout,
            file_name=config.remote_file_name,
            description=config.remote_description,
        ),
        config=config,
    )


def get_controller(request: Request) -> FinanceController:
    """Get the controller created at startup."""
    return request.app.state.controller
