from fastapi import APIRouter

from .health import health_router
from .transactions import transactions_router, categories_router
from .dashboard import dashboard_router, filters_router
from .settings import settings_router
from .sync import sync_router
from .data import data_router

router = APIRouter()

router.include_router(transactions_router, tags=["Transactions"])
router.include_router(categories_router, tags=["Transactions"])
router.include_router(dashboard_router, tags=["Dashboard"])
router.include_router(filters_router, tags=["Dashboard"])
router.include_router(settings_router, tags=["Settings"])
router.include_router(sync_router, tags=["Sync"])
router.include_router(data_router, tags=["Data"])
