from fastapi import APIRouter

from backend.app.api.v1.endpoints.health import router as health_router
from backend.app.api.v1.endpoints.ledger import router as ledger_router
from backend.app.api.v1.endpoints.items import router as items_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(ledger_router, tags=["ledger"])
router.include_router(items_router, tags=["items"])
