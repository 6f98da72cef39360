from fastapi import APIRouter

from labelscan.api.analysis import router as analysis_router
from labelscan.api.health import router as health_router
from labelscan.api.ingredients import router as ingredients_router

router = APIRouter(prefix="/api")
router.include_router(health_router)
router.include_router(ingredients_router)
router.include_router(analysis_router)
