"""API routers for the Weather.ly backend."""

from fastapi import APIRouter

from .forecast import router as forecast_router
from .health import router as health_router
from .locations import router as locations_router
from .windows import router as windows_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(locations_router)
api_router.include_router(windows_router)
api_router.include_router(forecast_router)

__all__ = ["api_router"]
