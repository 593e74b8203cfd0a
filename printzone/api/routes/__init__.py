"""API routes for printzone."""

from fastapi import APIRouter

from printzone.api.routes.constraints import router as constraints_router

# Main API router
api_router = APIRouter()

api_router.include_router(constraints_router, prefix="/constraints", tags=["Constraints"])

__all__ = ["api_router"]
