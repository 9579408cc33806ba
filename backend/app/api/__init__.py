from fastapi import APIRouter

from .groups import router as groups_router

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(groups_router, prefix="/groups", tags=["groups"])
