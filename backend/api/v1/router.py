"""
Central v1 API router – registers all endpoint sub-routers.
"""
from fastapi import APIRouter
import logging

from backend.api.v1.endpoints import auth, branches, categories

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api/v1")

logger.info("Registering v1 API routers")
api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(branches.router)
