"""Central API router aggregating all domain routers."""

from fastapi import APIRouter

from doorsign.auth.router import router as auth_router
from doorsign.health.router import router as health_router
from doorsign.status.router import router as member_router
from doorsign.status_option.router import router as status_option_router
from doorsign.sync.router import router as sync_router
from doorsign.user.router import router as user_router

api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(member_router)
api_router.include_router(status_option_router)
api_router.include_router(sync_router)
