"""API route registration."""

from fastapi import APIRouter

from wolweb.api.routes import health, machines

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(machines.router, prefix="/machines", tags=["machines"])
