"""Health check."""

from fastapi import APIRouter, Depends

from wolweb import __version__
from wolweb.api.deps import get_app_config
from wolweb.config import AppConfig
from wolweb.schemas.system import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(config: AppConfig = Depends(get_app_config)):
    """Lightweight liveness check."""
    return HealthResponse(version=__version__, machines=len(config.machines))


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
