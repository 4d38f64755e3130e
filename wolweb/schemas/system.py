"""Health check schemas."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Liveness response."""
    status: str = "ok"
    version: str
    service: str = "wolweb"
    machines: int = 0
