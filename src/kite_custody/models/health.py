"""Health check contract."""

from typing import Optional

from pydantic import Field

from kite_custody.models.base import KiteModel


class HealthStatus(KiteModel):
    """Orchestrator health as reported by ``GET /health``."""

    status: str = Field(default="unknown", description="Service status")
    service: str = Field(default="kite-custody-orchestrator", description="Service name")
    environment: Optional[str] = Field(None, description="Deployment environment")
