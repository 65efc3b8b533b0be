"""
Health check response schema.
"""

from pydantic import BaseModel
from typing import Dict, Literal, Optional


class HealthResponse(BaseModel):
    """Liveness plus per-dependency checks."""
    status: Literal["ok", "degraded"]
    version: str
    environment: str
    uptime: str
    checks: Dict[str, str] = {}
    database_latency_ms: Optional[float] = None
