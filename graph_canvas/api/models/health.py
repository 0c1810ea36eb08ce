"""Health probe model."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Overall status plus per-component state and store counts."""

    status: str = Field(..., description="healthy or unhealthy")
    services: Dict[str, str]
    database: Optional[Dict[str, Any]] = None
    timestamp: str
