"""Health and monitoring endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

from ...utils.exceptions import StoreError
from ..dependencies import AppState, get_app_state
from ..models.health import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(state: AppState = Depends(get_app_state)) -> HealthResponse:
    """Check health of the API and the graph store.

    Returns:
        HealthResponse with overall status, store status and entity counts.
    """
    services: Dict[str, str] = {"api": "up", "duckdb": "unknown"}
    database: Dict[str, Any] = {
        "path": state.db.db_path,
        "mode": "memory" if state.db.is_memory_mode else "persistent",
    }

    if state.db.health_check():
        services["duckdb"] = "up"
        try:
            database.update(state.query_service.stats())
        except StoreError:
            services["duckdb"] = "degraded"
    else:
        services["duckdb"] = "down"

    status = "healthy" if services["duckdb"] == "up" else "unhealthy"

    return HealthResponse(
        status=status,
        services=services,
        database=database,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
