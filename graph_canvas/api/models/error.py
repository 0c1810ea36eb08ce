"""Error envelope returned by every failing endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard API error response.

    ``error`` is one of ``validation_error`` (400), ``not_found`` (404),
    ``store_error`` / ``internal_server_error`` (500) or the bare status code
    for framework-level HTTP errors.
    """

    error: str = Field(..., description="Error category")
    message: str = Field(..., description="Human-readable error message")
    request_id: Optional[str] = Field(None, description="Value of the X-Request-ID header")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Offending field, validation errors or error_id"
    )
