"""Conversions between Python values and DuckDB column values."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Optional

from ..utils.types import Properties


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the TIMESTAMP columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to a naive timestamp read back from DuckDB."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def dump_properties(properties: Optional[Properties]) -> str:
    return json.dumps(properties or {}, allow_nan=False)


def load_properties(raw: Any) -> Properties:
    if raw is None:
        return {}
    if isinstance(raw, dict):
        return raw
    loaded = json.loads(raw)
    return loaded if isinstance(loaded, dict) else {}
