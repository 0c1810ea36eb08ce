"""Identifier utilities for nodes and edges."""

from __future__ import annotations

import uuid
from typing import Any, Optional


def new_id() -> str:
    """Generate a fresh entity identifier (32 lowercase hex characters)."""
    return uuid.uuid4().hex


def normalize_id(raw: Any) -> Optional[str]:
    """Return the canonical form of an identifier, or None when malformed.

    Accepts any UUID spelling (hyphenated or not, any case).
    """
    if not isinstance(raw, str):
        return None
    candidate = raw.strip()
    if not candidate:
        return None
    try:
        return uuid.UUID(candidate).hex
    except ValueError:
        return None


def is_valid_id(raw: Any) -> bool:
    """Return True when the value is a well-formed identifier."""
    return normalize_id(raw) is not None
