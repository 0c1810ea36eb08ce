"""
Validation utilities for Graph Canvas.

Validators never raise. Each returns a ``ValidationResult`` holding either
the normalized value or a tagged error; callers decide whether a failure
becomes a ``ValidationError``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from ..models.graph import EdgeDraft, EdgePatch, NodeDraft, NodePatch
from .exceptions import ValidationError
from .ids import normalize_id

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Outcome of a validation: a value on success, an error otherwise."""

    value: Optional[T] = None
    error: Optional[str] = None
    field: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, field: Optional[str] = None) -> "ValidationResult[T]":
        return cls(error=error, field=field)

    def unwrap(self) -> T:
        """Return the value, raising ValidationError if validation failed."""
        if self.error is not None:
            raise ValidationError(self.error, field=self.field)
        return self.value  # type: ignore[return-value]


def validate_entity_id(raw: Any, entity: str = "node") -> ValidationResult[str]:
    """
    Validate an identifier taken from a path or body.

    Args:
        raw: Raw identifier value
        entity: Entity name used in the error message

    Returns:
        Result holding the canonical identifier
    """
    normalized = normalize_id(raw)
    if normalized is None:
        return ValidationResult.failure(f"Invalid {entity} ID", field="id")
    return ValidationResult.success(normalized)


def validate_label(raw: Any) -> ValidationResult[str]:
    """Validate a node label: a string that is non-empty after trimming."""
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult.failure("Label is required", field="label")
    return ValidationResult.success(raw.strip())


def _validate_node_type(raw: Any) -> ValidationResult[str]:
    if not isinstance(raw, str) or not raw.strip():
        return ValidationResult.failure("Node type must be a non-empty string", field="type")
    return ValidationResult.success(raw.strip())


def _validate_coordinate(name: str, value: Any, nullable: bool) -> Optional[str]:
    if value is None:
        return None if nullable else f"Coordinate '{name}' cannot be null"
    if not math.isfinite(value):
        return f"Coordinate '{name}' must be a finite number"
    return None


def _is_finite_json(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_is_finite_json(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return all(_is_finite_json(item) for item in value)
    return True


def _validate_properties(value: Any) -> Optional[str]:
    if value is None:
        return "Properties must be an object"
    if not _is_finite_json(value):
        return "Properties must not contain NaN or Infinity"
    return None


def validate_node_draft(draft: NodeDraft) -> ValidationResult[NodeDraft]:
    """
    Validate a node creation request.

    Args:
        draft: Parsed creation fields

    Returns:
        Result holding a copy of the draft with trimmed label and type
    """
    label = validate_label(draft.label)
    if not label.ok:
        return ValidationResult.failure(label.error, field=label.field)

    node_type = _validate_node_type(draft.type)
    if not node_type.ok:
        return ValidationResult.failure(node_type.error, field=node_type.field)

    for name, nullable in (("x", False), ("y", False), ("fx", True), ("fy", True)):
        error = _validate_coordinate(name, getattr(draft, name), nullable)
        if error:
            return ValidationResult.failure(error, field=name)

    error = _validate_properties(draft.properties)
    if error:
        return ValidationResult.failure(error, field="properties")

    return ValidationResult.success(
        draft.model_copy(update={"label": label.value, "type": node_type.value})
    )


def validate_node_patch(patch: NodePatch) -> ValidationResult[NodePatch]:
    """
    Validate a partial node update.

    Only fields the caller set are checked. A label or type may not be
    emptied; ``x``/``y`` may not be nulled; ``fx``/``fy`` may be nulled.
    """
    changes = patch.changes()
    normalized: Dict[str, Any] = {}

    if "label" in changes:
        label = validate_label(changes["label"])
        if not label.ok:
            return ValidationResult.failure(label.error, field=label.field)
        normalized["label"] = label.value

    if "type" in changes:
        node_type = _validate_node_type(changes["type"])
        if not node_type.ok:
            return ValidationResult.failure(node_type.error, field=node_type.field)
        normalized["type"] = node_type.value

    if "properties" in changes:
        error = _validate_properties(changes["properties"])
        if error:
            return ValidationResult.failure(error, field="properties")

    for name, nullable in (("x", False), ("y", False), ("fx", True), ("fy", True)):
        if name in changes:
            error = _validate_coordinate(name, changes[name], nullable)
            if error:
                return ValidationResult.failure(error, field=name)

    return ValidationResult.success(patch.model_copy(update=normalized))


def validate_edge_draft(draft: EdgeDraft) -> ValidationResult[EdgeDraft]:
    """
    Validate an edge creation request.

    Args:
        draft: Parsed creation fields

    Returns:
        Result holding a copy with canonical endpoint IDs and trimmed label
    """
    if not draft.source or not draft.target:
        return ValidationResult.failure(
            "Source and target nodes are required", field="source"
        )

    source = normalize_id(draft.source)
    target = normalize_id(draft.target)
    if source is None or target is None:
        return ValidationResult.failure(
            "Invalid node IDs", field="source" if source is None else "target"
        )

    error = _validate_properties(draft.properties)
    if error:
        return ValidationResult.failure(error, field="properties")

    return ValidationResult.success(
        draft.model_copy(
            update={"source": source, "target": target, "label": draft.label.strip()}
        )
    )


def validate_edge_patch(patch: EdgePatch) -> ValidationResult[EdgePatch]:
    """Validate a partial edge update; set fields may not be null."""
    changes = patch.changes()
    normalized: Dict[str, Any] = {}

    for name in ("label", "properties", "directed"):
        if name in changes and changes[name] is None:
            return ValidationResult.failure(f"Edge field '{name}' cannot be null", field=name)

    if "properties" in changes:
        error = _validate_properties(changes["properties"])
        if error:
            return ValidationResult.failure(error, field="properties")

    if "label" in changes:
        normalized["label"] = changes["label"].strip()

    return ValidationResult.success(patch.model_copy(update=normalized))


def validate_search_query(raw: Any) -> ValidationResult[str]:
    """
    Validate the ``q`` search parameter.

    A missing query or one that is not a single string (for example a
    repeated query parameter) fails. The returned query is trimmed and may be
    empty.
    """
    if isinstance(raw, (list, tuple)):
        if len(raw) != 1:
            return ValidationResult.failure("Search query must be a single string", field="q")
        raw = raw[0]

    if raw is None:
        return ValidationResult.failure("Search query is required", field="q")
    if not isinstance(raw, str):
        return ValidationResult.failure("Search query must be a single string", field="q")

    return ValidationResult.success(raw.strip())
