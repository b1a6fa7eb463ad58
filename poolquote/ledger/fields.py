"""Typed access to loosely-shaped Move object content.

The ledger returns struct content as nested dicts mirroring the on-chain
layout. Nested structs may appear either inline or wrapped as
``{"type": ..., "fields": {...}}``; u64/u128 values arrive as strings.
Every accessor here returns an explicit absent value (``None`` or the
caller's default) instead of assuming a shape.
"""

from __future__ import annotations

from typing import Any

import structlog

from poolquote.models.types import is_valid_object_id, normalize_object_id

logger = structlog.get_logger()

_FIELDS_KEY = "fields"


def unwrap_struct(value: Any) -> Any:
    """Strip ``{"type", "fields"}`` wrappers from a struct value."""
    while isinstance(value, dict) and _FIELDS_KEY in value and isinstance(value[_FIELDS_KEY], dict):
        value = value[_FIELDS_KEY]
    return value


def get_path(data: Any, *keys: str) -> Any | None:
    """Walk a nested field map, returning None if any step is missing.

    Struct wrappers are stepped through transparently, so
    ``get_path(content, "lp_supply", "value")`` reads both
    ``{"lp_supply": {"value": "1"}}`` and
    ``{"lp_supply": {"type": "...", "fields": {"value": "1"}}}``.
    """
    current = data
    for key in keys:
        if not isinstance(current, dict):
            return None
        if key in current:
            current = current[key]
            continue
        unwrapped = unwrap_struct(current)
        if isinstance(unwrapped, dict) and key in unwrapped:
            current = unwrapped[key]
        else:
            return None
    return current


def read_str(data: Any, *keys: str) -> str | None:
    """Read a string field (integers are rendered as decimal strings)."""
    value = get_path(data, *keys)
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    return None


def read_amount(data: Any, *keys: str, default: str = "0") -> str:
    """Read a non-negative integer amount as a decimal string.

    Missing or malformed values degrade to ``default``.
    """
    value = get_path(data, *keys)
    if value is None:
        return default
    raw = read_str(data, *keys)
    try:
        amount = int(raw) if raw is not None else -1
    except ValueError:
        amount = -1
    if amount < 0:
        logger.warning("invalid_amount_field", field=".".join(keys), raw_value=value, using_default=default)
        return default
    return str(amount)


def read_int(data: Any, *keys: str, default: int = 0) -> int:
    """Read an integer field, degrading to ``default`` when absent or malformed."""
    value = get_path(data, *keys)
    if value is None:
        return default
    raw = read_str(data, *keys)
    if raw is None:
        logger.warning("invalid_int_field", field=".".join(keys), raw_value=value, using_default=default)
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("invalid_int_field", field=".".join(keys), raw_value=value, using_default=default)
        return default


def read_bool(data: Any, *keys: str, default: bool = False) -> bool:
    """Read a boolean field. Accepts JSON booleans and "true"/"false" strings."""
    value = get_path(data, *keys)
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value is not None:
        logger.warning("invalid_bool_field", field=".".join(keys), raw_value=value, using_default=default)
    return default


def coerce_object_id(value: Any) -> str | None:
    """Normalize an id that may be a plain string or a ``UID``/``ID`` struct.

    Handles ``"0x.."``, ``{"id": "0x.."}``, ``{"bytes": "0x.."}`` and their
    ``fields``-wrapped forms.

    Returns:
        Canonical long-form object id, or None if the value is not an id
    """
    value = unwrap_struct(value)
    # UID wraps ID: {"id": {"id": "0x.."}}
    for _ in range(3):
        if not isinstance(value, dict):
            break
        if "id" in value:
            value = unwrap_struct(value["id"])
        elif "bytes" in value:
            value = value["bytes"]
        else:
            return None
    if not is_valid_object_id(value):
        return None
    return normalize_object_id(value)


def read_object_id(data: Any, *keys: str) -> str | None:
    """Read an object id field (string or struct form)."""
    return coerce_object_id(get_path(data, *keys))
