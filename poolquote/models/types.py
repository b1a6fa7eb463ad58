"""Shared type definitions for ledger models.

These types are used across token, pool and quote models.
"""

import re
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

# Maximum u64 value (Move timestamps and fee fields)
UINT64_MAX = 2**64 - 1

# Object ids are 32 bytes; the short form (e.g. "0x2") is zero-padded
OBJECT_ID_HEX_LENGTH = 64

# Fees are stored on-chain in basis points (30 = 0.3%)
BPS_DENOMINATOR = 10_000

_OBJECT_ID_PATTERN = re.compile(r"^0x[a-fA-F0-9]{1,64}$")


def validate_unsigned_int_str(value: Any) -> str:
    """Validate that a value is a non-negative decimal integer string.

    Reserves and LP supply are u64/u128 on-chain; no upper bound is enforced
    here so that arbitrary base-unit amounts survive without precision loss.

    Args:
        value: Value to validate (string or int)

    Returns:
        Canonical decimal string

    Raises:
        ValueError: If value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Amount cannot be negative: {value}")
        return str(value)

    if not isinstance(value, str):
        raise ValueError(f"Amount must be string or int, got {type(value).__name__}")

    try:
        int_value = int(value)
    except ValueError as err:
        raise ValueError(f"Amount must be a decimal integer string: '{value}'") from err

    if int_value < 0:
        raise ValueError(f"Amount cannot be negative: {value}")

    return str(int_value)


# Unsigned integer amount as decimal string (validated)
UnsignedAmount = Annotated[
    str,
    BeforeValidator(validate_unsigned_int_str),
    Field(description="Non-negative integer in base units, as decimal string"),
]

# Sui object id, normalized to 0x + 64 lowercase hex chars
ObjectId = Annotated[str, Field(pattern=r"^0x[a-f0-9]{64}$")]


def is_valid_object_id(object_id: Any) -> bool:
    """Check if a value is a valid Sui object id (long or short form).

    Args:
        object_id: Value to validate

    Returns:
        True if the value is 0x followed by 1-64 hex characters
    """
    if not isinstance(object_id, str):
        return False
    return _OBJECT_ID_PATTERN.match(object_id) is not None


def normalize_object_id(object_id: str, *, validate: bool = False) -> str:
    """Normalize a Sui object id to its long lowercase form.

    Args:
        object_id: An object id, with or without 0x prefix, long or short form
        validate: If True, raises ValueError for invalid ids.
                  If False (default), returns the normalized form without validation.

    Returns:
        Lowercase id with 0x prefix, left-padded with zeros to 64 hex chars

    Raises:
        ValueError: If validate=True and object_id is not a valid object id
    """
    oid = object_id.strip().lower()
    if not oid.startswith("0x"):
        oid = "0x" + oid

    if validate and not is_valid_object_id(oid):
        raise ValueError(f"Invalid object id: {object_id}")

    return "0x" + oid[2:].rjust(OBJECT_ID_HEX_LENGTH, "0")


def short_id(object_id: str | None) -> str | None:
    """Abbreviate an object id for log context."""
    if object_id is None:
        return None
    return object_id[-8:]
