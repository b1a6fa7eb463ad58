"""Test helpers module for shared test utilities.

- constants: Coin types and object ids
- factories: Ledger object and snapshot factory functions
"""

from tests.helpers.constants import (
    BAR,
    FOO,
    REGISTRY_ID,
    SUI,
    TABLE_ID,
    USDC,
    object_id,
    pool_type,
)
from tests.helpers.factories import (
    make_entry_name,
    make_entry_object,
    make_pool_object,
    make_registry,
    make_snapshot,
)

__all__ = [
    # Constants
    "SUI",
    "USDC",
    "FOO",
    "BAR",
    "REGISTRY_ID",
    "TABLE_ID",
    "object_id",
    "pool_type",
    # Factories
    "make_pool_object",
    "make_entry_name",
    "make_entry_object",
    "make_registry",
    "make_snapshot",
]
