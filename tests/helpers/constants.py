"""Shared coin types and object ids for tests.

Object ids are in normalized long form (0x + 64 lowercase hex chars) so
they compare equal to what normalize_object_id() returns.

Usage:
    from tests.helpers import SUI, USDC, REGISTRY_ID
"""

from poolquote.constants import SUI_TYPE, USDC_TYPE

# =============================================================================
# Coin types
# =============================================================================

SUI = SUI_TYPE  # Native coin (9 decimals, in known-token table)
USDC = USDC_TYPE  # Native USDC (6 decimals, in known-token table)
FOO = "0xabc::coin::FOO"  # Not in table, synthesized with 9 decimals
BAR = "0xdef::bar::BAR"  # Not in table, synthesized with 9 decimals

# =============================================================================
# Move types of the AMM package
# =============================================================================

AMM_PACKAGE = "0x" + "a1" * 32
POOL_STRUCT = f"{AMM_PACKAGE}::pool::Pool"
REGISTRY_TYPE = f"{AMM_PACKAGE}::registry::Registry"
TABLE_TYPE = f"0x2::table::Table<{AMM_PACKAGE}::registry::PoolKey, {AMM_PACKAGE}::registry::PoolInfo>"


def object_id(n: int) -> str:
    """Deterministic long-form object id for test objects."""
    return "0x" + format(n, "064x")


REGISTRY_ID = object_id(0x1000)
TABLE_ID = object_id(0x2000)


def pool_type(type_x: str, type_y: str) -> str:
    """Full pool type tag for a pair."""
    return f"{POOL_STRUCT}<{type_x}, {type_y}>"
