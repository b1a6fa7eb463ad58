"""Pool object parsing.

Functions to turn raw ledger objects (pool structs and registry entries)
into pool snapshots. Individual malformed fields degrade to defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from poolquote.constants import DEFAULT_FEE_BPS, DEFAULT_RESERVE
from poolquote.ledger.fields import read_amount, read_bool, read_int, read_object_id, read_str
from poolquote.ledger.reader import LedgerObject
from poolquote.models.pool import PoolSnapshot
from poolquote.models.types import UINT64_MAX, normalize_object_id, short_id
from poolquote.parsing.type_tags import extract_pool_type_args, parse_type_to_token

logger = structlog.get_logger()

_MAX_FEE_BPS = 65_535


@dataclass(frozen=True)
class PoolReserves:
    """Balances and fee read from a pool struct."""

    reserve_x: str = DEFAULT_RESERVE
    reserve_y: str = DEFAULT_RESERVE
    lp_supply: str = DEFAULT_RESERVE
    fee_bps: int = DEFAULT_FEE_BPS


@dataclass(frozen=True)
class RegistryEntry:
    """Bookkeeping stored in the registry table for one pool.

    ``type_x``/``type_y`` come from the table key and are only used when the
    pool object's own type cannot be parametrized.
    """

    pool_id: str
    created_at: int = 0
    is_active: bool = True
    type_x: str | None = None
    type_y: str | None = None


def parse_pool_reserves(fields: dict[str, Any], pool_id: str | None = None) -> PoolReserves:
    """Read reserves, LP supply and fee from pool content fields.

    Missing values default to "0" (amounts) and DEFAULT_FEE_BPS (fee).
    """
    fee_bps = read_int(fields, "fee_bps", default=DEFAULT_FEE_BPS)
    if not 0 <= fee_bps <= _MAX_FEE_BPS:
        logger.warning(
            "pool_fee_out_of_range",
            pool=short_id(pool_id),
            raw_fee_bps=fee_bps,
            using_default=DEFAULT_FEE_BPS,
        )
        fee_bps = DEFAULT_FEE_BPS

    return PoolReserves(
        reserve_x=read_amount(fields, "balance_x", default=DEFAULT_RESERVE),
        reserve_y=read_amount(fields, "balance_y", default=DEFAULT_RESERVE),
        lp_supply=read_amount(fields, "lp_supply", "value", default=DEFAULT_RESERVE),
        fee_bps=fee_bps,
    )


def parse_registry_entry(field_object: LedgerObject) -> RegistryEntry | None:
    """Parse a registry table entry (``Field<PoolKey, PoolInfo>``).

    The ``pool_id`` may be stored as a plain string or as an ``ID`` struct;
    both are normalized to one canonical object id here.

    Returns:
        RegistryEntry, or None if the entry has no readable pool id
    """
    if not field_object.is_move_object:
        return None

    fields = field_object.fields
    pool_id = read_object_id(fields, "value", "pool_id")
    if pool_id is None:
        logger.warning(
            "registry_entry_invalid_pool_id",
            entry=short_id(field_object.object_id),
            raw_pool_id=repr(read_str(fields, "value", "pool_id")),
        )
        return None

    created_at = read_int(fields, "value", "created_at", default=0)
    if not 0 <= created_at <= UINT64_MAX:
        logger.warning("registry_entry_invalid_created_at", pool=short_id(pool_id), raw=created_at)
        created_at = 0

    return RegistryEntry(
        pool_id=pool_id,
        created_at=created_at,
        is_active=read_bool(fields, "value", "is_active", default=True),
        type_x=read_str(fields, "name", "type_x", "name"),
        type_y=read_str(fields, "name", "type_y", "name"),
    )


def build_snapshot(
    pool_object: LedgerObject,
    *,
    fallback_types: tuple[str | None, str | None] = (None, None),
    is_active: bool = True,
    created_at: int = 0,
) -> PoolSnapshot | None:
    """Convert a pool object into a PoolSnapshot.

    Args:
        pool_object: Pool object fetched with content and type
        fallback_types: Coin types to use if the pool type is not
            parametrized over exactly two types
        is_active: Registry flag (pools fetched directly default to True)
        created_at: Registry timestamp (pools fetched directly default to 0)

    Returns:
        PoolSnapshot, or None if the object is not a Move object or no pair
        of coin types could be determined
    """
    if not pool_object.is_move_object:
        return None

    type_args = extract_pool_type_args(pool_object.type)
    if type_args is None:
        fallback_x, fallback_y = fallback_types
        if not fallback_x or not fallback_y:
            logger.debug(
                "pool_type_not_parametrized",
                pool=short_id(pool_object.object_id),
                pool_type=pool_object.type,
            )
            return None
        type_args = (fallback_x, fallback_y)

    type_x, type_y = type_args
    reserves = parse_pool_reserves(pool_object.fields, pool_object.object_id)

    return PoolSnapshot(
        id=normalize_object_id(pool_object.object_id),
        token_x=parse_type_to_token(type_x),
        token_y=parse_type_to_token(type_y),
        type_x=type_x,
        type_y=type_y,
        reserve_x=reserves.reserve_x,
        reserve_y=reserves.reserve_y,
        lp_supply=reserves.lp_supply,
        fee_bps=reserves.fee_bps,
        is_active=is_active,
        created_at=created_at,
    )


__all__ = [
    "PoolReserves",
    "RegistryEntry",
    "parse_pool_reserves",
    "parse_registry_entry",
    "build_snapshot",
]
