"""Pool resolution from the on-chain registry.

The registry object holds a ``Table<PoolKey, PoolInfo>`` in its ``pools``
field. Tables are stored as dynamic fields of the table's own UID, so
resolution is:

    registry object -> table id -> dynamic field entries
        -> PoolInfo (pool_id, created_at, is_active) -> pool object

Entry pipelines are independent and run concurrently. Absence at any level
is reported as an empty list or None, never as an exception.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from poolquote.config import DEFAULT_MAX_CONCURRENCY
from poolquote.errors import LedgerError
from poolquote.ledger.fields import read_int, read_object_id
from poolquote.ledger.reader import DynamicFieldInfo, LedgerReader
from poolquote.models.pool import PoolSnapshot
from poolquote.models.types import is_valid_object_id, short_id
from poolquote.pools.parsing import build_snapshot, parse_registry_entry

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

logger = structlog.get_logger()


class RegistryResolver:
    """Resolves pool snapshots through a ledger reader.

    Every call builds a new list of snapshots; nothing is cached between
    calls.
    """

    def __init__(
        self,
        reader: LedgerReader,
        max_concurrency: int | None = DEFAULT_MAX_CONCURRENCY,
    ) -> None:
        """Initialize the resolver.

        Args:
            reader: Ledger read client
            max_concurrency: Cap on concurrent entry pipelines (None = unbounded)
        """
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError(f"max_concurrency must be positive or None, got {max_concurrency}")
        self.reader = reader
        self.max_concurrency = max_concurrency

    async def get_pools_table_id(self, registry_id: str) -> str | None:
        """Get the id of the registry's pool table.

        Returns:
            Table object id, or None if the registry is missing or unreadable
        """
        try:
            registry = await self.reader.get_object(registry_id, show_content=True, show_type=True)
        except LedgerError as e:
            logger.warning("registry_fetch_failed", registry=short_id(registry_id), error=str(e))
            return None

        if registry is None or not registry.is_move_object:
            logger.info("registry_not_found", registry=short_id(registry_id))
            return None

        table_id = read_object_id(registry.fields, "pools", "id", "id")
        if table_id is None:
            logger.warning("registry_missing_pools_table", registry=short_id(registry_id))
        return table_id

    async def get_pool_count(self, registry_id: str) -> int:
        """Read the registry's ``pool_count`` field.

        Returns:
            Number of registered pools, or 0 if the registry is unreadable
        """
        try:
            registry = await self.reader.get_object(registry_id, show_content=True, show_type=True)
        except LedgerError as e:
            logger.warning("registry_fetch_failed", registry=short_id(registry_id), error=str(e))
            return 0

        if registry is None or not registry.is_move_object:
            return 0
        return max(read_int(registry.fields, "pool_count", default=0), 0)

    async def resolve_all_pools(self, registry_id: str) -> list[PoolSnapshot]:
        """Resolve every pool listed in the registry.

        Entries that cannot be read (missing objects, malformed fields,
        ledger or unexpected errors) are skipped; siblings are unaffected.
        Result order does not follow the table order.

        Args:
            registry_id: Object id of the registry

        Returns:
            List of snapshots (empty if the registry is missing)
        """
        table_id = await self.get_pools_table_id(registry_id)
        if table_id is None:
            return []

        try:
            entries = await self.reader.get_dynamic_fields(table_id)
        except LedgerError as e:
            logger.warning("registry_listing_failed", table=short_id(table_id), error=str(e))
            return []

        if not entries:
            return []

        semaphore: AbstractAsyncContextManager[object] = (
            asyncio.Semaphore(self.max_concurrency)
            if self.max_concurrency is not None
            else contextlib.nullcontext()
        )
        results = await asyncio.gather(
            *(self._resolve_entry(table_id, entry, semaphore) for entry in entries)
        )
        snapshots = [s for s in results if s is not None]

        logger.info(
            "registry_resolved",
            registry=short_id(registry_id),
            entries=len(entries),
            pools=len(snapshots),
            skipped=len(entries) - len(snapshots),
        )
        return snapshots

    async def _resolve_entry(
        self,
        table_id: str,
        entry: DynamicFieldInfo,
        semaphore: AbstractAsyncContextManager[object],
    ) -> PoolSnapshot | None:
        """Fetch one table entry and its pool object, then build a snapshot."""
        async with semaphore:
            try:
                field_object = await self.reader.get_dynamic_field_object(table_id, entry.name)
                if field_object is None:
                    logger.warning("pool_entry_skipped", entry=short_id(entry.object_id), reason="entry_not_found")
                    return None

                info = parse_registry_entry(field_object)
                if info is None:
                    logger.warning("pool_entry_skipped", entry=short_id(entry.object_id), reason="malformed_entry")
                    return None

                pool_object = await self.reader.get_object(info.pool_id, show_content=True, show_type=True)
                if pool_object is None:
                    logger.warning("pool_entry_skipped", pool=short_id(info.pool_id), reason="pool_not_found")
                    return None

                snapshot = build_snapshot(
                    pool_object,
                    fallback_types=(info.type_x, info.type_y),
                    is_active=info.is_active,
                    created_at=info.created_at,
                )
            except LedgerError as e:
                logger.warning("pool_fetch_failed", entry=short_id(entry.object_id), error=str(e))
                return None
            except ValidationError as e:
                logger.warning(
                    "pool_entry_skipped",
                    entry=short_id(entry.object_id),
                    reason="invalid_snapshot",
                    error_count=e.error_count(),
                )
                return None
            except Exception:
                logger.exception("pool_entry_failed", entry=short_id(entry.object_id))
                return None

        if snapshot is None:
            logger.warning("pool_entry_skipped", pool=short_id(info.pool_id), reason="not_a_pool")
        return snapshot

    async def resolve_pool(self, pool_id: str) -> PoolSnapshot | None:
        """Resolve one pool directly by object id, bypassing the registry.

        Registry bookkeeping is not consulted, so ``is_active`` is always
        True and ``created_at`` is always 0.

        Returns:
            Snapshot, or None if the object is missing, not a Move object,
            or not parametrized over exactly two coin types
        """
        if not is_valid_object_id(pool_id):
            logger.debug("invalid_pool_id", pool_id=pool_id)
            return None

        try:
            pool_object = await self.reader.get_object(pool_id, show_content=True, show_type=True)
        except LedgerError as e:
            logger.warning("pool_fetch_failed", pool=short_id(pool_id), error=str(e))
            return None

        if pool_object is None:
            return None

        try:
            return build_snapshot(pool_object, is_active=True, created_at=0)
        except ValidationError as e:
            logger.warning("pool_snapshot_invalid", pool=short_id(pool_id), error_count=e.error_count())
            return None


async def resolve_all_pools(
    reader: LedgerReader,
    registry_id: str,
    max_concurrency: int | None = DEFAULT_MAX_CONCURRENCY,
) -> list[PoolSnapshot]:
    """Resolve every pool in a registry with a one-off resolver."""
    return await RegistryResolver(reader, max_concurrency).resolve_all_pools(registry_id)


async def resolve_pool(reader: LedgerReader, pool_id: str) -> PoolSnapshot | None:
    """Resolve one pool by id with a one-off resolver."""
    return await RegistryResolver(reader).resolve_pool(pool_id)


__all__ = [
    "RegistryResolver",
    "resolve_all_pools",
    "resolve_pool",
]
