"""Tests for RegistryResolver."""

import asyncio

import pytest

from poolquote.ledger.reader import PACKAGE, LedgerObject, MockLedgerReader
from poolquote.pools.registry import RegistryResolver, resolve_all_pools, resolve_pool
from tests.helpers import (
    FOO,
    REGISTRY_ID,
    SUI,
    TABLE_ID,
    USDC,
    make_entry_name,
    make_entry_object,
    make_pool_object,
    make_registry,
    object_id,
)


def resolve_all(resolver: RegistryResolver, registry_id: str = REGISTRY_ID):
    return asyncio.run(resolver.resolve_all_pools(registry_id))


class TrackingReader(MockLedgerReader):
    """Mock reader that yields during pool fetches and records peak concurrency."""

    def __init__(self) -> None:
        super().__init__()
        self.in_flight = 0
        self.peak = 0

    async def get_object(self, object_id, *, show_content=True, show_type=True):
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(0)
            await asyncio.sleep(0)
            return await super().get_object(object_id, show_content=show_content, show_type=show_type)
        finally:
            self.in_flight -= 1


class BrokenPoolReader(MockLedgerReader):
    """Mock reader that fails with an unexpected error for one pool."""

    def __init__(self, broken_id: str) -> None:
        super().__init__()
        self.broken_id = broken_id

    async def get_object(self, object_id, *, show_content=True, show_type=True):
        if object_id == self.broken_id:
            raise RuntimeError("connection reset")
        return await super().get_object(object_id, show_content=show_content, show_type=show_type)


class TestResolveAllPools:
    """Tests for registry traversal."""

    def test_single_pool(self, populated_reader, sui_usdc_pool_id):
        """A registered pool is materialized with registry bookkeeping."""
        pools = resolve_all(RegistryResolver(populated_reader))

        assert len(pools) == 1
        pool = pools[0]
        assert pool.id == sui_usdc_pool_id
        assert pool.type_x == SUI
        assert pool.type_y == USDC
        assert pool.token_x is not None and pool.token_x.symbol == "SUI"
        assert pool.token_y is not None and pool.token_y.symbol == "USDC"
        assert pool.reserve_x == "1000000000000"
        assert pool.reserve_y == "3500000000"
        assert pool.lp_supply == "1414213562373"
        assert pool.fee_bps == 30
        assert pool.is_active is True
        assert pool.created_at == 1_700_000_000_000

    def test_multiple_pools(self, reader):
        make_registry(
            reader,
            [
                make_pool_object(object_id(1), SUI, USDC),
                make_pool_object(object_id(2), FOO, SUI),
                make_pool_object(object_id(3), FOO, USDC),
            ],
        )
        pools = resolve_all(RegistryResolver(reader))
        assert {p.id for p in pools} == {object_id(1), object_id(2), object_id(3)}

    def test_failed_pool_fetch_skips_only_that_entry(self):
        """One entry whose pool fetch fails leaves exactly one snapshot."""
        reader = MockLedgerReader(failing_ids={object_id(2)})
        make_registry(
            reader,
            [
                make_pool_object(object_id(1), SUI, USDC),
                make_pool_object(object_id(2), FOO, SUI),
            ],
        )
        pools = resolve_all(RegistryResolver(reader))
        assert [p.id for p in pools] == [object_id(1)]

    def test_unexpected_error_skips_only_that_entry(self):
        """A non-ledger failure in one entry does not abort its siblings."""
        reader = BrokenPoolReader(object_id(2))
        make_registry(
            reader,
            [
                make_pool_object(object_id(1), SUI, USDC),
                make_pool_object(object_id(2), FOO, SUI),
                make_pool_object(object_id(3), FOO, USDC),
            ],
        )
        pools = resolve_all(RegistryResolver(reader))
        assert {p.id for p in pools} == {object_id(1), object_id(3)}

    def test_missing_pool_object_skipped(self, reader):
        make_registry(reader, [make_pool_object(object_id(1), SUI, USDC)])
        reader.add_dynamic_field(
            TABLE_ID,
            make_entry_name(FOO, SUI),
            make_entry_object(object_id(99), FOO, SUI),
        )
        pools = resolve_all(RegistryResolver(reader))
        assert [p.id for p in pools] == [object_id(1)]

    def test_missing_registry_returns_empty(self, resolver):
        assert resolve_all(resolver) == []

    def test_registry_without_content_returns_empty(self, reader, resolver):
        reader.add_object(LedgerObject(object_id=REGISTRY_ID, type=None, data_type=PACKAGE))
        assert resolve_all(resolver) == []

    def test_registry_without_pools_table_returns_empty(self, reader, resolver):
        reader.add_object(
            LedgerObject(object_id=REGISTRY_ID, type="0x1::r::R", data_type="moveObject", fields={"pool_count": "3"})
        )
        assert resolve_all(resolver) == []

    def test_registry_fetch_error_returns_empty(self):
        reader = MockLedgerReader(failing_ids={REGISTRY_ID})
        assert resolve_all(RegistryResolver(reader)) == []

    def test_listing_error_returns_empty(self):
        reader = MockLedgerReader(failing_ids={TABLE_ID})
        make_registry(reader, [make_pool_object(object_id(1), SUI, USDC)])
        assert resolve_all(RegistryResolver(reader)) == []

    def test_empty_table(self, reader, resolver):
        make_registry(reader, [])
        assert resolve_all(resolver) == []

    def test_struct_pool_id_is_normalized(self, reader, resolver):
        """pool_id stored as an ID struct resolves like a plain string."""
        make_registry(reader, [])
        reader.add_object(make_pool_object(object_id(1), SUI, USDC))
        reader.add_dynamic_field(
            TABLE_ID,
            make_entry_name(SUI, USDC),
            make_entry_object({"id": "0x1"}, SUI, USDC),
        )
        pools = resolve_all(resolver)
        assert [p.id for p in pools] == [object_id(1)]

    @pytest.mark.parametrize("bad_pool_id", ["not-an-id", None, {"foo": "bar"}, "0x" + "1" * 65])
    def test_invalid_pool_id_skipped(self, reader, resolver, bad_pool_id):
        make_registry(reader, [make_pool_object(object_id(1), SUI, USDC)])
        reader.add_dynamic_field(
            TABLE_ID,
            make_entry_name(FOO, SUI),
            make_entry_object(bad_pool_id, FOO, SUI),
        )
        pools = resolve_all(resolver)
        assert [p.id for p in pools] == [object_id(1)]

    def test_missing_pool_fields_default(self, reader, resolver):
        """Absent balances, supply and fee degrade to defaults."""
        make_registry(
            reader,
            [make_pool_object(object_id(1), SUI, USDC, balance_x=None, balance_y=None, lp_supply=None, fee_bps=None)],
        )
        (pool,) = resolve_all(resolver)
        assert pool.reserve_x == "0"
        assert pool.reserve_y == "0"
        assert pool.lp_supply == "0"
        assert pool.fee_bps == 0

    def test_malformed_pool_fields_default(self, reader, resolver):
        make_registry(
            reader,
            [make_pool_object(object_id(1), SUI, USDC, balance_x="-5", balance_y="abc", fee_bps="999999")],
        )
        (pool,) = resolve_all(resolver)
        assert pool.reserve_x == "0"
        assert pool.reserve_y == "0"
        assert pool.fee_bps == 0

    def test_unparametrized_pool_falls_back_to_key_types(self, reader, resolver):
        """Coin types stored in the table key are used when the pool type has none."""
        make_registry(reader, [])
        reader.add_object(make_pool_object(object_id(1), SUI, USDC, object_type="0xa::pool::Pool"))
        reader.add_dynamic_field(
            TABLE_ID,
            make_entry_name(SUI, USDC),
            make_entry_object(object_id(1), SUI, USDC),
        )
        (pool,) = resolve_all(resolver)
        assert pool.type_x == SUI
        assert pool.type_y == USDC

    def test_unresolvable_token_keeps_raw_type(self, reader, resolver):
        """A type that cannot become a token still appears as the raw string."""
        make_registry(reader, [make_pool_object(object_id(1), "FOO", SUI)])
        (pool,) = resolve_all(resolver)
        assert pool.token_x is None
        assert pool.type_x == "FOO"
        assert pool.token_y is not None

    def test_inactive_flag_propagated(self, reader, resolver):
        make_registry(
            reader,
            [make_pool_object(object_id(1), SUI, USDC), make_pool_object(object_id(2), FOO, SUI)],
            inactive={object_id(2)},
        )
        pools = {p.id: p for p in resolve_all(resolver)}
        assert pools[object_id(1)].is_active is True
        assert pools[object_id(2)].is_active is False

    def test_concurrency_is_capped(self):
        """Entry pipelines never exceed max_concurrency in flight."""
        reader = TrackingReader()
        make_registry(reader, [make_pool_object(object_id(i), FOO, SUI) for i in range(1, 9)])
        pools = resolve_all(RegistryResolver(reader, max_concurrency=2))
        assert len(pools) == 8
        assert reader.peak <= 2

    def test_unbounded_fan_out(self):
        """With no cap, entries overlap."""
        reader = TrackingReader()
        make_registry(reader, [make_pool_object(object_id(i), FOO, SUI) for i in range(1, 9)])
        pools = resolve_all(RegistryResolver(reader, max_concurrency=None))
        assert len(pools) == 8
        assert reader.peak > 1

    def test_each_call_builds_new_list(self, populated_reader):
        resolver = RegistryResolver(populated_reader)
        first = resolve_all(resolver)
        second = resolve_all(resolver)
        assert first == second
        assert first is not second

    def test_invalid_max_concurrency(self, reader):
        with pytest.raises(ValueError):
            RegistryResolver(reader, max_concurrency=0)

    def test_module_function(self, populated_reader):
        pools = asyncio.run(resolve_all_pools(populated_reader, REGISTRY_ID))
        assert len(pools) == 1


class TestGetPoolCount:
    """Tests for reading the registry pool counter."""

    def test_count(self, populated_reader):
        assert asyncio.run(RegistryResolver(populated_reader).get_pool_count(REGISTRY_ID)) == 1

    def test_missing_registry(self, resolver):
        assert asyncio.run(resolver.get_pool_count(REGISTRY_ID)) == 0

    def test_fetch_error(self):
        reader = MockLedgerReader(failing_ids={REGISTRY_ID})
        assert asyncio.run(RegistryResolver(reader).get_pool_count(REGISTRY_ID)) == 0


class TestResolvePool:
    """Tests for resolving a single pool by id."""

    def test_resolves_pool(self, populated_reader, sui_usdc_pool_id):
        pool = asyncio.run(RegistryResolver(populated_reader).resolve_pool(sui_usdc_pool_id))
        assert pool is not None
        assert pool.id == sui_usdc_pool_id
        assert pool.reserve_y == "3500000000"
        assert pool.fee_bps == 30

    def test_bypasses_registry_bookkeeping(self, reader, resolver):
        """Direct resolution always reports active and created_at 0."""
        make_registry(reader, [make_pool_object(object_id(1), SUI, USDC)], inactive={object_id(1)})
        pool = asyncio.run(resolver.resolve_pool(object_id(1)))
        assert pool is not None
        assert pool.is_active is True
        assert pool.created_at == 0

    def test_short_id_accepted(self, populated_reader):
        pool = asyncio.run(resolve_pool(populated_reader, "0x1"))
        assert pool is not None
        assert pool.id == object_id(1)

    def test_missing_object(self, resolver):
        assert asyncio.run(resolver.resolve_pool(object_id(1))) is None

    def test_unparametrized_type(self, reader, resolver):
        """An object without a two-argument generic type is not a pool."""
        reader.add_object(make_pool_object(object_id(1), SUI, USDC, object_type="0xa::pool::Pool"))
        assert asyncio.run(resolver.resolve_pool(object_id(1))) is None

    def test_not_a_move_object(self, reader, resolver):
        reader.add_object(LedgerObject(object_id=object_id(1), data_type=PACKAGE))
        assert asyncio.run(resolver.resolve_pool(object_id(1))) is None

    def test_invalid_id(self, resolver):
        assert asyncio.run(resolver.resolve_pool("pool-1")) is None

    def test_fetch_error(self):
        reader = MockLedgerReader(failing_ids={object_id(1)})
        assert asyncio.run(RegistryResolver(reader).resolve_pool(object_id(1))) is None
