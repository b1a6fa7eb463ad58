"""Pytest configuration and fixtures."""

import pytest

from poolquote.ledger.reader import MockLedgerReader
from poolquote.pools.registry import RegistryResolver
from tests.helpers import SUI, USDC, make_pool_object, make_registry, object_id


@pytest.fixture
def reader() -> MockLedgerReader:
    """Empty in-memory ledger."""
    return MockLedgerReader()


@pytest.fixture
def resolver(reader: MockLedgerReader) -> RegistryResolver:
    """Resolver over the in-memory ledger."""
    return RegistryResolver(reader)


@pytest.fixture
def sui_usdc_pool_id() -> str:
    return object_id(1)


@pytest.fixture
def populated_reader(reader: MockLedgerReader, sui_usdc_pool_id: str) -> MockLedgerReader:
    """Ledger with a registry holding one SUI/USDC pool."""
    make_registry(
        reader,
        [
            make_pool_object(
                sui_usdc_pool_id,
                SUI,
                USDC,
                balance_x="1000000000000",  # 1000 SUI
                balance_y="3500000000",  # 3500 USDC
            )
        ],
    )
    return reader
