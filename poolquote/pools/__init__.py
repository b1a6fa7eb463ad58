"""Pool resolution package.

Provides RegistryResolver for turning registry and pool objects into
PoolSnapshot lists.
"""

from .parsing import build_snapshot, parse_pool_reserves, parse_registry_entry
from .registry import RegistryResolver, resolve_all_pools, resolve_pool

__all__ = [
    "RegistryResolver",
    "resolve_all_pools",
    "resolve_pool",
    "build_snapshot",
    "parse_pool_reserves",
    "parse_registry_entry",
]
