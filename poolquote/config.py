"""Resolver configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

from poolquote.ledger.rpc import DEFAULT_RPC_URL, DEFAULT_TIMEOUT

# Concurrent per-entry pipelines during registry resolution
DEFAULT_MAX_CONCURRENCY = 16


@dataclass(frozen=True)
class ResolverConfig:
    """Centralized configuration for pool resolution.

    Attributes:
        rpc_url: Sui fullnode JSON-RPC endpoint
        registry_id: Object id of the pool registry (None until deployed)
        request_timeout: Per-request timeout in seconds
        max_concurrency: Cap on concurrent registry entry pipelines.
            None means unbounded fan-out.
    """

    rpc_url: str = DEFAULT_RPC_URL
    registry_id: str | None = None
    request_timeout: float = DEFAULT_TIMEOUT
    max_concurrency: int | None = DEFAULT_MAX_CONCURRENCY

    def __post_init__(self) -> None:
        if self.max_concurrency is not None and self.max_concurrency < 1:
            raise ValueError(f"max_concurrency must be positive or None, got {self.max_concurrency}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls) -> ResolverConfig:
        """Build a configuration from environment variables.

        - POOLQUOTE_RPC_URL: JSON-RPC endpoint (default: Sui mainnet fullnode)
        - POOLQUOTE_REGISTRY_ID: Registry object id (default: unset)
        - POOLQUOTE_TIMEOUT: Request timeout in seconds (default: 10)
        - POOLQUOTE_MAX_CONCURRENCY: Entry fan-out cap, 0 for unbounded (default: 16)
        """
        concurrency = int(os.environ.get("POOLQUOTE_MAX_CONCURRENCY", str(DEFAULT_MAX_CONCURRENCY)))
        return cls(
            rpc_url=os.environ.get("POOLQUOTE_RPC_URL", DEFAULT_RPC_URL),
            registry_id=os.environ.get("POOLQUOTE_REGISTRY_ID") or None,
            request_timeout=float(os.environ.get("POOLQUOTE_TIMEOUT", str(DEFAULT_TIMEOUT))),
            max_concurrency=concurrency if concurrency > 0 else None,
        )


# Default configuration instance
DEFAULT_RESOLVER_CONFIG = ResolverConfig()
