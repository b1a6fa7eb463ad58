"""API endpoints for pool snapshots and quotes."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from poolquote.config import ResolverConfig
from poolquote.ledger.rpc import SuiRpcReader
from poolquote.models.pool import PoolSnapshot
from poolquote.models.quote import RateQuote, SwapQuote
from poolquote.models.types import short_id
from poolquote.parsing.type_tags import parse_type_to_token
from poolquote.pools.registry import RegistryResolver
from poolquote.pricing.quote import find_pool_for_pair, quote_rate, quote_swap

logger = structlog.get_logger()

router = APIRouter()


class PoolCountResponse(BaseModel):
    count: int


class QuoteResponse(BaseModel):
    quote: SwapQuote | None = None


class RateResponse(BaseModel):
    rate: RateQuote | None = None


@lru_cache(maxsize=1)
def get_config() -> ResolverConfig:
    """Configuration loaded once from the environment."""
    return ResolverConfig.from_env()


@lru_cache(maxsize=1)
def get_default_resolver() -> RegistryResolver:
    """Create the resolver backed by the configured JSON-RPC endpoint."""
    config = get_config()
    logger.info("resolver_created", rpc_url=config.rpc_url, max_concurrency=config.max_concurrency)
    reader = SuiRpcReader(config.rpc_url, timeout=config.request_timeout)
    return RegistryResolver(reader, max_concurrency=config.max_concurrency)


def get_resolver() -> RegistryResolver:
    """Dependency provider for the resolver instance.

    Override this in tests to inject a resolver over a mock ledger:
        app.dependency_overrides[get_resolver] = lambda: resolver
    """
    return get_default_resolver()


def get_registry_id() -> str | None:
    """Dependency provider for the registry object id."""
    return get_config().registry_id


async def _load_pools(resolver: RegistryResolver, registry_id: str | None) -> list[PoolSnapshot]:
    if registry_id is None:
        logger.warning("registry_not_configured")
        return []
    try:
        return await resolver.resolve_all_pools(registry_id)
    except Exception:
        logger.exception("pool_resolution_error", registry=short_id(registry_id))
        return []


@router.get("/pools", response_model=list[PoolSnapshot])
async def list_pools(
    resolver: RegistryResolver = Depends(get_resolver),
    registry_id: str | None = Depends(get_registry_id),
) -> list[PoolSnapshot]:
    """All pools in the configured registry (empty if unavailable)."""
    return await _load_pools(resolver, registry_id)


@router.get("/pools/count")
async def pool_count(
    resolver: RegistryResolver = Depends(get_resolver),
    registry_id: str | None = Depends(get_registry_id),
) -> PoolCountResponse:
    """Number of pools recorded by the registry (0 if unavailable)."""
    if registry_id is None:
        return PoolCountResponse(count=0)
    try:
        count = await resolver.get_pool_count(registry_id)
    except Exception:
        logger.exception("pool_count_error", registry=short_id(registry_id))
        return PoolCountResponse(count=0)
    return PoolCountResponse(count=count)


@router.get("/pools/{pool_id}", response_model=PoolSnapshot)
async def get_pool(
    pool_id: str,
    resolver: RegistryResolver = Depends(get_resolver),
) -> PoolSnapshot:
    """One pool resolved directly by object id."""
    try:
        snapshot = await resolver.resolve_pool(pool_id)
    except Exception:
        logger.exception("pool_resolution_error", pool=short_id(pool_id))
        snapshot = None
    if snapshot is None:
        raise HTTPException(status_code=404, detail="Pool not found")
    return snapshot


@router.get("/quote")
async def get_quote(
    input_type: str = Query(alias="input"),
    output_type: str = Query(alias="output"),
    amount: str = Query(),
    resolver: RegistryResolver = Depends(get_resolver),
    registry_id: str | None = Depends(get_registry_id),
) -> QuoteResponse:
    """Quote selling ``amount`` of ``input`` for ``output``.

    Error Handling:
        - Unknown coin type, no pool for the pair or bad amount: quote is null
        - Resolver exception: logged, quote is null
    """
    input_token = parse_type_to_token(input_type)
    output_token = parse_type_to_token(output_type)
    if input_token is None or output_token is None:
        return QuoteResponse()

    pools = await _load_pools(resolver, registry_id)
    pool = find_pool_for_pair(pools, input_token.address, output_token.address)
    if pool is None:
        logger.info("no_pool_for_pair", input_token=input_token.symbol, output_token=output_token.symbol)
        return QuoteResponse()

    return QuoteResponse(quote=quote_swap(input_token, output_token, amount, pool))


@router.get("/rate")
async def get_rate(
    base: str = Query(),
    quote: str = Query(),
    resolver: RegistryResolver = Depends(get_resolver),
    registry_id: str | None = Depends(get_registry_id),
) -> RateResponse:
    """Spot rate of ``base`` in units of ``quote``."""
    token_a = parse_type_to_token(base)
    token_b = parse_type_to_token(quote)
    if token_a is None or token_b is None:
        return RateResponse()

    pools = await _load_pools(resolver, registry_id)
    pool = find_pool_for_pair(pools, token_a.address, token_b.address)
    if pool is None:
        return RateResponse()

    return RateResponse(rate=quote_rate(token_a, token_b, pool))
