"""Sui JSON-RPC read client.

Makes JSON-RPC 2.0 POST requests with an ``httpx.AsyncClient``. Objects
that do not exist map to None; HTTP and protocol failures raise
LedgerRpcError so that callers can decide per request whether to skip or
propagate.
"""

from __future__ import annotations

import itertools
from typing import Any

import httpx
import structlog

from poolquote.errors import LedgerRpcError
from poolquote.ledger.reader import DynamicFieldInfo, DynamicFieldName, LedgerObject
from poolquote.models.types import normalize_object_id, short_id

logger = structlog.get_logger()

# Public fullnode endpoint (mainnet)
DEFAULT_RPC_URL = "https://fullnode.mainnet.sui.io:443"
DEFAULT_TIMEOUT = 10.0

# Page size for suix_getDynamicFields (the node caps this at 50)
DYNAMIC_FIELDS_PAGE_SIZE = 50

# Upper bound on pages followed for a single listing
MAX_DYNAMIC_FIELD_PAGES = 1_000


def parse_object_response(response: dict[str, Any]) -> LedgerObject | None:
    """Convert a ``SuiObjectResponse`` into a LedgerObject.

    Args:
        response: The ``result`` of sui_getObject / suix_getDynamicFieldObject

    Returns:
        LedgerObject, or None if the response carries an error such as
        ``notExists`` or ``deleted``
    """
    data = response.get("data")
    if not isinstance(data, dict):
        error = response.get("error")
        if error is not None:
            logger.debug("object_not_available", error=error)
        return None

    object_id = data.get("objectId")
    if not isinstance(object_id, str):
        return None

    content = data.get("content")
    if not isinstance(content, dict):
        content = {}

    object_type = data.get("type") or content.get("type")
    fields = content.get("fields")

    return LedgerObject(
        object_id=normalize_object_id(object_id),
        type=object_type if isinstance(object_type, str) else None,
        data_type=content.get("dataType"),
        fields=fields if isinstance(fields, dict) else {},
    )


def parse_dynamic_field_info(entry: dict[str, Any]) -> DynamicFieldInfo | None:
    """Convert one ``DynamicFieldInfo`` entry of a listing page."""
    name = entry.get("name")
    object_id = entry.get("objectId")
    if not isinstance(name, dict) or not isinstance(object_id, str):
        return None
    return DynamicFieldInfo(
        name=DynamicFieldName(type=str(name.get("type", "")), value=name.get("value")),
        object_id=normalize_object_id(object_id),
        object_type=entry.get("objectType"),
    )


class SuiRpcReader:
    """Ledger reader backed by a Sui fullnode JSON-RPC endpoint."""

    def __init__(
        self,
        url: str = DEFAULT_RPC_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the reader.

        Args:
            url: JSON-RPC endpoint URL
            timeout: Request timeout in seconds (ignored when client is given)
            client: Pre-configured client to use instead of creating one
        """
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._request_ids = itertools.count(1)

    async def __aenter__(self) -> SuiRpcReader:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this reader created it."""
        if self._owns_client:
            await self._client.aclose()

    async def _call(self, method: str, params: list[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }
        try:
            response = await self._client.post(self.url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise LedgerRpcError(
                f"{method} failed with HTTP {e.response.status_code}",
                code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise LedgerRpcError(f"{method} transport error: {e}") from e
        except ValueError as e:
            raise LedgerRpcError(f"{method} returned invalid JSON") from e

        if not isinstance(body, dict):
            raise LedgerRpcError(f"{method} returned a non-object body")

        error = body.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise LedgerRpcError(f"{method} error: {message}", code=code)

        return body.get("result")

    async def get_object(
        self,
        object_id: str,
        *,
        show_content: bool = True,
        show_type: bool = True,
    ) -> LedgerObject | None:
        result = await self._call(
            "sui_getObject",
            [object_id, {"showContent": show_content, "showType": show_type}],
        )
        if not isinstance(result, dict):
            return None
        return parse_object_response(result)

    async def get_dynamic_fields(self, parent_id: str) -> list[DynamicFieldInfo]:
        entries: list[DynamicFieldInfo] = []
        cursor: str | None = None

        for _ in range(MAX_DYNAMIC_FIELD_PAGES):
            page = await self._call(
                "suix_getDynamicFields",
                [parent_id, cursor, DYNAMIC_FIELDS_PAGE_SIZE],
            )
            if not isinstance(page, dict):
                break

            for raw in page.get("data") or []:
                info = parse_dynamic_field_info(raw) if isinstance(raw, dict) else None
                if info is None:
                    logger.warning("dynamic_field_entry_malformed", parent=short_id(parent_id))
                    continue
                entries.append(info)

            cursor = page.get("nextCursor")
            if not page.get("hasNextPage") or cursor is None:
                break
        else:
            logger.warning(
                "dynamic_fields_page_limit_reached",
                parent=short_id(parent_id),
                entries=len(entries),
            )

        return entries

    async def get_dynamic_field_object(
        self,
        parent_id: str,
        name: DynamicFieldName,
    ) -> LedgerObject | None:
        result = await self._call("suix_getDynamicFieldObject", [parent_id, dict(name)])
        if not isinstance(result, dict):
            return None
        return parse_object_response(result)


__all__ = [
    "DEFAULT_RPC_URL",
    "SuiRpcReader",
    "parse_object_response",
    "parse_dynamic_field_info",
]
