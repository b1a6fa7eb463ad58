"""Ledger read clients and field access helpers."""

from poolquote.ledger.reader import (
    DynamicFieldInfo,
    DynamicFieldName,
    LedgerObject,
    LedgerReader,
    MockLedgerReader,
)
from poolquote.ledger.rpc import SuiRpcReader

__all__ = [
    "DynamicFieldInfo",
    "DynamicFieldName",
    "LedgerObject",
    "LedgerReader",
    "MockLedgerReader",
    "SuiRpcReader",
]
