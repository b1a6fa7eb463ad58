"""Ledger read interface and an in-memory implementation for testing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog
from typing_extensions import TypedDict

from poolquote.errors import LedgerRpcError
from poolquote.models.types import normalize_object_id

logger = structlog.get_logger()

# Move content data types returned by the ledger
MOVE_OBJECT = "moveObject"
PACKAGE = "package"


class DynamicFieldName(TypedDict):
    """Key of a dynamic field, as returned by the ledger."""

    type: str
    value: Any


@dataclass(frozen=True)
class LedgerObject:
    """A ledger object as seen through the read API.

    ``fields`` is the raw nested field map of the Move struct (empty when
    content was not requested or the object is a package).
    """

    object_id: str
    type: str | None = None
    data_type: str | None = None
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def is_move_object(self) -> bool:
        """Return True if this is a typed data object with content."""
        return self.data_type == MOVE_OBJECT


@dataclass(frozen=True)
class DynamicFieldInfo:
    """One entry of a dynamic field listing."""

    name: DynamicFieldName
    object_id: str
    object_type: str | None = None


class LedgerReader(Protocol):
    """Protocol for ledger read clients.

    This allows swapping between the JSON-RPC client and the mock reader
    for testing. Absent objects are reported as None; transport failures
    raise LedgerError.
    """

    async def get_object(
        self,
        object_id: str,
        *,
        show_content: bool = True,
        show_type: bool = True,
    ) -> LedgerObject | None:
        """Fetch an object by id.

        Args:
            object_id: Ledger object id
            show_content: Include the struct field map
            show_type: Include the fully-qualified type string

        Returns:
            The object, or None if it does not exist
        """
        ...

    async def get_dynamic_fields(self, parent_id: str) -> list[DynamicFieldInfo]:
        """List every dynamic field attached to a parent object.

        Returns:
            Complete list of entries (implementations follow pagination)
        """
        ...

    async def get_dynamic_field_object(
        self,
        parent_id: str,
        name: DynamicFieldName,
    ) -> LedgerObject | None:
        """Fetch the value stored under a dynamic field key.

        Returns:
            The field object, or None if the key does not exist
        """
        ...


def name_key(name: DynamicFieldName) -> str:
    """Stable hashable key for a dynamic field name."""
    return json.dumps(name, sort_keys=True, default=str)


class MockLedgerReader:
    """In-memory ledger for tests.

    Configure with objects and dynamic fields, and track calls for assertions.
    Ids listed in ``failing_ids`` raise LedgerRpcError when fetched.
    """

    def __init__(
        self,
        objects: dict[str, LedgerObject] | None = None,
        failing_ids: set[str] | None = None,
    ):
        self.objects: dict[str, LedgerObject] = {}
        self.dynamic_fields: dict[str, list[DynamicFieldInfo]] = {}
        self.field_objects: dict[tuple[str, str], LedgerObject] = {}
        self.failing_ids = {normalize_object_id(i) for i in failing_ids or set()}
        self.calls: list[tuple[str, str]] = []  # (method, id)
        for obj in (objects or {}).values():
            self.add_object(obj)

    def add_object(self, obj: LedgerObject) -> None:
        """Register an object under its normalized id."""
        self.objects[normalize_object_id(obj.object_id)] = obj

    def add_dynamic_field(
        self,
        parent_id: str,
        name: DynamicFieldName,
        field_object: LedgerObject,
    ) -> None:
        """Attach a dynamic field entry to a parent object."""
        parent = normalize_object_id(parent_id)
        info = DynamicFieldInfo(
            name=name,
            object_id=field_object.object_id,
            object_type=field_object.type,
        )
        self.dynamic_fields.setdefault(parent, []).append(info)
        self.field_objects[(parent, name_key(name))] = field_object

    def _check_failure(self, object_id: str) -> None:
        if object_id in self.failing_ids:
            raise LedgerRpcError(f"Simulated failure fetching {object_id}")

    async def get_object(
        self,
        object_id: str,
        *,
        show_content: bool = True,
        show_type: bool = True,
    ) -> LedgerObject | None:
        oid = normalize_object_id(object_id)
        self.calls.append(("get_object", oid))
        self._check_failure(oid)
        obj = self.objects.get(oid)
        if obj is None:
            return None
        return LedgerObject(
            object_id=obj.object_id,
            type=obj.type if show_type else None,
            data_type=obj.data_type if show_content else None,
            fields=obj.fields if show_content else {},
        )

    async def get_dynamic_fields(self, parent_id: str) -> list[DynamicFieldInfo]:
        parent = normalize_object_id(parent_id)
        self.calls.append(("get_dynamic_fields", parent))
        self._check_failure(parent)
        return list(self.dynamic_fields.get(parent, []))

    async def get_dynamic_field_object(
        self,
        parent_id: str,
        name: DynamicFieldName,
    ) -> LedgerObject | None:
        parent = normalize_object_id(parent_id)
        self.calls.append(("get_dynamic_field_object", parent))
        field_object = self.field_objects.get((parent, name_key(name)))
        if field_object is not None:
            self._check_failure(normalize_object_id(field_object.object_id))
        return field_object


__all__ = [
    "MOVE_OBJECT",
    "PACKAGE",
    "DynamicFieldName",
    "DynamicFieldInfo",
    "LedgerObject",
    "LedgerReader",
    "MockLedgerReader",
    "name_key",
]
