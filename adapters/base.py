"""Repository plumbing shared by every entity adapter.

- :class:`FieldMap` — explicit bidirectional table between canonical
  (snake_case) field names and the store's wire (camelCase) names.
- :class:`EntityRepository` — typed CRUD over one record-store table,
  returning parsed entity models.
"""

from __future__ import annotations

import datetime as dt
import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from errors import NotFoundError, RecordValidationError, StoreError
from services.record_store import RecordStore

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)

_DRAFT_ID = "__draft__"


# ---------------------------------------------------------------------------
# Field mapping
# ---------------------------------------------------------------------------

class FieldMap:
    """Canonical ↔ wire field names for one table.

    Writes accept either spelling of a known field; reads keep known wire
    fields only.
    """

    def __init__(self, canonical_to_wire: dict[str, str]) -> None:
        self._to_wire = dict(canonical_to_wire)
        self._from_wire = {wire: canonical for canonical, wire in canonical_to_wire.items()}

    def canonical_key(self, key: str) -> str | None:
        """Resolve either spelling of a field to its canonical name."""
        if key in self._to_wire:
            return key
        return self._from_wire.get(key)

    def normalize(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Rename every key to its canonical name.

        Raises:
            RecordValidationError: On a field this table does not have.
        """
        canonical: dict[str, Any] = {}
        for key, value in fields.items():
            name = self.canonical_key(key)
            if name is None:
                raise RecordValidationError(key, "unknown field")
            canonical[name] = value
        return canonical

    def to_wire(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Canonical (or mixed) field dict → JSON-safe wire dict."""
        return {
            self._to_wire[name]: _wire_value(value)
            for name, value in self.normalize(fields).items()
        }

    def from_wire(self, raw: dict[str, Any]) -> dict[str, Any]:
        """Wire record → canonical field dict (unknown wire fields dropped)."""
        return {
            self._from_wire[key]: value
            for key, value in raw.items()
            if key in self._from_wire
        }


def _wire_value(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _wire_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_wire_value(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class EntityRepository(Generic[EntityT]):
    """Typed CRUD wrapper over one record-store table.

    Subclasses set ``table``, ``model`` and ``field_map`` and may override
    :meth:`prepare_create` / :meth:`prepare_update` for defaults and
    write validation. Both hooks receive canonical field dicts.
    """

    table: str
    model: type[EntityT]
    field_map: FieldMap

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    # -- reads ---------------------------------------------------------------

    async def list(self) -> list[EntityT]:
        records = await self._store.list(self.table)
        return [self.parse(raw) for raw in records]

    async def get_by_id(self, entity_id: str) -> EntityT | None:
        raw = await self._store.get_by_id(self.table, entity_id)
        if raw is None:
            return None
        return self.parse(raw)

    # -- writes --------------------------------------------------------------

    async def create(self, fields: dict[str, Any]) -> EntityT:
        """Validate a full record, let the store assign its id, return it parsed."""
        canonical = self.field_map.normalize(fields)
        canonical.pop("id", None)
        canonical = self.prepare_create(canonical)
        draft = self._validate({**canonical, "id": _DRAFT_ID})
        wire = self.field_map.to_wire(draft.model_dump(exclude={"id"}))
        raw = await self._store.create(self.table, wire)
        created = self.parse(raw)
        logger.info("Created %s %s", self.table, getattr(created, "id", "?"))
        return created

    async def update(self, entity_id: str, fields: dict[str, Any]) -> EntityT:
        """Replace the given fields; untouched fields keep their stored values.

        The stored record merged with ``fields`` must still be a valid
        entity, otherwise nothing is written.

        Raises:
            NotFoundError: No record with ``entity_id``.
            RecordValidationError: The merged record is invalid.
        """
        canonical = self.field_map.normalize(fields)
        canonical.pop("id", None)
        canonical = self.prepare_update(canonical)

        current = await self._store.get_by_id(self.table, entity_id)
        if current is None:
            raise NotFoundError(table=self.table, entity_id=entity_id)
        self._validate({**self.field_map.from_wire(current), **canonical, "id": entity_id})

        raw = await self._store.update(self.table, entity_id, self.field_map.to_wire(canonical))
        return self.parse(raw)

    async def delete(self, entity_id: str) -> bool:
        deleted = await self._store.delete(self.table, entity_id)
        logger.info("Deleted %s %s", self.table, entity_id)
        return deleted

    # -- hooks ---------------------------------------------------------------

    def prepare_create(self, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    def prepare_update(self, fields: dict[str, Any]) -> dict[str, Any]:
        return fields

    # -- conversions ---------------------------------------------------------

    def parse(self, raw: dict[str, Any]) -> EntityT:
        """Convert one wire record to the entity model.

        Raises:
            StoreError: When the store returned a record the model rejects.
        """
        try:
            return self.model.model_validate(self.field_map.from_wire(raw))
        except ValidationError as exc:
            raise StoreError(
                status_code=200,
                detail=f"malformed {self.table} record {raw.get('id', '?')}: {exc.errors()[0]['msg']}",
                retryable=False,
            ) from exc

    def _validate(self, canonical: dict[str, Any]) -> EntityT:
        try:
            return self.model.model_validate(canonical)
        except ValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or self.table
            raise RecordValidationError(field, first["msg"]) from exc
