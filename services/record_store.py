"""Record store clients — generic CRUD over named record tables.

Two implementations share the :class:`RecordStore` interface:

- :class:`HttpRecordStore` wraps ``httpx.AsyncClient`` against the remote
  store (base URL + API prefix, optional Bearer token, request timing logs,
  connection-pool lifecycle tied to the FastAPI lifespan).
- :class:`InMemoryRecordStore` keeps tables as lists of dicts; used for
  development (``USE_MOCK_DATA=true``) and tests.

Both speak the store's wire shape (camelCase dicts). Entity repositories in
``adapters/`` translate to and from the canonical models.

There is no retry: a failed call raises once and the caller decides
whether to offer a reload.
"""

from __future__ import annotations

import copy
import logging
import time
import uuid
from abc import ABC, abstractmethod
from typing import Any

import httpx

from errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level handle
# ---------------------------------------------------------------------------
_store: RecordStore | None = None


class RecordStore(ABC):
    """Abstract record store; every method works on one named table."""

    async def start(self) -> None:
        """Acquire resources (connection pool). No-op by default."""

    async def close(self) -> None:
        """Release resources. No-op by default."""

    @abstractmethod
    async def list(self, table: str) -> list[dict[str, Any]]:
        """Return every record of ``table``."""

    @abstractmethod
    async def get_by_id(self, table: str, entity_id: str) -> dict[str, Any] | None:
        """Return one record, or None when it does not exist."""

    @abstractmethod
    async def create(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Create a record; the store assigns the id."""

    @abstractmethod
    async def update(self, table: str, entity_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace the given fields of a record. Raises :class:`NotFoundError`."""

    @abstractmethod
    async def delete(self, table: str, entity_id: str) -> bool:
        """Delete a record. Raises :class:`NotFoundError`."""


# ---------------------------------------------------------------------------
# HTTP store
# ---------------------------------------------------------------------------

class HttpRecordStore(RecordStore):
    """Async HTTP client for the remote record store."""

    def __init__(
        self,
        base_url: str,
        api_prefix: str = "/api",
        access_token: str = "",
        timeout: float = 15,
    ) -> None:
        self._base_url = f"{base_url.rstrip('/')}{api_prefix}"
        self._timeout = timeout
        self._access_token = access_token
        self._http: httpx.AsyncClient | None = None

    # -- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        """Create the underlying ``httpx.AsyncClient`` connection pool."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers=self._auth_headers(),
            limits=httpx.Limits(
                max_connections=30,
                max_keepalive_connections=15,
                keepalive_expiry=30,
            ),
        )
        logger.info("HttpRecordStore started — base_url=%s", self._base_url)

    async def close(self) -> None:
        """Gracefully close the connection pool."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.info("HttpRecordStore closed")

    # -- public API ----------------------------------------------------------

    async def list(self, table: str) -> list[dict[str, Any]]:
        body = await self._request("GET", f"/{table}")
        items = _unwrap_data(body)
        if items is None:
            return []
        if not isinstance(items, list):
            raise StoreError(
                status_code=200,
                detail=f"expected a list for table '{table}', got {type(items).__name__}",
                url=f"{self._base_url}/{table}",
                retryable=False,
            )
        return items

    async def get_by_id(self, table: str, entity_id: str) -> dict[str, Any] | None:
        try:
            body = await self._request("GET", f"/{table}/{entity_id}")
        except NotFoundError:
            return None
        return _unwrap_data(body) or None

    async def create(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        body = await self._request("POST", f"/{table}", json_body=fields)
        return _unwrap_data(body)

    async def update(self, table: str, entity_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        body = await self._request("PATCH", f"/{table}/{entity_id}", json_body=fields)
        return _unwrap_data(body)

    async def delete(self, table: str, entity_id: str) -> bool:
        body = await self._request("DELETE", f"/{table}/{entity_id}")
        result = _unwrap_data(body)
        if isinstance(result, bool):
            return result
        return True

    # -- request -------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Execute one HTTP request and map failures onto the error taxonomy.

        - Network errors (``httpx.TransportError``) → :class:`StoreError`, retryable.
        - 404 → :class:`NotFoundError`.
        - Other 4xx → :class:`StoreError`, not retryable.
        - 5xx → :class:`StoreError`, retryable.
        """
        client = self._ensure_started()
        t0 = time.monotonic()
        try:
            response = await client.request(method, path, json=json_body)
        except httpx.TransportError as exc:
            elapsed_ms = (time.monotonic() - t0) * 1000
            logger.warning(
                "%s %s → network error (%.0fms): %s",
                method, path, elapsed_ms, exc,
            )
            raise StoreError(
                status_code=0,
                detail=f"network error: {exc}",
                url=f"{self._base_url}{path}",
            ) from exc

        elapsed_ms = (time.monotonic() - t0) * 1000
        logger.info(
            "%s %s → %d (%.0fms)",
            method, path, response.status_code, elapsed_ms,
        )

        if response.status_code == 404:
            table, _, entity_id = path.lstrip("/").partition("/")
            raise NotFoundError(table=table, entity_id=entity_id, url=str(response.url))

        if response.status_code >= 400:
            detail = response.text[:500] if response.text else f"HTTP {response.status_code}"
            raise StoreError(
                status_code=response.status_code,
                detail=detail,
                url=str(response.url),
                retryable=response.status_code >= 500,
            )

        if not response.text:
            return {}
        return response.json()

    # -- internals -----------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    def _ensure_started(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("HttpRecordStore not started — call await store.start() first")
        return self._http


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class InMemoryRecordStore(RecordStore):
    """Record store backed by per-table lists of dicts.

    Records are deep-copied on the way in and out so callers never share
    state with the store.
    """

    def __init__(self, seed: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self._tables: dict[str, list[dict[str, Any]]] = {
            table: copy.deepcopy(records) for table, records in (seed or {}).items()
        }

    async def list(self, table: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self._tables.get(table, []))

    async def get_by_id(self, table: str, entity_id: str) -> dict[str, Any] | None:
        index = self._find(table, entity_id)
        if index is None:
            return None
        return copy.deepcopy(self._tables[table][index])

    async def create(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        record = {**copy.deepcopy(fields), "id": uuid.uuid4().hex}
        self._tables.setdefault(table, []).append(record)
        return copy.deepcopy(record)

    async def update(self, table: str, entity_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        index = self._find(table, entity_id)
        if index is None:
            raise NotFoundError(table=table, entity_id=entity_id)
        updated = {**self._tables[table][index], **copy.deepcopy(fields), "id": entity_id}
        self._tables[table][index] = updated
        return copy.deepcopy(updated)

    async def delete(self, table: str, entity_id: str) -> bool:
        index = self._find(table, entity_id)
        if index is None:
            raise NotFoundError(table=table, entity_id=entity_id)
        del self._tables[table][index]
        return True

    def size(self, table: str) -> int:
        return len(self._tables.get(table, []))

    def _find(self, table: str, entity_id: str) -> int | None:
        for index, record in enumerate(self._tables.get(table, [])):
            if str(record.get("id")) == str(entity_id):
                return index
        return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _unwrap_data(response: Any) -> Any:
    """Extract the ``data`` field from a ``{"data": ...}`` wrapper.

    If the response is already raw data (no wrapper), return as-is.
    """
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response


# ---------------------------------------------------------------------------
# Process-wide accessor
# ---------------------------------------------------------------------------

def get_record_store() -> RecordStore:
    """Return the process-wide record store (create on first call).

    ``USE_MOCK_DATA=true`` selects an in-memory store seeded with sample
    records; otherwise the HTTP store is built from the record store settings.
    """
    global _store
    if _store is None:
        from config.settings import get_settings

        settings = get_settings()
        if settings.use_mock_data:
            from services.mock_data import SEED

            _store = InMemoryRecordStore(seed=SEED)
            logger.info("Initialized InMemoryRecordStore with sample data")
        else:
            _store = HttpRecordStore(
                base_url=settings.record_store_base_url,
                api_prefix=settings.record_store_api_prefix,
                access_token=settings.record_store_access_token,
                timeout=settings.record_store_timeout,
            )
            logger.info("Initialized HttpRecordStore")
    return _store
