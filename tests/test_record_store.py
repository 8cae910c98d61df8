"""Tests for services/record_store.py — HTTP and in-memory record stores."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from config.settings import Settings
from errors import NotFoundError, StoreError
from services import record_store
from services.mock_data import SEED
from services.record_store import (
    HttpRecordStore,
    InMemoryRecordStore,
    get_record_store,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
async def client():
    """Started HttpRecordStore (not the global singleton)."""
    store = HttpRecordStore(
        "https://store.example.com/",
        api_prefix="/api",
        access_token="test-token",
        timeout=5,
    )
    await store.start()
    yield store
    await store.close()


def _response(status=200, data=None, text=None):
    r = MagicMock()
    r.status_code = status
    if text is None:
        text = "" if data is None else json.dumps(data)
    r.text = text
    r.json.return_value = data
    r.url = "https://store.example.com/api/test"
    return r


# ---------------------------------------------------------------------------
# Construction & lifecycle
# ---------------------------------------------------------------------------

def test_base_url_constructed():
    store = HttpRecordStore("https://store.example.com/", api_prefix="/api")
    assert store._base_url == "https://store.example.com/api"


def test_auth_headers():
    store = HttpRecordStore("https://store.example.com", access_token="test-token")
    assert store._auth_headers() == {"Authorization": "Bearer test-token"}


def test_auth_headers_empty_token():
    store = HttpRecordStore("https://store.example.com")
    assert store._auth_headers() == {}


@pytest.mark.asyncio
async def test_start_and_close():
    store = HttpRecordStore("https://store.example.com")
    await store.start()
    assert store._http is not None
    await store.close()
    assert store._http is None


@pytest.mark.asyncio
async def test_request_before_start_raises():
    store = HttpRecordStore("https://store.example.com")
    with pytest.raises(RuntimeError, match="not started"):
        await store.list("students")


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_unwraps_data(client):
    client._http.request = AsyncMock(
        return_value=_response(data={"data": [{"id": "1"}, {"id": "2"}]})
    )

    result = await client.list("students")

    assert result == [{"id": "1"}, {"id": "2"}]
    client._http.request.assert_awaited_once_with("GET", "/students", json=None)


@pytest.mark.asyncio
async def test_list_accepts_bare_list(client):
    client._http.request = AsyncMock(return_value=_response(data=[{"id": "1"}]))
    assert await client.list("classes") == [{"id": "1"}]


@pytest.mark.asyncio
async def test_list_null_data_is_empty(client):
    client._http.request = AsyncMock(return_value=_response(data={"data": None}))
    assert await client.list("grades") == []


@pytest.mark.asyncio
async def test_list_rejects_non_list(client):
    client._http.request = AsyncMock(return_value=_response(data={"data": {"id": "1"}}))

    with pytest.raises(StoreError) as exc_info:
        await client.list("grades")

    assert exc_info.value.status_code == 200
    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_get_by_id_success(client):
    client._http.request = AsyncMock(return_value=_response(data={"data": {"id": "7"}}))

    assert await client.get_by_id("students", "7") == {"id": "7"}
    client._http.request.assert_awaited_once_with("GET", "/students/7", json=None)


@pytest.mark.asyncio
async def test_get_by_id_404_returns_none(client):
    client._http.request = AsyncMock(return_value=_response(404, text="Not Found"))
    assert await client.get_by_id("students", "404") is None


# ---------------------------------------------------------------------------
# Writes
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_create_posts_body(client):
    client._http.request = AsyncMock(
        return_value=_response(201, data={"data": {"id": "9", "name": "Chemistry"}})
    )

    created = await client.create("classes", {"name": "Chemistry"})

    assert created == {"id": "9", "name": "Chemistry"}
    client._http.request.assert_awaited_once_with(
        "POST", "/classes", json={"name": "Chemistry"},
    )


@pytest.mark.asyncio
async def test_update_404_raises_not_found(client):
    client._http.request = AsyncMock(return_value=_response(404, text="Not Found"))

    with pytest.raises(NotFoundError) as exc_info:
        await client.update("lesson-plans", "42", {"title": "x"})

    assert exc_info.value.table == "lesson-plans"
    assert exc_info.value.entity_id == "42"
    assert exc_info.value.retryable is False


@pytest.mark.asyncio
async def test_delete_empty_body_is_success(client):
    client._http.request = AsyncMock(return_value=_response(204, text=""))
    assert await client.delete("grades", "1") is True


# ---------------------------------------------------------------------------
# Failure mapping (no retry)
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_5xx_is_retryable_store_error(client):
    client._http.request = AsyncMock(return_value=_response(503, text="Service Unavailable"))

    with pytest.raises(StoreError) as exc_info:
        await client.list("students")

    assert exc_info.value.status_code == 503
    assert exc_info.value.retryable is True
    assert client._http.request.call_count == 1


@pytest.mark.asyncio
async def test_4xx_is_not_retryable(client):
    client._http.request = AsyncMock(return_value=_response(400, text="Bad Request"))

    with pytest.raises(StoreError) as exc_info:
        await client.create("grades", {"score": "bad"})

    assert exc_info.value.status_code == 400
    assert exc_info.value.retryable is False
    assert "Bad Request" in exc_info.value.detail


@pytest.mark.asyncio
async def test_network_error_raises_once(client):
    client._http.request = AsyncMock(side_effect=httpx.ConnectError("refused"))

    with pytest.raises(StoreError) as exc_info:
        await client.list("students")

    assert exc_info.value.status_code == 0
    assert exc_info.value.retryable is True
    assert client._http.request.call_count == 1


# ---------------------------------------------------------------------------
# In-memory store
# ---------------------------------------------------------------------------

class TestInMemoryRecordStore:
    @pytest.mark.asyncio
    async def test_list_returns_copies(self):
        store = InMemoryRecordStore(seed=SEED)
        records = await store.list("students")
        records[0]["firstName"] = "Changed"

        again = await store.list("students")
        assert again[0]["firstName"] == "Emma"
        assert SEED["students"][0]["firstName"] == "Emma"

    @pytest.mark.asyncio
    async def test_unknown_table_is_empty(self):
        store = InMemoryRecordStore()
        assert await store.list("students") == []

    @pytest.mark.asyncio
    async def test_create_assigns_id(self):
        store = InMemoryRecordStore()
        created = await store.create("grades", {"id": "ignored", "score": 10})

        assert created["id"] != "ignored"
        assert created["score"] == 10
        assert store.size("grades") == 1

    @pytest.mark.asyncio
    async def test_update_merges_fields(self):
        store = InMemoryRecordStore(seed=SEED)
        updated = await store.update("students", "1", {"email": "emma@new.edu", "id": "x"})

        assert updated["id"] == "1"
        assert updated["email"] == "emma@new.edu"
        assert updated["firstName"] == "Emma"

    @pytest.mark.asyncio
    async def test_update_missing_raises(self):
        store = InMemoryRecordStore(seed=SEED)
        with pytest.raises(NotFoundError):
            await store.update("students", "99", {"email": "x"})

    @pytest.mark.asyncio
    async def test_get_missing_is_none(self):
        store = InMemoryRecordStore(seed=SEED)
        assert await store.get_by_id("students", "99") is None

    @pytest.mark.asyncio
    async def test_delete(self):
        store = InMemoryRecordStore(seed=SEED)
        assert await store.delete("grades", "1") is True
        assert store.size("grades") == len(SEED["grades"]) - 1
        with pytest.raises(NotFoundError):
            await store.delete("grades", "1")


# ---------------------------------------------------------------------------
# Process-wide accessor
# ---------------------------------------------------------------------------

def test_get_record_store_mock_mode(monkeypatch):
    monkeypatch.setattr(record_store, "_store", None)
    with patch("config.settings.get_settings", return_value=Settings(use_mock_data=True)):
        store = get_record_store()

    assert isinstance(store, InMemoryRecordStore)
    assert store.size("students") == len(SEED["students"])
    assert get_record_store() is store


def test_get_record_store_http_mode(monkeypatch):
    monkeypatch.setattr(record_store, "_store", None)
    settings = Settings(
        use_mock_data=False,
        record_store_base_url="https://records.example.com",
        record_store_api_prefix="/v1",
    )
    with patch("config.settings.get_settings", return_value=settings):
        store = get_record_store()

    assert isinstance(store, HttpRecordStore)
    assert store._base_url == "https://records.example.com/v1"
