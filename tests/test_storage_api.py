"""Tests for the storage service client."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import httpx
import pytest

from adapters.storage_api import StorageApiClient
from core.config import AppSettings
from core.domain.models import LookupRecord
from core.exceptions import StorageError


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_store_posts_record():
    captured: list[httpx.Request] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json={"message": "Subdomains stored successfully"})

    record = LookupRecord(
        domain="example.com",
        subdomains=["www.example.com"],
        timestamp=datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
    )
    async with _client(handler) as client:
        await StorageApiClient(AppSettings(), client=client).store(record)

    (request,) = captured
    assert request.method == "POST"
    assert str(request.url) == "http://localhost:3001/store"
    body = json.loads(request.content)
    assert body["domain"] == "example.com"
    assert body["subdomains"] == ["www.example.com"]
    assert body["timestamp"].startswith("2025-01-02T03:04:05")


@pytest.mark.asyncio
async def test_store_omits_missing_timestamp():
    bodies: list[dict] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    async with _client(handler) as client:
        await StorageApiClient(AppSettings(), client=client).store(LookupRecord(domain="example.com"))

    assert "timestamp" not in bodies[0]


@pytest.mark.asyncio
async def test_store_failure_raises():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to store data"})

    async with _client(handler) as client:
        with pytest.raises(StorageError) as info:
            await StorageApiClient(AppSettings(), client=client).store(LookupRecord(domain="example.com"))

    assert info.value.status_code == 500
    assert info.value.detail == "Failed to store data"


@pytest.mark.asyncio
async def test_get_returns_record():
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/subdomains/example.com"
        return httpx.Response(
            200,
            json={
                "domain": "example.com",
                "subdomains": ["b.example.com", "a.example.com"],
                "timestamp": "2025-06-01T10:00:00Z",
            },
        )

    async with _client(handler) as client:
        record = await StorageApiClient(AppSettings(), client=client).get("example.com")

    assert record is not None
    assert record.total == 2
    assert record.sorted_subdomains() == ["a.example.com", "b.example.com"]
    assert record.timestamp == datetime(2025, 6, 1, 10, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_get_missing_returns_none():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "No data found for domain: nope.io"})

    async with _client(handler) as client:
        assert await StorageApiClient(AppSettings(), client=client).get("nope.io") is None


@pytest.mark.asyncio
async def test_history_handles_null_payload():
    async def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/history"
        return httpx.Response(200, content=b"null", headers={"Content-Type": "application/json"})

    async with _client(handler) as client:
        assert await StorageApiClient(AppSettings(), client=client).history() == []


@pytest.mark.asyncio
async def test_history_parses_records():
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[
                {"domain": "a.io", "subdomains": ["x.a.io"], "timestamp": "2025-01-01T00:00:00Z"},
                {"domain": "b.io", "subdomains": [], "timestamp": "2025-02-01T00:00:00Z"},
            ],
        )

    async with _client(handler) as client:
        records = await StorageApiClient(AppSettings(), client=client).history()

    assert [r.domain for r in records] == ["a.io", "b.io"]


@pytest.mark.asyncio
async def test_unreachable_service_raises():
    async def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _client(handler) as client:
        with pytest.raises(StorageError):
            await StorageApiClient(AppSettings(), client=client).history()
