"""Client for the lookup storage service.

Endpoints (relative to `AppSettings.storage_url`):
- `POST /store` with `{domain, subdomains, timestamp}`
- `GET /subdomains/{domain}` (404 when nothing is stored)
- `GET /history` (a JSON array, or `null` when the table is empty)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import LookupRecord
from core.exceptions import StorageError
from core.interfaces.finder import LookupStore
from core.logging import logger

_RECORDS = TypeAdapter(list[LookupRecord] | None)


class StorageApiClient(LookupStore):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    def _url(self, path: str) -> str:
        return self._settings.storage_url.rstrip("/") + path

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with build_async_client(self._settings) as client:
            yield client

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = self._url(path)
        try:
            async with self._session() as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise StorageError(f"storage service unreachable: {exc}") from exc

    async def store(self, record: LookupRecord) -> None:
        payload = record.model_dump(mode="json", exclude_none=True)
        response = await self._request("POST", "/store", json=payload)
        if not response.is_success:
            raise StorageError(_detail(response), status_code=response.status_code)
        logger.info("lookup_stored", domain=record.domain, total=record.total)

    async def get(self, domain: str) -> LookupRecord | None:
        response = await self._request("GET", f"/subdomains/{quote(domain, safe='')}")
        if response.status_code == 404:
            return None
        if not response.is_success:
            raise StorageError(_detail(response), status_code=response.status_code)
        try:
            return LookupRecord.model_validate_json(response.content)
        except ValidationError as exc:
            raise StorageError(f"malformed lookup record for {domain!r}") from exc

    async def history(self) -> list[LookupRecord]:
        response = await self._request("GET", "/history")
        if not response.is_success:
            raise StorageError(_detail(response), status_code=response.status_code)
        try:
            records = _RECORDS.validate_json(response.content)
        except ValidationError as exc:
            raise StorageError("malformed history payload") from exc
        return records or []


def _detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return f"HTTP {response.status_code}"
