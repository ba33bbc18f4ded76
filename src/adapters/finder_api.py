"""Client for the discovery service (`POST /find`).

The service runs the enumeration tools server-side; for us it is only
"something that accepts a domain and returns a string list".

Every failure is raised as `FetchFailed`:
- network: connection errors, invalid URLs, timeouts (only when configured)
- status: any non-2xx response (the `{"error": ...}` body is kept as detail)
- malformed: a 2xx body that is not a JSON array of strings
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.models import SUBDOMAIN_LIST, FindRequest
from core.exceptions import FailureReason, FetchFailed
from core.interfaces.finder import SubdomainFinder
from core.logging import logger


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return response.text[:200]


class FinderApiClient(SubdomainFinder):
    """Calls the finder endpoint configured in `AppSettings.finder_url`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = client

    @property
    def url(self) -> str:
        return self._settings.finder_url

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with build_async_client(self._settings) as client:
            yield client

    async def find(self, domain: str) -> list[str]:
        body = FindRequest(domain=domain).model_dump()
        logger.debug("finder_request", url=self.url, domain=domain)

        try:
            async with self._session() as client:
                # `json=` sets Content-Type: application/json.
                response = await client.post(self.url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchFailed(FailureReason.NETWORK, str(exc) or type(exc).__name__) from exc

        if not response.is_success:
            raise FetchFailed(
                FailureReason.STATUS,
                _error_detail(response),
                status_code=response.status_code,
            )

        try:
            return SUBDOMAIN_LIST.validate_json(response.content)
        except ValidationError as exc:
            raise FetchFailed(
                FailureReason.MALFORMED,
                f"expected a JSON array of strings ({exc.error_count()} errors)",
                status_code=response.status_code,
            ) from exc
