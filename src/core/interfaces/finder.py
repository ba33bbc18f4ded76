"""Contracts for the remote collaborators.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The HTTP adapters and test fakes are interchangeable without coupling the
  Core to a concrete client.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import LookupRecord


@runtime_checkable
class SubdomainFinder(Protocol):
    """Minimal contract for the discovery service.

    Design rules:
    - `find` is asynchronous because it performs I/O (HTTP).
    - Any failure is raised as `core.exceptions.FetchFailed`.
    """

    async def find(self, domain: str) -> list[str]:
        """Return the subdomains the service reports for `domain`."""

        ...


@runtime_checkable
class LookupStore(Protocol):
    """Where finished lookups are kept (the storage service)."""

    async def store(self, record: LookupRecord) -> None: ...

    async def get(self, domain: str) -> LookupRecord | None: ...

    async def history(self) -> list[LookupRecord]: ...
