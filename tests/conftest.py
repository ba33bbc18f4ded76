"""Shared pytest fixtures: quiet logging, isolated settings, fake finders."""

from __future__ import annotations

import asyncio
import logging

import pytest

from core.exceptions import FailureReason, FetchFailed
from core.logging import configure_logging


@pytest.fixture(autouse=True)
def _quiet_logging():
    configure_logging(logging.CRITICAL)
    yield
    configure_logging(logging.CRITICAL)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    # No stray .env or SUBFIND_* variables from the developer machine.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for name in (
        "SUBFIND_FINDER_URL",
        "SUBFIND_STORAGE_URL",
        "SUBFIND_STORE_RESULTS",
        "SUBFIND_HTTP_TIMEOUT_SECONDS",
        "SUBFIND_LOCK_WHILE_LOADING",
        "SUBFIND_LOG_LEVEL",
        "SUBFIND_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)


class StaticFinder:
    """Answers every call with the same list, or fails."""

    def __init__(self, subdomains: list[str] | None = None, *, fail: bool = False) -> None:
        self.subdomains = subdomains or []
        self.fail = fail
        self.calls: list[str] = []

    async def find(self, domain: str) -> list[str]:
        self.calls.append(domain)
        if self.fail:
            raise FetchFailed(FailureReason.STATUS, "boom", status_code=500)
        return list(self.subdomains)


class GatedFinder:
    """Each call blocks until the test releases it with a result."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self._pending: list[asyncio.Future] = []

    async def find(self, domain: str) -> list[str]:
        self.calls.append(domain)
        future = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    def release(self, index: int, subdomains: list[str]) -> None:
        self._pending[index].set_result(subdomains)

    def fail(self, index: int) -> None:
        self._pending[index].set_exception(FetchFailed(FailureReason.NETWORK, "connection refused"))


@pytest.fixture
def static_finder() -> StaticFinder:
    return StaticFinder(["a.example.com", "c.example.com", "b.example.com"])


@pytest.fixture
def gated_finder() -> GatedFinder:
    return GatedFinder()


@pytest.fixture
def make_static_finder():
    return StaticFinder


class BrokenFinder:
    """Raises an arbitrary (non-`FetchFailed`) error on every call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or RuntimeError("finder exploded")
        self.calls: list[str] = []

    async def find(self, domain: str) -> list[str]:
        self.calls.append(domain)
        raise self.error


@pytest.fixture
def broken_finder() -> BrokenFinder:
    return BrokenFinder()


@pytest.fixture
def make_broken_finder():
    return BrokenFinder
