"""Tests for the logging defaults."""

from __future__ import annotations

import logging

import pytest
import structlog

from core.logging import ensure_default_logging, resolve_level
from core.services.query_controller import QueryController


@pytest.mark.asyncio
async def test_defaults_keep_stdout_clean(capsys, static_finder, make_broken_finder):
    structlog.reset_defaults()
    ensure_default_logging()

    await QueryController(static_finder, domain="example.com").submit()
    await QueryController(make_broken_finder(), domain="example.com").submit()

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "find_started" not in captured.err
    assert "find_failed" in captured.err


def test_ensure_default_logging_keeps_existing_config():
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG))
    ensure_default_logging()

    assert structlog.get_config()["wrapper_class"] is structlog.make_filtering_bound_logger(logging.DEBUG)


@pytest.mark.parametrize(("name", "level"), [("debug", logging.DEBUG), ("INFO", logging.INFO), ("nope", logging.WARNING)])
def test_resolve_level(name, level):
    assert resolve_level(name) == level
