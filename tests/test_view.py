"""Tests for the rendering decision."""

from __future__ import annotations

import pytest

from core.domain.models import FETCH_FAILED_MESSAGE, Failed, Idle, Loading, Succeeded
from core.domain.view import EMPTY_HINT, LOADING_TEXT, ViewKind, render_view


@pytest.mark.parametrize(
    ("state", "kind", "message"),
    [
        (Idle(), ViewKind.EMPTY, EMPTY_HINT),
        (Loading(request_id=1), ViewKind.LOADING, LOADING_TEXT),
        (Failed(request_id=1), ViewKind.ERROR, FETCH_FAILED_MESSAGE),
        (Succeeded(request_id=1, subdomains=()), ViewKind.EMPTY, EMPTY_HINT),
        (Succeeded(request_id=1, subdomains=("b.x.io", "a.x.io")), ViewKind.RESULTS, None),
    ],
)
def test_each_state_maps_to_one_branch(state, kind, message):
    view = render_view(state)

    assert view.kind is kind
    assert view.message == message
    if kind is not ViewKind.RESULTS:
        assert view.subdomains == ()


def test_results_are_sorted_by_code_point():
    state = Succeeded(request_id=2, subdomains=("b.example.com", "B.example.com", "a.example.com"))

    view = render_view(state)

    assert view.subdomains == ("B.example.com", "a.example.com", "b.example.com")
    assert view.total == 3


def test_failed_message_defaults_to_generic_text():
    assert Failed(request_id=3).message == "Could not fetch subdomains"
