"""Rendering decision derived from the query state.

Exactly one branch is shown per render: loading, error, results or the empty
hint. The UI layer only turns a `QueryView` into widgets.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.models import Failed, Idle, Loading, QueryState, Succeeded

LOADING_TEXT = "Loading..."
EMPTY_HINT = "No subdomains to show. Try a different domain."


class ViewKind(str, Enum):
    LOADING = "loading"
    ERROR = "error"
    RESULTS = "results"
    EMPTY = "empty"


class QueryView(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ViewKind
    message: str | None = Field(
        default=None,
        description="Progress text, error message or hint, depending on the branch.",
    )
    subdomains: tuple[str, ...] = Field(
        default=(),
        description="Lexicographically sorted results (results branch only).",
    )

    @property
    def total(self) -> int:
        return len(self.subdomains)

    @property
    def count_label(self) -> str:
        return f"Total Result = {self.total}"


def render_view(state: QueryState) -> QueryView:
    """Pick the single branch to display for `state`."""

    if isinstance(state, Loading):
        return QueryView(kind=ViewKind.LOADING, message=LOADING_TEXT)
    if isinstance(state, Failed):
        return QueryView(kind=ViewKind.ERROR, message=state.message)
    if isinstance(state, Succeeded) and state.subdomains:
        return QueryView(kind=ViewKind.RESULTS, subdomains=tuple(sorted(state.subdomains)))
    if isinstance(state, (Idle, Succeeded)):
        return QueryView(kind=ViewKind.EMPTY, message=EMPTY_HINT)
    raise TypeError(f"unknown query state: {state!r}")
