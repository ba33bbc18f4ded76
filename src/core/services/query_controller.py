"""Query controller: the single interaction loop of the finder UI.

The controller owns the query text and one explicit request state. UI layers
(the one-shot `find` command, the interactive prompt) call `trigger()` or
`on_key_press()` and render `view()`; side effects stay behind the
`SubdomainFinder` collaborator.

Every submission gets a monotonically increasing request id. Only the outcome
of the latest request is applied, so a slow response can never overwrite a
newer one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from core.domain.models import (
    FETCH_FAILED_MESSAGE,
    Failed,
    Idle,
    Loading,
    QueryState,
    RequestStatus,
    Succeeded,
)
from core.domain.view import QueryView, render_view
from core.exceptions import FetchFailed
from core.interfaces.finder import SubdomainFinder
from core.logging import logger

ENTER_KEY = "Enter"


@dataclass
class ControllerHooks:
    """Optional callbacks for UI layers (re-render, diagnostics)."""

    state_changed: Callable[[QueryState], None] | None = None
    stale_response: Callable[[int], None] | None = None


class QueryController:
    def __init__(
        self,
        finder: SubdomainFinder,
        *,
        domain: str = "",
        lock_while_loading: bool = True,
        hooks: ControllerHooks | None = None,
    ) -> None:
        self._finder = finder
        self._lock_while_loading = lock_while_loading
        self._hooks = hooks or ControllerHooks()
        self._last_request_id = 0
        self._state: QueryState = Idle()
        self.domain = domain

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def status(self) -> RequestStatus:
        return self._state.status

    @property
    def loading(self) -> bool:
        return isinstance(self._state, Loading)

    @property
    def error(self) -> str | None:
        return self._state.message if isinstance(self._state, Failed) else None

    @property
    def results(self) -> list[str]:
        if isinstance(self._state, Succeeded):
            return list(self._state.subdomains)
        return []

    @property
    def can_submit(self) -> bool:
        """Whether the find trigger is active."""

        return not (self._lock_while_loading and self.loading)

    def update_domain(self, text: str) -> None:
        self.domain = text

    def view(self) -> QueryView:
        return render_view(self._state)

    async def on_key_press(self, key: str) -> QueryState | None:
        """Enter behaves exactly like the find trigger; other keys are ignored."""

        if key != ENTER_KEY:
            return None
        return await self.trigger()

    async def trigger(self) -> QueryState | None:
        """The find action control. Inert (returns None) while locked."""

        if not self.can_submit:
            logger.debug("find_trigger_inert", domain=self.domain)
            return None
        return await self.submit()

    async def submit(self) -> QueryState:
        """Fetch subdomains for the current domain and record the outcome.

        Loading always ends once the call settles, whatever happens. If the
        awaiting task is cancelled the request is recorded as failed before the
        cancellation propagates.
        """

        self._last_request_id += 1
        request_id = self._last_request_id
        domain = self.domain
        self._set_state(Loading(request_id=request_id))
        logger.info("find_started", domain=domain, request_id=request_id)

        outcome: QueryState = Failed(request_id=request_id, message=FETCH_FAILED_MESSAGE)
        try:
            subdomains = await self._finder.find(domain)
            outcome = Succeeded(request_id=request_id, subdomains=tuple(subdomains))
            logger.info("find_succeeded", domain=domain, request_id=request_id, total=len(subdomains))
        except FetchFailed as exc:
            logger.warning(
                "find_failed",
                domain=domain,
                request_id=request_id,
                reason=exc.reason.value,
                status_code=exc.status_code,
                detail=exc.detail,
            )
        except Exception as exc:
            # Any other fetch error takes the same failure path.
            logger.warning(
                "find_failed",
                domain=domain,
                request_id=request_id,
                reason="unexpected",
                error=repr(exc),
            )
        finally:
            if request_id == self._last_request_id:
                self._set_state(outcome)
            else:
                logger.info("find_stale_response", request_id=request_id, latest=self._last_request_id)
                if self._hooks.stale_response:
                    self._hooks.stale_response(request_id)

        return self._state

    def _set_state(self, state: QueryState) -> None:
        self._state = state
        if self._hooks.state_changed:
            self._hooks.state_changed(state)
