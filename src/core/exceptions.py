"""Domain-specific exceptions."""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Why a call to the finder service did not produce a subdomain list."""

    NETWORK = "network"
    STATUS = "status"
    MALFORMED = "malformed"


class FinderError(Exception):
    pass


class FetchFailed(FinderError):
    """The finder call failed; the UI collapses every reason into one message."""

    def __init__(
        self,
        reason: FailureReason,
        detail: str = "",
        *,
        status_code: int | None = None,
    ) -> None:
        self.reason = reason
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)


class StorageError(FinderError):
    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)
