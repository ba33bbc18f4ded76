"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation and self-documenting fields (Field) without coupling the
  Core to I/O libraries.
- The request state is a discriminated union, so combinations such as
  "loading with an error" cannot be built.

Note:
- These models describe *what* the information is, not *how* it is fetched.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter
from pydantic.config import ConfigDict

FETCH_FAILED_MESSAGE = "Could not fetch subdomains"


class RequestStatus(str, Enum):
    """The controller's view of an in-flight or completed fetch."""

    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILURE = "failure"


class FindRequest(BaseModel):
    """Body of `POST /find`.

    No validation on purpose: empty or malformed domains are sent as-is.
    """

    domain: str = Field(
        ...,
        description="Fully-qualified name submitted for enumeration.",
    )


class Idle(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[RequestStatus.IDLE] = RequestStatus.IDLE


class Loading(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[RequestStatus.LOADING] = RequestStatus.LOADING
    request_id: int = Field(..., ge=1)


class Succeeded(BaseModel):
    """Outcome of a 2xx response with a valid string array."""

    model_config = ConfigDict(frozen=True)

    status: Literal[RequestStatus.SUCCESS] = RequestStatus.SUCCESS
    request_id: int = Field(..., ge=1)
    subdomains: tuple[str, ...] = Field(
        default=(),
        description="Subdomains in the order the service returned them.",
    )


class Failed(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal[RequestStatus.FAILURE] = RequestStatus.FAILURE
    request_id: int = Field(..., ge=1)
    message: str = Field(default=FETCH_FAILED_MESSAGE, min_length=1)


QueryState = Annotated[
    Union[Idle, Loading, Succeeded, Failed],
    Field(discriminator="status"),
]

SUBDOMAIN_LIST = TypeAdapter(list[str])


class LookupRecord(BaseModel):
    """A domain with its subdomain list, as kept by the storage service."""

    model_config = ConfigDict(extra="ignore")

    domain: str = Field(
        ...,
        description="Domain that was looked up.",
    )
    subdomains: list[str] = Field(
        default_factory=list,
        description="Subdomains discovered for the domain.",
    )
    timestamp: datetime | None = Field(
        default=None,
        description="When the lookup was stored (set by the service when omitted).",
    )

    @property
    def total(self) -> int:
        return len(self.subdomains)

    def sorted_subdomains(self) -> list[str]:
        return sorted(self.subdomains)
