"""Per-request CORS input and its classification."""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

ORIGIN = "origin"
REQUEST_METHOD = "access-control-request-method"
REQUEST_HEADERS = "access-control-request-headers"
REQUEST_PRIVATE_NETWORK = "access-control-request-private-network"


class Classification(StrEnum):
    """How a request takes part in the CORS protocol."""

    NOT_CORS = "not_cors"
    SIMPLE = "simple"
    PREFLIGHT = "preflight"


class RequestContext(BaseModel):
    """CORS-relevant view of one incoming request."""

    model_config = ConfigDict(frozen=True)

    method: str
    origin: str | None = None
    request_method: str | None = None
    request_headers: str | None = None
    request_private_network: bool = False

    @classmethod
    def from_headers(cls, method: str, headers: Mapping[str, str]) -> RequestContext:
        """
        Build a context from request headers.

        Header names are matched case-insensitively; blank values count as absent.

        Args:
            method: HTTP method as received
            headers: Starlette Headers or any str -> str mapping
        """
        lowered = {name.lower(): value.strip() for name, value in headers.items()}
        return cls(
            method=method,
            origin=lowered.get(ORIGIN) or None,
            request_method=lowered.get(REQUEST_METHOD) or None,
            request_headers=lowered.get(REQUEST_HEADERS) or None,
            request_private_network=lowered.get(REQUEST_PRIVATE_NETWORK, "").lower() == "true",
        )

    @property
    def requested_headers(self) -> list[str]:
        """Names from Access-Control-Request-Headers, lowercased, blanks dropped."""
        if not self.request_headers:
            return []
        return [h.strip().lower() for h in self.request_headers.split(",") if h.strip()]
