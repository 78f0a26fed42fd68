"""Error taxonomy for the query_range pipeline and its single mapping point."""

from __future__ import annotations

from wavefront_promql_proxy.core.models import ErrorPayload

BAD_DATA = "bad_data"


class ProxyError(Exception):
    """Base for every failure that ends a request with an error payload."""

    error_type = BAD_DATA

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputError(ProxyError):
    """Raised when ``start``, ``end`` or ``step`` is malformed or out of range."""


class UpstreamError(ProxyError):
    """Raised when the backend reports a query-level error."""


class TransportError(ProxyError):
    """Raised when the backend cannot be reached or answers with garbage."""


def to_error_payload(exc: ProxyError) -> ErrorPayload:
    # Transport failures share the bad_data shape with validation errors.
    return ErrorPayload(error_type=exc.error_type, message=exc.message)
