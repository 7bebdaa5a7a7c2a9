"""Error base shared by the domain and the adapters.

``ApiError`` is the root of every failure raised by the client. The context
errors live here because ``CallContext`` reports them; the remaining kinds are
defined in ``ckan_client.adapters.api_errors``.
"""

from __future__ import annotations

from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for CKAN client failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ContextError(ApiError):
    """The call context was done when the network call failed."""


class RequestCancelled(ContextError):
    pass


class DeadlineExceeded(ContextError):
    pass


__all__ = ["ApiError", "ContextError", "DeadlineExceeded", "RequestCancelled"]
