"""Error types raised by the CKAN transport and resource adapters."""

from __future__ import annotations

from typing import Any, Optional

from requests import exceptions as req_exc

from ckan_client.domain.errors import (
    ApiError,
    ContextError,
    DeadlineExceeded,
    RequestCancelled,
)

# Network-level failures from the HTTP capability are re-raised unchanged.
TransportError = req_exc.RequestException


class InvalidAddressError(ApiError, ValueError):
    """A base URL or request path could not be parsed."""

    def __init__(self, message: str, *, url: str = "") -> None:
        super().__init__(message, context=f"parse {url!r}")
        self.url = url


class EncodingError(ApiError, TypeError):
    """A request body could not be serialized to JSON."""


class FormattingError(ApiError):
    """The API answered with a non-2xx status code.

    CKAN may answer badly formatted requests with a bare 400, 409 or 500
    whose body is not a reliable envelope, so nothing is decoded.
    """

    def __init__(
        self,
        *,
        status: Optional[int] = None,
        response: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(
            "request malformed and no body was returned",
            status=status,
            context=context,
        )
        self.response = response


class ServiceError(ApiError):
    """Error reported by the API through ``success: false``."""

    def __init__(
        self,
        message: str,
        *,
        type: str = "",
        help: str = "",
        response: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)
        self.message = message
        self.type = type
        self.help = help
        self.response = response

    def __str__(self) -> str:
        return self.message


class DecodeError(ApiError, ValueError):
    """An envelope or result did not match the expected JSON shape.

    ``partial`` holds the items decoded before the failure when a list was
    being decoded.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str = "",
        partial: Any = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, payload=payload, context=context)
        self.path = path
        self.partial = partial


__all__ = [
    "ApiError",
    "ContextError",
    "DeadlineExceeded",
    "DecodeError",
    "EncodingError",
    "FormattingError",
    "InvalidAddressError",
    "RequestCancelled",
    "ServiceError",
    "TransportError",
]
