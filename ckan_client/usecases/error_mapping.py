"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations

from typing import Optional

from requests import exceptions as req_exc

from ckan_client.adapters.api_errors import (
    ApiError,
    DeadlineExceeded,
    DecodeError,
    EncodingError,
    FormattingError,
    InvalidAddressError,
    RequestCancelled,
    ServiceError,
    TransportError,
)
from ckan_client.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map transport and adapter exceptions to stable UseCaseError codes.

    Args:
        exc: Exception raised by a port call.
        default_code: Code used for exceptions outside the client hierarchy.
        default_message: Message used with ``default_code``; falls back to
            ``str(exc)``.

    Returns:
        UseCaseError: Error carrying a stable code and a presentable message.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, InvalidAddressError):
        return UseCaseError("INVALID_ADDRESS", _compose_error_message("Invalid URL", str(exc)))
    if isinstance(exc, EncodingError):
        return UseCaseError("ENCODING_FAILED", _compose_error_message("Could not encode request", str(exc)))
    if isinstance(exc, FormattingError):
        label = f"Request rejected (HTTP {exc.status})" if exc.status else "Request rejected"
        return UseCaseError("REQUEST_MALFORMED", _compose_error_message(label, str(exc)))
    if isinstance(exc, ServiceError):
        label = f"CKAN error ({exc.type})" if exc.type else "CKAN error"
        return UseCaseError("SERVICE_ERROR", _compose_error_message(label, exc.message))
    if isinstance(exc, DecodeError):
        return UseCaseError("DECODE_FAILED", _compose_error_message("Unexpected response", str(exc)))
    if isinstance(exc, RequestCancelled):
        return UseCaseError("REQUEST_CANCELLED", "Request cancelled.")
    if isinstance(exc, (DeadlineExceeded, req_exc.Timeout)):
        return UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection.")
    if isinstance(exc, TransportError):
        return UseCaseError("NETWORK_ERROR", _compose_error_message("Network error", str(exc)))
    if isinstance(exc, ApiError):
        return UseCaseError("REQUEST_FAILED", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


def _compose_error_message(base: str, hint: Optional[str]) -> str:
    hint_text = (hint or "").strip()
    if hint_text:
        return f"{base}: {hint_text}"
    if base.endswith("."):
        return base
    return f"{base}."


__all__ = ["map_api_error"]
