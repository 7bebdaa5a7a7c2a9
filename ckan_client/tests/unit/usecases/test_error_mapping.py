from __future__ import annotations

import pytest
import requests

from ckan_client.adapters.api_errors import (
    ApiError,
    DeadlineExceeded,
    DecodeError,
    EncodingError,
    FormattingError,
    InvalidAddressError,
    RequestCancelled,
    ServiceError,
)
from ckan_client.domain.ports import UseCaseError
from ckan_client.usecases.error_mapping import map_api_error


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (InvalidAddressError("bad", url=":"), "INVALID_ADDRESS"),
        (EncodingError("json: unsupported value"), "ENCODING_FAILED"),
        (FormattingError(status=400), "REQUEST_MALFORMED"),
        (ServiceError("Not found", type="Not Found Error"), "SERVICE_ERROR"),
        (DecodeError("result: cannot decode"), "DECODE_FAILED"),
        (RequestCancelled("context canceled"), "REQUEST_CANCELLED"),
        (DeadlineExceeded("context deadline exceeded"), "REQUEST_TIMEOUT"),
        (requests.Timeout("read timed out"), "REQUEST_TIMEOUT"),
        (requests.ConnectionError("refused"), "NETWORK_ERROR"),
        (ApiError("other"), "REQUEST_FAILED"),
        (KeyError("x"), "FALLBACK"),
    ],
)
def test_map_api_error_codes(exc: Exception, code: str) -> None:
    mapped = map_api_error(exc, default_code="FALLBACK")

    assert isinstance(mapped, UseCaseError)
    assert mapped.code == code


def test_map_api_error_service_message() -> None:
    mapped = map_api_error(
        ServiceError("Not found", type="Not Found Error"), default_code="FALLBACK"
    )

    assert mapped.message == "CKAN error (Not Found Error): Not found"


def test_map_api_error_formatting_message_includes_status() -> None:
    mapped = map_api_error(FormattingError(status=409), default_code="FALLBACK")

    assert "HTTP 409" in mapped.message


def test_map_api_error_passes_use_case_errors_through() -> None:
    original = UseCaseError("CUSTOM", "already mapped")

    assert map_api_error(original, default_code="FALLBACK") is original
