"""HTTP transport for the CKAN action API.

This module provides the ``Client`` that every resource adapter is built on.
It resolves action paths against a base URL, builds ``requests`` prepared
requests with the library user agent, sends them through an injectable
session and interprets CKAN's response envelope::

    {"success": true, "result": ..., "error": null, "help": "..."}

Dependencies:
    - ``requests`` for request preparation and network I/O.
    - ``ckan_client.adapters.api_errors`` for typed failures.
    - ``ckan_client.adapters.json_codec`` for body encoding and result decoding.
    - ``ckan_client.adapters.urls`` for address parsing and query merging.

Call context:
    - Constructed by callers, the CLI (``ckan_client/app/main.py``) and tests.
    - Used by ``packages_rest.py`` and ``datastore_rest.py``; callers may also
      issue arbitrary actions through ``new_request`` and ``do``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
from requests import exceptions as req_exc

from ckan_client import __version__
from ckan_client.adapters.api_errors import (
    DecodeError,
    FormattingError,
    InvalidAddressError,
    ServiceError,
)
from ckan_client.adapters.datastore_rest import DataStoreRestAdapter
from ckan_client.adapters.json_codec import decode_into, encode_body
from ckan_client.adapters.packages_rest import PackagesRestAdapter
from ckan_client.adapters.urls import add_options, parse_url
from ckan_client.domain.context import CallContext
from ckan_client.domain.ports import HttpCapability

USER_AGENT = f"ckan-client/{__version__}"
MEDIA_TYPE = "application/json"

# requests rejects non-positive timeouts; an expired deadline still gets one
# (failing) attempt.
_MIN_TIMEOUT_S = 0.001


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    if not value or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


@dataclass
class HttpConfig:
    """Transport configuration.

    Attributes:
        request_timeout_s: Timeout in seconds for each call, ``None`` for no
            timeout. A call context deadline takes precedence when sooner.
        user_agent: Identification string sent as ``User-Agent``.
    """

    request_timeout_s: Optional[float] = None
    user_agent: str = USER_AGENT

    @classmethod
    def from_env(cls) -> "HttpConfig":
        """Build a config from ``CKAN_CLIENT_TIMEOUT_S``/``CKAN_CLIENT_USER_AGENT``."""
        agent = (os.getenv("CKAN_CLIENT_USER_AGENT") or "").strip()
        return cls(
            request_timeout_s=_env_float("CKAN_CLIENT_TIMEOUT_S"),
            user_agent=agent or USER_AGENT,
        )


@dataclass
class RawResult:
    """Undecoded ``result`` member of an envelope."""

    data: Any = None

    def decode(self, into: Any) -> Any:
        return decode_into(into, self.data)


@dataclass
class Envelope:
    """Response wrapper shared by every CKAN action."""

    success: bool = False
    result: RawResult = field(default_factory=RawResult)
    error: Optional[Dict[str, Any]] = None
    help: str = ""

    @classmethod
    def from_bytes(cls, body: bytes, *, context: Optional[str] = None) -> "Envelope":
        """Parse an envelope without interpreting ``result``.

        Raises:
            DecodeError: If the body is not a JSON object of the expected shape.
        """
        try:
            payload = json.loads(body or b"")
        except ValueError as exc:
            raise DecodeError(
                f"invalid JSON response: {exc}", path="", context=context
            ) from exc
        if not isinstance(payload, dict):
            raise DecodeError(
                "invalid response envelope: expected object",
                path="",
                payload=payload,
                context=context,
            )

        success = payload.get("success", False)
        if not isinstance(success, bool):
            raise DecodeError(
                "invalid response envelope: success must be a boolean",
                path="success",
                payload=payload,
                context=context,
            )
        error = payload.get("error")
        if error is not None and not isinstance(error, dict):
            raise DecodeError(
                "invalid response envelope: error must be an object",
                path="error",
                payload=payload,
                context=context,
            )
        help_text = payload.get("help")
        return cls(
            success=success,
            result=RawResult(payload.get("result")),
            error=error,
            help=help_text if isinstance(help_text, str) else "",
        )

    def service_error(self, *, response: Any = None, context: Optional[str] = None) -> ServiceError:
        """Build the error reported by a ``success: false`` envelope."""
        raw = self.error or {}
        message = raw.get("message")
        err_type = raw.get("__type")
        return ServiceError(
            message if isinstance(message, str) else "request failed without error details",
            type=err_type if isinstance(err_type, str) else "",
            help=self.help,
            response=response,
            context=context,
        )


@dataclass
class ApiResponse:
    """Outcome of a successful ``Client.do`` call.

    Attributes:
        response: The underlying ``requests.Response``.
        result: The decoded ``result`` member, ``None`` when no target was given.
        help: The envelope ``help`` text.
    """

    response: Any
    result: Any = None
    help: str = ""


class Client:
    """Transport bound to one CKAN API base URL.

    The client holds no per-call state and can be shared between threads as
    far as the injected session allows.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[HttpCapability] = None,
        *,
        config: Optional[HttpConfig] = None,
    ) -> None:
        """Create a client.

        Args:
            base_url: API root, e.g. ``http://demo.ckan.org/api/3/``. Relative
                action paths resolve against it, so it should end with ``/``.
            session: Object with ``send(prepared, timeout=...)``; defaults to a
                new ``requests.Session``.
            config: Transport configuration.

        Raises:
            InvalidAddressError: If ``base_url`` cannot be parsed.
        """
        if not str(base_url or "").strip():
            raise InvalidAddressError("base URL must not be empty", url=str(base_url or ""))
        self.base_parts = parse_url(base_url)
        self.base_url = str(base_url)
        self.session: HttpCapability = session if session is not None else requests.Session()
        self.cfg = config or HttpConfig()
        self.user_agent = self.cfg.user_agent
        self._log = logging.getLogger(__name__)
        self.packages = PackagesRestAdapter(self)
        self.datastore = DataStoreRestAdapter(self)

    def new_request(self, method: str, url: str, body: Any = None) -> requests.PreparedRequest:
        """Build a request for ``url`` resolved against the base URL.

        Relative paths should be given without a leading slash so they land
        below the base path. A non-``None`` body is sent as JSON.

        Raises:
            InvalidAddressError: If ``url`` cannot be parsed.
            EncodingError: If ``body`` cannot be serialized.
        """
        parse_url(url)
        resolved = urljoin(self.base_url, url)

        headers = {"User-Agent": self.user_agent, "Accept": MEDIA_TYPE}
        data: Optional[bytes] = None
        if body is not None:
            data = encode_body(body)
            headers["Content-Type"] = MEDIA_TYPE

        try:
            return requests.Request(
                method=method.upper(), url=resolved, headers=headers, data=data
            ).prepare()
        except (req_exc.MissingSchema, req_exc.InvalidSchema, req_exc.InvalidURL) as exc:
            raise InvalidAddressError(str(exc), url=resolved) from exc

    def do(
        self,
        ctx: Optional[CallContext],
        request: requests.PreparedRequest,
        into: Any = None,
    ) -> ApiResponse:
        """Send ``request`` and decode the envelope ``result`` into ``into``.

        Args:
            ctx: Call context; ``None`` means a background context. If the
                network call fails while the context is done, the context's
                error is raised instead of the network error.
            request: Prepared request from ``new_request``.
            into: Target type for ``result`` (see ``json_codec``), or ``None``
                to skip decoding.

        Returns:
            ``ApiResponse`` with the raw response and decoded result.

        Raises:
            requests.RequestException: Network failure with a live context.
            ContextError: Network failure after cancellation or deadline.
            FormattingError: Non-2xx status; the body is not decoded.
            DecodeError: Malformed envelope or ``result`` shape mismatch.
            ServiceError: The envelope reports ``success: false``.
        """
        ctx = ctx or CallContext.background()
        label = f"{request.method} {request.url}"

        try:
            resp = self.session.send(
                request, timeout=self._timeout(ctx), **self._send_settings(request)
            )
        except req_exc.RequestException as exc:
            ctx_err = ctx.err()
            if ctx_err is not None:
                ctx_err.context = label
                raise ctx_err from exc
            raise

        status = resp.status_code
        self._log.debug("%s -> HTTP %s", label, status)
        if not 200 <= status <= 299:
            raise FormattingError(status=status, response=resp, context=label)

        envelope = Envelope.from_bytes(resp.content, context=label)
        if not envelope.success:
            raise envelope.service_error(response=resp, context=label)

        result = None
        if into is not None:
            result = envelope.result.decode(into)
        return ApiResponse(response=resp, result=result, help=envelope.help)

    def _send_settings(self, request: requests.PreparedRequest) -> Dict[str, Any]:
        # Session.send skips the proxy, CA bundle and verify settings that
        # Session.request merges from the session and the environment.
        merge = getattr(self.session, "merge_environment_settings", None)
        if merge is None:
            return {}
        return dict(merge(request.url, {}, None, None, None))

    def _timeout(self, ctx: CallContext) -> Optional[float]:
        configured = self.cfg.request_timeout_s
        remaining = ctx.remaining()
        if remaining is None:
            return configured
        remaining = max(remaining, _MIN_TIMEOUT_S)
        if configured is None:
            return remaining
        return min(configured, remaining)


__all__ = [
    "ApiResponse",
    "Client",
    "Envelope",
    "HttpConfig",
    "MEDIA_TYPE",
    "RawResult",
    "USER_AGENT",
    "add_options",
    "parse_url",
]
