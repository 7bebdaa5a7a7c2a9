"""Session and response doubles for transport-level tests.

Every test builds its own ``SessionStub`` and ``Client``; nothing is shared
between tests.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Sequence, Union
from urllib.parse import parse_qs, urlsplit

from ckan_client.adapters.http_client import Client

BASE_URL = "http://ckan.test/api/3/"


class ResponseStub:
    """Minimal ``requests.Response`` stand-in used by ``Client.do``."""

    def __init__(self, body: Union[str, bytes, Any] = b"", status_code: int = 200) -> None:
        if isinstance(body, bytes):
            content = body
        elif isinstance(body, str):
            content = body.encode("utf-8")
        else:
            content = json.dumps(body).encode("utf-8")
        self._content = content
        self.status_code = status_code
        self.reads = 0

    @property
    def content(self) -> bytes:
        self.reads += 1
        return self._content

    @property
    def text(self) -> str:
        return self._content.decode("utf-8", errors="replace")


Handler = Callable[[Any], ResponseStub]


class SessionStub:
    """Records prepared requests and answers from a route table or a queue."""

    def __init__(
        self,
        responses: Optional[Sequence[ResponseStub]] = None,
        *,
        routes: Optional[Dict[str, Handler]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self._responses = list(responses or [])
        self._routes = dict(routes or {})
        self._error = error
        self.calls: List[Dict[str, Any]] = []

    def send(self, request: Any, **kwargs: Any) -> ResponseStub:
        self.calls.append(
            {"request": request, "timeout": kwargs.get("timeout"), "kwargs": kwargs}
        )
        if self._error is not None:
            raise self._error
        path = urlsplit(request.url).path
        if path in self._routes:
            return self._routes[path](request)
        if not self._responses:
            raise AssertionError(f"No stub response configured for {request.url}")
        return self._responses.pop(0)

    @property
    def last_request(self) -> Any:
        return self.calls[-1]["request"]


def make_client(session: SessionStub, base_url: str = BASE_URL) -> Client:
    return Client(base_url, session)


def query_of(request: Any) -> Dict[str, List[str]]:
    return parse_qs(urlsplit(request.url).query, keep_blank_values=True)
