from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Optional, Protocol

from ckan_client.domain.context import CallContext
from ckan_client.domain.models import DataStoreMetadata, ListOptions

if TYPE_CHECKING:
    import requests


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


# ---- Ports (Hexagonal boundaries) ----
class HttpCapability(Protocol):
    """Sends one prepared request. ``requests.Session`` satisfies this."""

    def send(
        self, request: "requests.PreparedRequest", **kwargs: Any
    ) -> "requests.Response": ...


class PackagesPort(Protocol):
    """Package related actions of the CKAN API."""

    def list_names(
        self,
        ctx: Optional[CallContext] = None,
        options: Optional[ListOptions] = None,
    ) -> List[str]: ...


class DataStorePort(Protocol):
    """Datastore related actions of the CKAN API."""

    def table_metadata(
        self,
        ctx: Optional[CallContext] = None,
        options: Optional[ListOptions] = None,
    ) -> List[DataStoreMetadata]: ...
