"""Client library for the CKAN action API."""

__version__ = "1"

from ckan_client.adapters.api_errors import (
    ApiError,
    ContextError,
    DeadlineExceeded,
    DecodeError,
    EncodingError,
    FormattingError,
    InvalidAddressError,
    RequestCancelled,
    ServiceError,
    TransportError,
)
from ckan_client.adapters.datastore_rest import DataStoreRestAdapter
from ckan_client.adapters.http_client import (
    ApiResponse,
    Client,
    HttpConfig,
    USER_AGENT,
)
from ckan_client.adapters.json_codec import json_field
from ckan_client.adapters.packages_rest import PackagesRestAdapter
from ckan_client.adapters.urls import add_options
from ckan_client.domain.context import CallContext
from ckan_client.domain.models import DataStoreMetadata, ListOptions

__all__ = [
    "ApiError",
    "ApiResponse",
    "CallContext",
    "Client",
    "ContextError",
    "DataStoreMetadata",
    "DataStoreRestAdapter",
    "DeadlineExceeded",
    "DecodeError",
    "EncodingError",
    "FormattingError",
    "HttpConfig",
    "InvalidAddressError",
    "ListOptions",
    "PackagesRestAdapter",
    "RequestCancelled",
    "ServiceError",
    "TransportError",
    "USER_AGENT",
    "__version__",
    "add_options",
    "json_field",
]
