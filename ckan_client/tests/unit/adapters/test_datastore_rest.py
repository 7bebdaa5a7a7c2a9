from __future__ import annotations

from typing import Any

import pytest
import requests

from ckan_client.adapters.api_errors import RequestCancelled
from ckan_client.domain.context import CallContext
from ckan_client.domain.models import DataStoreMetadata, ListOptions
from ckan_client.tests.unit.helpers import ResponseStub, SessionStub, make_client, query_of

_TWO_ROWS = (
    '{"success":true,"result":{"records":['
    '{"_id":"1","alias_of":"2","name":"3","oid":4},'
    '{"_id":"5","alias_of":"6","name":"7","oid":8}]}}'
)


def test_datastore_table_metadata() -> None:
    def handler(request: Any) -> ResponseStub:
        assert request.method == "GET"
        return ResponseStub(_TWO_ROWS)

    session = SessionStub(routes={"/api/3/action/datastore_search": handler})
    client = make_client(session)

    rows = client.datastore.table_metadata(CallContext.background(), None)

    assert rows == [
        DataStoreMetadata(id="1", alias_of="2", name="3", oid=4),
        DataStoreMetadata(id="5", alias_of="6", name="7", oid=8),
    ]
    assert query_of(session.last_request) == {"resource_id": ["_table_metadata"]}


def test_datastore_table_metadata_with_list_options() -> None:
    session = SessionStub([ResponseStub('{"success":true,"result":{"records":[]}}')])
    client = make_client(session)

    rows = client.datastore.table_metadata(CallContext.background(), ListOptions(limit=10, offset=5))

    assert rows == []
    assert query_of(session.last_request) == {
        "resource_id": ["_table_metadata"],
        "limit": ["10"],
        "offset": ["5"],
    }


def test_datastore_table_metadata_propagates_context_error() -> None:
    client = make_client(SessionStub(error=requests.ConnectionError("reset")))
    ctx = CallContext.with_cancel()
    ctx.cancel()

    with pytest.raises(RequestCancelled):
        client.datastore.table_metadata(ctx)


def test_datastore_table_metadata_null_alias_keeps_zero_value() -> None:
    body = (
        '{"success":true,"result":{"records":['
        '{"_id":"1","alias_of":null,"name":"t","oid":4}]}}'
    )
    client = make_client(SessionStub([ResponseStub(body)]))

    rows = client.datastore.table_metadata(CallContext.background())

    assert rows == [DataStoreMetadata(id="1", alias_of="", name="t", oid=4)]
