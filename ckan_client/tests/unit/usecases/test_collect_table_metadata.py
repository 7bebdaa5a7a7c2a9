from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from ckan_client.adapters.api_errors import FormattingError
from ckan_client.domain.context import CallContext
from ckan_client.domain.models import DataStoreMetadata, ListOptions
from ckan_client.domain.ports import DataStorePort
from ckan_client.usecases.collect_table_metadata import CollectTableMetadata


class _DataStorePortStub(DataStorePort):
    def __init__(self, rows: List[DataStoreMetadata], *, fail_at: Optional[int] = None) -> None:
        self._rows = rows
        self._fail_at = fail_at
        self.calls: List[Dict[str, Any]] = []

    def table_metadata(
        self,
        ctx: Optional[CallContext] = None,
        options: Optional[ListOptions] = None,
    ) -> List[DataStoreMetadata]:
        assert options is not None
        self.calls.append({"limit": options.limit, "offset": options.offset, "ctx": ctx})
        if self._fail_at is not None and options.offset == self._fail_at:
            raise FormattingError(status=500)
        start = options.offset or 0
        return self._rows[start : start + (options.limit or 0)]


def _rows(count: int) -> List[DataStoreMetadata]:
    return [DataStoreMetadata(id=str(i), name=f"t{i}", oid=i) for i in range(count)]


def test_collects_pages_until_short_page() -> None:
    port = _DataStorePortStub(_rows(5))
    ctx = CallContext.background()

    rows = CollectTableMetadata(port, page_size=2)(ctx)

    assert rows == _rows(5)
    assert [(c["limit"], c["offset"]) for c in port.calls] == [(2, 0), (2, 2), (2, 4)]
    assert all(c["ctx"] is ctx for c in port.calls)


def test_exact_multiple_needs_one_empty_page() -> None:
    port = _DataStorePortStub(_rows(4))

    rows = CollectTableMetadata(port, page_size=2)()

    assert len(rows) == 4
    assert len(port.calls) == 3


def test_port_errors_propagate() -> None:
    port = _DataStorePortStub(_rows(10), fail_at=2)

    with pytest.raises(FormattingError):
        CollectTableMetadata(port, page_size=2)()


def test_rejects_non_positive_page_size() -> None:
    with pytest.raises(ValueError):
        CollectTableMetadata(_DataStorePortStub([]), page_size=0)()
