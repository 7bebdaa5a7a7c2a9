"""Use case for reading every datastore table metadata row page by page."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ckan_client.domain.context import CallContext
from ckan_client.domain.models import DataStoreMetadata, ListOptions
from ckan_client.domain.ports import DataStorePort

_log = logging.getLogger(__name__)


@dataclass
class CollectTableMetadata:
    """Use-case callable that pages through ``_table_metadata``.

    Pages of ``page_size`` rows are requested until one comes back short.
    Errors from the port propagate unchanged.
    """

    datastore_port: DataStorePort
    page_size: int = 100

    def __call__(self, ctx: Optional[CallContext] = None) -> List[DataStoreMetadata]:
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")

        rows: List[DataStoreMetadata] = []
        offset = 0
        while True:
            page = self.datastore_port.table_metadata(
                ctx, ListOptions(limit=self.page_size, offset=offset)
            )
            rows.extend(page)
            _log.debug("table metadata page offset=%s rows=%s", offset, len(page))
            if len(page) < self.page_size:
                return rows
            offset += self.page_size


__all__ = ["CollectTableMetadata"]
