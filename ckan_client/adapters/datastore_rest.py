"""REST adapter for the datastore actions of the CKAN API."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ckan_client.adapters.urls import add_options
from ckan_client.domain.context import CallContext
from ckan_client.domain.models import DataStoreMetadata, ListOptions, TableMetadataPage
from ckan_client.domain.ports import DataStorePort

if TYPE_CHECKING:
    from ckan_client.adapters.http_client import Client

TABLE_METADATA_PATH = "action/datastore_search?resource_id=_table_metadata"


class DataStoreRestAdapter(DataStorePort):
    """HTTP adapter for ``datastore_*`` actions.

    CKAN API docs: http://docs.ckan.org/en/latest/maintaining/datastore.html#db-internals
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def table_metadata(
        self,
        ctx: Optional[CallContext] = None,
        options: Optional[ListOptions] = None,
    ) -> List[DataStoreMetadata]:
        """Fetch the datastore table metadata of the site.

        ``options`` pages through the ``_table_metadata`` pseudo resource.
        """
        path = add_options(TABLE_METADATA_PATH, options)
        req = self.client.new_request("GET", path)
        page: TableMetadataPage = self.client.do(ctx, req, TableMetadataPage).result
        return list(page.records)


__all__ = ["DataStoreRestAdapter", "TABLE_METADATA_PATH"]
