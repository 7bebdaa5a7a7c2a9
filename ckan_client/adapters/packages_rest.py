"""REST adapter for the package actions of the CKAN API."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from ckan_client.adapters.urls import add_options
from ckan_client.domain.context import CallContext
from ckan_client.domain.models import ListOptions
from ckan_client.domain.ports import PackagesPort

if TYPE_CHECKING:
    from ckan_client.adapters.http_client import Client

PACKAGE_LIST_PATH = "action/package_list"


class PackagesRestAdapter(PackagesPort):
    """HTTP adapter for ``package_*`` actions.

    CKAN API docs: http://docs.ckan.org/en/latest/api/#ckan.logic.action.get.package_list
    """

    def __init__(self, client: Client) -> None:
        self.client = client

    def list_names(
        self,
        ctx: Optional[CallContext] = None,
        options: Optional[ListOptions] = None,
    ) -> List[str]:
        """List the names of all packages, in the order the site returns them."""
        path = add_options(PACKAGE_LIST_PATH, options)
        req = self.client.new_request("GET", path)
        return self.client.do(ctx, req, List[str]).result


__all__ = ["PACKAGE_LIST_PATH", "PackagesRestAdapter"]
