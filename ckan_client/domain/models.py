"""Typed domain objects for CKAN action API listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ListOptions:
    """Optional pagination parameters for listing actions.

    Attributes:
        limit: Maximum number of objects the action should return.
        offset: Number of objects to skip; used together with ``limit`` to
            page through long result sets.
    """

    limit: Optional[int] = None
    offset: Optional[int] = None

    def to_query(self) -> Dict[str, str]:
        """Return query pairs for the set fields; unset and zero are omitted."""
        query: Dict[str, str] = {}
        if self.limit:
            query["limit"] = str(int(self.limit))
        if self.offset:
            query["offset"] = str(int(self.offset))
        return query

    @property
    def is_empty(self) -> bool:
        return not self.to_query()


@dataclass(frozen=True)
class DataStoreMetadata:
    """Table metadata row of a CKAN datastore (``_table_metadata``)."""

    id: str = field(default="", metadata={"json": "_id"})
    alias_of: str = field(default="", metadata={"json": "alias_of"})
    name: str = ""
    oid: int = 0


@dataclass
class TableMetadataPage:
    """Result wrapper returned by ``datastore_search``."""

    records: List[DataStoreMetadata] = field(default_factory=list)


__all__ = ["DataStoreMetadata", "ListOptions", "TableMetadataPage"]
