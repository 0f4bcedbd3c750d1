"""
Store interface used by the request dispatcher.

The dispatcher only ever talks to this protocol, so the Supabase-backed
implementation can be swapped for an in-memory one in tests.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol

Row = Dict[str, Any]
Filters = Mapping[str, Any]


class Store(Protocol):
    """Equality-filtered CRUD against named tables."""

    def query(
        self,
        table: str,
        filters: Filters,
        order_by: Optional[str] = None,
        descending: bool = False,
        single: bool = False,
    ) -> Any:
        """
        Select rows matching every filter.

        Returns a list of rows, or a single row when ``single`` is set.
        A single-row lookup with no match raises RecordNotFoundError.
        """
        ...

    def insert(self, table: str, record: Mapping[str, Any]) -> List[Row]:
        """Insert one record and return the created rows."""
        ...

    def update(self, table: str, values: Mapping[str, Any], filters: Filters) -> List[Row]:
        """Update rows matching every filter and return them."""
        ...

    def delete(self, table: str, filters: Filters) -> List[Row]:
        """Delete rows matching every filter and return them."""
        ...
