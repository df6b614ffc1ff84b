"""Column Collector - builds the SELECT list across joined tables."""

from __future__ import annotations

import logging
from typing import List, Set

from view_synth.metadata.base import CatalogIntrospector
from view_synth.models import ColumnEntry, TableRef

logger = logging.getLogger(__name__)


class ColumnCollector:
    """
    Accumulates columns in table order, keeping each name only once.

    The first table to contribute a name owns it; the same name from a later
    table is dropped even if it means something different there.
    """

    def __init__(self, catalog: CatalogIntrospector):
        self.catalog = catalog
        self.entries: List[ColumnEntry] = []
        self._seen: Set[str] = set()

    def add_columns(self, table: TableRef, alias: str) -> List[ColumnEntry]:
        """Append the table's unseen columns; return the entries added."""
        added = []
        shadowed = 0
        for col in self.catalog.columns_of(table.schema, table.name):
            key = col.name.upper()
            if key in self._seen:
                shadowed += 1
                continue
            self._seen.add(key)
            entry = ColumnEntry(name=col.name, alias=alias, position=col.position)
            self.entries.append(entry)
            added.append(entry)

        if shadowed:
            logger.debug(f"{shadowed} column(s) of {table.full_name} shadowed by earlier tables")
        return added
