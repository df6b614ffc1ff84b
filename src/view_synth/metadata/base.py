"""
Catalog introspection interface.

The join resolver and column collector only talk to a catalog through this
interface, so they run unchanged against a live Oracle dictionary or an
in-memory catalog loaded from YAML.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from view_synth.models import ColumnMetadata

logger = logging.getLogger(__name__)


class CatalogIntrospector(ABC):
    """Read access to column and constraint metadata plus an execution sink."""

    @abstractmethod
    def current_schema(self) -> str:
        """Schema assumed for unqualified table and view names."""

    @abstractmethod
    def columns_of(self, schema: str, table: str) -> List[ColumnMetadata]:
        """
        Get the columns of a table in declaration order.

        Returns an empty list when the table does not exist or is not visible.
        """

    @abstractmethod
    def foreign_key_join(
        self,
        schema_a: str,
        table_a: str,
        schema_b: str,
        table_b: str,
    ) -> Optional[List[Tuple[str, str]]]:
        """
        Get the column pairs of a foreign key on table_a referencing table_b.

        Returns (column_a, column_b) pairs in constraint position order for
        the first matching constraint, or None when there is none.
        """

    @abstractmethod
    def object_exists(self, schema: str, name: str) -> bool:
        """Check whether any object with this name exists in the schema."""

    @abstractmethod
    def execute(self, sql: str) -> None:
        """Run a single statement; raise ExecutionError on failure."""

    def common_column_join(
        self,
        schema_a: str,
        table_a: str,
        schema_b: str,
        table_b: str,
    ) -> Optional[Tuple[str, str]]:
        """
        Find the first column of table_a whose name also occurs in table_b.

        Names are compared upper-cased and scanned in table_a's declaration
        order. Returns (column_a, column_b) or None.
        """
        columns_b = {
            c.name.upper(): c.name for c in self.columns_of(schema_b, table_b)
        }
        if not columns_b:
            return None

        for col in self.columns_of(schema_a, table_a):
            match = columns_b.get(col.name.upper())
            if match is not None:
                return col.name, match
        return None
