"""
In-memory catalog.

Holds table and foreign key definitions in dictionaries. Used for offline
previews from a YAML catalog description and as the catalog in tests.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import yaml

from view_synth.exceptions import ExecutionError
from view_synth.metadata.base import CatalogIntrospector
from view_synth.models import ColumnMetadata, ForeignKey, TableMetadata, TableRef

logger = logging.getLogger(__name__)

CREATE_VIEW_RE = re.compile(
    r"^\s*CREATE\s+(?:OR\s+REPLACE\s+)?VIEW\s+([A-Za-z0-9_$#.\"]+)",
    re.IGNORECASE,
)


class InMemoryCatalog(CatalogIntrospector):
    """
    Catalog held entirely in memory.

    Executed CREATE VIEW statements register the view name as an existing
    object, so later naming checks see it.
    """

    def __init__(
        self,
        tables: Optional[Iterable[TableMetadata]] = None,
        foreign_keys: Optional[Iterable[ForeignKey]] = None,
        objects: Optional[Iterable[str]] = None,
        default_schema: str = "PUBLIC",
        fail_on_execute: Optional[str] = None,
    ):
        """
        Initialize the catalog.

        Args:
            tables: Table definitions
            foreign_keys: Foreign key constraints, in catalog order
            objects: Extra existing object names (SCHEMA.NAME or NAME)
            default_schema: Session schema for unqualified names
            fail_on_execute: If set, execute() fails with this message
        """
        self.default_schema = default_schema.upper()
        self.fail_on_execute = fail_on_execute
        self._tables: Dict[Tuple[str, str], TableMetadata] = {}
        self._foreign_keys: List[ForeignKey] = list(foreign_keys or [])
        self._objects: Set[Tuple[str, str]] = set()
        self.executed: List[str] = []

        for table in tables or []:
            self.add_table(table)
        for name in objects or []:
            self._objects.add(TableRef.parse(name, self.default_schema).key)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> InMemoryCatalog:
        """
        Build a catalog from a dictionary.

        Expected layout::

            default_schema: HR
            tables:
              HR.ORDERS:
                columns: [ORDER_ID, CUSTOMER_ID]
            foreign_keys:
              - name: FK_ORDERS_CUSTOMER
                child_table: HR.ORDERS
                child_columns: [CUSTOMER_ID]
                parent_table: HR.CUSTOMERS
                parent_columns: [CUSTOMER_ID]
            objects: [HR.EXISTING_VIEW]
        """
        default_schema = str(data.get("default_schema", "PUBLIC")).upper()

        tables = []
        for full_name, tdata in (data.get("tables") or {}).items():
            ref = TableRef.parse(full_name, default_schema)
            # A bare list is shorthand for {columns: [...]}
            columns = tdata if isinstance(tdata, list) else (tdata or {}).get("columns", [])
            tables.append(TableMetadata.from_dict({
                "name": ref.name,
                "schema": ref.schema,
                "columns": columns,
            }))

        foreign_keys = [
            ForeignKey.from_dict(fk, default_schema)
            for fk in data.get("foreign_keys") or []
        ]

        return cls(
            tables=tables,
            foreign_keys=foreign_keys,
            objects=data.get("objects") or [],
            default_schema=default_schema,
        )

    @classmethod
    def from_yaml(cls, path: Path) -> InMemoryCatalog:
        """Load a catalog description from a YAML file."""
        path = Path(path)
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

        catalog = cls.from_dict(data)
        logger.info(
            f"Loaded catalog with {len(catalog._tables)} tables and "
            f"{len(catalog._foreign_keys)} foreign keys from {path}"
        )
        return catalog

    def add_table(self, table: TableMetadata) -> None:
        """Add a table; tables are objects in the namespace too."""
        key = (table.schema.upper(), table.name.upper())
        self._tables[key] = table
        self._objects.add(key)

    def current_schema(self) -> str:
        return self.default_schema

    def columns_of(self, schema: str, table: str) -> List[ColumnMetadata]:
        meta = self._tables.get((schema.upper(), table.upper()))
        if meta is None:
            logger.warning(f"No visible columns for {schema}.{table}")
            return []
        return sorted(meta.columns, key=lambda c: c.position)

    def foreign_key_join(
        self,
        schema_a: str,
        table_a: str,
        schema_b: str,
        table_b: str,
    ) -> Optional[List[Tuple[str, str]]]:
        child = (schema_a.upper(), table_a.upper())
        parent = (schema_b.upper(), table_b.upper())

        candidates = [
            fk for fk in self._foreign_keys
            if (fk.child_schema.upper(), fk.child_table.upper()) == child
            and (fk.parent_schema.upper(), fk.parent_table.upper()) == parent
        ]
        if not candidates:
            return None

        # Same ordering as the dictionary query: by constraint name
        fk = sorted(candidates, key=lambda f: f.name.upper())[0]
        return fk.column_pairs

    def object_exists(self, schema: str, name: str) -> bool:
        return (schema.upper(), name.upper()) in self._objects

    def execute(self, sql: str) -> None:
        if self.fail_on_execute:
            raise ExecutionError(f"Statement failed: {self.fail_on_execute}", sql=sql)

        self.executed.append(sql)
        match = CREATE_VIEW_RE.match(sql)
        if match:
            name = match.group(1).replace('"', "")
            self._objects.add(TableRef.parse(name, self.default_schema).key)
