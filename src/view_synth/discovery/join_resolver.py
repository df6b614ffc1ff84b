"""
Join Resolver - finds how a new table attaches to the join chain.

For each already joined table, in the order they were attached, three
relationships are tried:

1. A foreign key on the new table referencing the joined table
2. A foreign key on the joined table referencing the new table
3. A column name common to both tables

The first hit wins. Foreign key predicates put the referencing side on the
left; common column predicates put the new table on the left.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from view_synth.metadata.base import CatalogIntrospector
from view_synth.models import JoinCondition, JoinedTable, TableRef

logger = logging.getLogger(__name__)


class JoinResolver:
    """Greedy, first-fit resolution of join predicates against a catalog."""

    def __init__(self, catalog: CatalogIntrospector):
        self.catalog = catalog

    def find_condition(
        self,
        table: TableRef,
        alias: str,
        joined: Sequence[JoinedTable],
    ) -> Optional[JoinCondition]:
        """
        Find a predicate joining ``table`` to any table in ``joined``.

        Args:
            table: The table being attached
            alias: Its alias
            joined: The join chain so far, in attachment order

        Returns:
            JoinCondition, or None when no relationship exists
        """
        for prev in joined:
            condition = self.condition_between(table, alias, prev.table, prev.alias)
            if condition is not None:
                return condition
        return None

    def condition_between(
        self,
        table: TableRef,
        alias: str,
        other: TableRef,
        other_alias: str,
    ) -> Optional[JoinCondition]:
        """Relationship between one pair of tables, FK first then common column."""
        pairs = self.catalog.foreign_key_join(table.schema, table.name, other.schema, other.name)
        if pairs:
            logger.debug(f"FK {table.full_name} -> {other.full_name}")
            return JoinCondition(
                pairs=[(alias, child, other_alias, parent) for child, parent in pairs],
                source="foreign_key",
            )

        pairs = self.catalog.foreign_key_join(other.schema, other.name, table.schema, table.name)
        if pairs:
            logger.debug(f"FK {other.full_name} -> {table.full_name}")
            return JoinCondition(
                pairs=[(other_alias, child, alias, parent) for child, parent in pairs],
                source="foreign_key",
            )

        common = self.catalog.common_column_join(table.schema, table.name, other.schema, other.name)
        if common:
            col, other_col = common
            logger.debug(f"Common column {col}: {table.full_name} ~ {other.full_name}")
            return JoinCondition(
                pairs=[(alias, col, other_alias, other_col)],
                source="common_column",
            )

        logger.debug(f"No relationship: {table.full_name} / {other.full_name}")
        return None
