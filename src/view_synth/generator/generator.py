"""
View generator: drives a full generation run.

Handles:
- Input validation and alias allocation
- Join chain construction with silent skip of unrelated tables
- View name conflict resolution
- Execution or dry-run preview of the generated statement
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from view_synth.discovery import (
    ColumnCollector,
    JoinResolver,
    allocate_aliases,
    parse_tables,
    validate_identifier,
)
from view_synth.metadata.base import CatalogIntrospector
from view_synth.generator.naming import resolve_view_name
from view_synth.generator.sql import render_create_view
from view_synth.models import (
    GenerationConfig,
    GenerationResult,
    JoinedTable,
    SkippedTable,
    TableRef,
    ViewPlan,
)

logger = logging.getLogger(__name__)


class ViewGenerator:
    """
    Generates a CREATE VIEW statement joining a list of tables.

    The generator:
    1. Parses table identifiers and assigns aliases t1..tN by input position
    2. Anchors the chain on the first table
    3. Attaches each later table to the first joined table it relates to
    4. Collects columns, keeping the first occurrence of each name
    5. Resolves the final view name and renders the SQL
    6. Executes the statement, or only returns it when execute is False

    Each call to generate() starts from empty state.
    """

    def __init__(self, catalog: CatalogIntrospector):
        """
        Initialize generator.

        Args:
            catalog: Catalog used for introspection and execution
        """
        self.catalog = catalog

    def plan(self, tables: Sequence[TableRef], aliases: Optional[List[str]] = None) -> ViewPlan:
        """Build the join chain and SELECT list for parsed tables."""
        if aliases is None:
            aliases = allocate_aliases(tables)

        resolver = JoinResolver(self.catalog)
        collector = ColumnCollector(self.catalog)
        plan = ViewPlan()

        for i, (table, alias) in enumerate(zip(tables, aliases)):
            if i == 0:
                plan.joined.append(JoinedTable(table=table, alias=alias))
                collector.add_columns(table, alias)
                logger.info(f"Anchor {table.full_name} as {alias}")
                continue

            condition = resolver.find_condition(table, alias, plan.joined)
            if condition is None:
                plan.skipped.append(SkippedTable(table=table, alias=alias))
                logger.info(f"Skipping {table.full_name}: no relationship to joined tables")
                continue

            plan.joined.append(JoinedTable(table=table, alias=alias, condition=condition))
            collector.add_columns(table, alias)
            logger.info(f"Joined {table.full_name} as {alias} ON {condition.render()}")

        plan.columns = collector.entries
        if not plan.columns and plan.anchor is not None:
            logger.warning(
                f"Generated view has no columns; anchor {plan.anchor.table.full_name} has no visible columns"
            )
        return plan

    def generate(
        self,
        tables: Sequence[str],
        view_name: str,
        execute: bool = True,
        auto_rename: bool = True,
    ) -> GenerationResult:
        """
        Run a full generation.

        Args:
            tables: Table identifiers, ``table`` or ``schema.table``
            view_name: Target view name, optionally schema-qualified
            execute: Run the statement; when False only return the SQL
            auto_rename: Suffix _V1, _V2, ... instead of failing on a taken name

        Returns:
            GenerationResult with the SQL, final name and join plan

        Raises:
            InputError: Empty or malformed input
            NamingConflictError: Name taken and auto_rename is False
            ExecutionError: The catalog rejected the statement
        """
        view_name = validate_identifier(view_name, "view")
        default_schema = self.catalog.current_schema()
        refs = parse_tables(tables, default_schema)
        aliases = allocate_aliases(refs)

        logger.info(f"Generating view {view_name} over {len(refs)} tables")

        plan = self.plan(refs, aliases)
        final_name = resolve_view_name(self.catalog, view_name, default_schema, auto_rename)
        sql = render_create_view(final_name, plan)

        if execute:
            self.catalog.execute(sql)
            logger.info(f"View {final_name} created")
        else:
            logger.info(f"View {final_name} not created; execution skipped")

        if plan.skipped:
            logger.warning(
                f"{len(plan.skipped)} of {len(refs)} tables were not joined: "
                + ", ".join(s.table.full_name for s in plan.skipped)
            )

        return GenerationResult(
            view_name=final_name,
            requested_name=view_name,
            sql=sql,
            executed=execute,
            plan=plan,
        )

    def generate_from_config(self, config: GenerationConfig) -> GenerationResult:
        """Run a generation described by a GenerationConfig."""
        return self.generate(
            config.tables,
            config.view_name,
            execute=config.execute,
            auto_rename=config.auto_rename,
        )
