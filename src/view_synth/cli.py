"""
Command-line interface for view_synth.

Provides generate and inspect commands for building multi-table views from
an Oracle catalog or an offline YAML catalog.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from view_synth.exceptions import ExecutionError, ViewSynthError
from view_synth.generator import ViewGenerator, render_banner
from view_synth.metadata import CatalogIntrospector, InMemoryCatalog, OracleCatalog
from view_synth.models import GenerationConfig

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def open_catalog(oracle_conn: Optional[str], catalog_file: Optional[Path]) -> CatalogIntrospector:
    """Build the catalog selected on the command line."""
    if oracle_conn:
        return OracleCatalog(oracle_conn)
    if catalog_file:
        return InMemoryCatalog.from_yaml(catalog_file)
    console.print("[red]Error: Provide --oracle_conn or --catalog_file[/red]")
    sys.exit(1)


def split_tables(tables: Optional[str]) -> List[str]:
    if not tables:
        return []
    return [t.strip() for t in tables.split(",") if t.strip()]


@click.group()
@click.version_option(version="0.1.0", prog_name="view_synth")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """
    View Synth - Automatic multi-table view generator

    Discovers how tables relate through foreign keys or shared column names
    and writes a single CREATE VIEW joining them.
    """
    setup_logging(verbose)


@cli.command()
@click.option(
    "--tables",
    type=str,
    default=None,
    help="Comma-separated list of tables (TABLE or SCHEMA.TABLE), anchor first",
)
@click.option(
    "--view_name",
    type=str,
    default=None,
    help="Name of the view to create",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML file with tables, view_name, execute and auto_rename",
)
@click.option(
    "--oracle_conn",
    type=str,
    default=None,
    help="Oracle connection string (user/pwd@host:port/service)",
)
@click.option(
    "--catalog_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML catalog description for offline generation",
)
@click.option(
    "--execute/--no-execute",
    default=None,
    help="Create the view (default) or only print the SQL",
)
@click.option(
    "--auto_rename/--no-auto_rename",
    default=None,
    help="Append _V1, _V2, ... when the view name is taken (default on)",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the generated SQL to this file",
)
@click.option(
    "--report",
    type=click.Path(path_type=Path),
    default=None,
    help="Write a YAML summary of the run to this file",
)
def generate(
    tables: Optional[str],
    view_name: Optional[str],
    config_file: Optional[Path],
    oracle_conn: Optional[str],
    catalog_file: Optional[Path],
    execute: Optional[bool],
    auto_rename: Optional[bool],
    output: Optional[Path],
    report: Optional[Path],
) -> None:
    """
    Generate a view joining the given tables.

    Examples:

        # Preview against an offline catalog
        view-synth generate --catalog_file samples/sales_catalog.yaml \\
            --tables ORDERS,CUSTOMERS,ORDER_ITEMS --view_name ORDER_V \\
            --no-execute

        # Create the view in Oracle, failing if the name is taken
        view-synth generate --oracle_conn "user/pwd@localhost:1521/ORCL" \\
            --tables HR.EMPLOYEES,HR.DEPARTMENTS --view_name EMP_DEPT_V \\
            --no-auto_rename

        # Take everything from a config file
        view-synth generate --catalog_file samples/sales_catalog.yaml \\
            --config samples/order_view.yaml
    """
    try:
        config = GenerationConfig.from_yaml(config_file) if config_file else GenerationConfig()
    except ViewSynthError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)

    if tables:
        config.tables = split_tables(tables)
    if view_name:
        config.view_name = view_name
    if execute is not None:
        config.execute = execute
    if auto_rename is not None:
        config.auto_rename = auto_rename

    console.print("[bold blue]View Synth Generation[/bold blue]")
    console.print(f"View: {config.view_name}")
    console.print(f"Tables: {', '.join(config.tables)}")

    catalog = open_catalog(oracle_conn, catalog_file)
    generator = ViewGenerator(catalog)

    try:
        result = generator.generate_from_config(config)
    except ExecutionError as e:
        if e.sql:
            console.print(render_banner(e.sql), markup=False, highlight=False, soft_wrap=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except ViewSynthError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    finally:
        if isinstance(catalog, OracleCatalog):
            catalog.disconnect()

    console.print(render_banner(result.sql), markup=False, highlight=False, soft_wrap=True)

    # Join summary
    join_table = Table(title="Join Chain")
    join_table.add_column("Alias", style="cyan")
    join_table.add_column("Table", style="green")
    join_table.add_column("Via", style="yellow")
    join_table.add_column("Condition", style="magenta")

    for joined in result.plan.joined:
        if joined.is_anchor:
            join_table.add_row(joined.alias, joined.table.full_name, "anchor", "-")
        else:
            join_table.add_row(
                joined.alias,
                joined.table.full_name,
                joined.condition.source,
                joined.condition.render(),
            )

    console.print(join_table)

    if result.plan.skipped:
        console.print(
            f"\n[yellow]Not joined ({result.skipped_count}): "
            + ", ".join(f"{s.table.full_name} ({s.alias})" for s in result.plan.skipped)
            + "[/yellow]"
        )

    if result.renamed:
        console.print(f"[yellow]{result.requested_name} exists; renamed to {result.view_name}[/yellow]")

    if result.executed:
        console.print(f'\n[green]View "{result.view_name}" created.[/green]')
    else:
        console.print("\n[yellow]View not created. Execution skipped as per input.[/yellow]")

    if output:
        output = Path(output)
        output.write_text(result.sql + "\n")
        console.print(f"[green]Saved SQL to: {output}[/green]")

    if report:
        report = Path(report)
        with open(report, "w") as f:
            yaml.safe_dump(result.to_dict(), f, default_flow_style=False, sort_keys=False)
        console.print(f"[green]Saved report to: {report}[/green]")


@cli.command()
@click.option(
    "--tables",
    type=str,
    required=True,
    help="Comma-separated list of tables (TABLE or SCHEMA.TABLE)",
)
@click.option(
    "--oracle_conn",
    type=str,
    default=None,
    help="Oracle connection string (user/pwd@host:port/service)",
)
@click.option(
    "--catalog_file",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="YAML catalog description",
)
def inspect(
    tables: str,
    oracle_conn: Optional[str],
    catalog_file: Optional[Path],
) -> None:
    """
    Show columns and pairwise relationships for a set of tables.

    Example:

        view-synth inspect --catalog_file samples/sales_catalog.yaml \\
            --tables ORDERS,CUSTOMERS
    """
    from view_synth.discovery import JoinResolver, allocate_aliases, parse_tables

    catalog = open_catalog(oracle_conn, catalog_file)
    try:
        refs = parse_tables(split_tables(tables), catalog.current_schema())
        aliases = allocate_aliases(refs)
        resolver = JoinResolver(catalog)

        tables_table = Table(title="Tables")
        tables_table.add_column("Alias", style="cyan")
        tables_table.add_column("Table", style="green")
        tables_table.add_column("Columns", style="yellow")

        for ref, alias in zip(refs, aliases):
            columns = catalog.columns_of(ref.schema, ref.name)
            tables_table.add_row(
                alias,
                ref.full_name,
                ", ".join(c.describe() for c in columns) if columns else "-",
            )

        console.print(tables_table)

        rel_table = Table(title="Relationships")
        rel_table.add_column("Table", style="cyan")
        rel_table.add_column("Related To", style="green")
        rel_table.add_column("Via", style="yellow")
        rel_table.add_column("Condition", style="magenta")

        found = 0
        for i in range(1, len(refs)):
            for j in range(i):
                condition = resolver.condition_between(refs[i], aliases[i], refs[j], aliases[j])
                if condition is None:
                    continue
                found += 1
                rel_table.add_row(
                    refs[i].full_name,
                    refs[j].full_name,
                    condition.source,
                    condition.render(),
                )
    except ViewSynthError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    finally:
        if isinstance(catalog, OracleCatalog):
            catalog.disconnect()

    if found:
        console.print(rel_table)
    else:
        console.print("\n[yellow]No relationships found between these tables.[/yellow]")


if __name__ == "__main__":
    cli()
