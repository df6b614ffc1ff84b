"""
SQL Synthesizer - renders a ViewPlan as CREATE VIEW text.

Layout::

    CREATE OR REPLACE VIEW <name> AS
    SELECT
        t1.COL_A,
        t2.COL_B
    FROM
        "SCHEMA"."TABLE_1" t1
        JOIN "SCHEMA"."TABLE_2" t2 ON t2.FK_COL = t1.PK_COL

Table identifiers are always quoted and upper-cased; the view name is used
as given.
"""

from __future__ import annotations

from typing import List

from view_synth.models import ViewPlan

INDENT = "    "
BANNER_RULE = "-" * 38


def render_select_list(plan: ViewPlan) -> str:
    return ",\n".join(f"{INDENT}{col.render()}" for col in plan.columns)


def render_from_clause(plan: ViewPlan) -> str:
    lines: List[str] = []
    for joined in plan.joined:
        source = f"{joined.table.quoted_name} {joined.alias}"
        if joined.is_anchor:
            lines.append(f"{INDENT}{source}")
        else:
            lines.append(f"{INDENT}JOIN {source} ON {joined.condition.render()}")
    return "\n".join(lines)


def render_create_view(view_name: str, plan: ViewPlan) -> str:
    """Render the full CREATE OR REPLACE VIEW statement."""
    return (
        f"CREATE OR REPLACE VIEW {view_name} AS\n"
        f"SELECT\n"
        f"{render_select_list(plan)}\n"
        f"FROM\n"
        f"{render_from_clause(plan)}"
    )


def render_banner(sql: str) -> str:
    """Wrap a generated script in the console banner."""
    return "\n".join([
        BANNER_RULE,
        "-- Generated View Script",
        BANNER_RULE,
        sql,
        BANNER_RULE,
    ])
