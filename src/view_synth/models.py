"""
Core data models for the view_synth package.

Defines the structures shared by catalog introspection, join resolution and
SQL synthesis: table references, column and constraint metadata, the join
plan and the generation result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from view_synth.exceptions import InputError

TRUE_WORDS = {"y", "yes", "true"}
FALSE_WORDS = {"n", "no", "false"}


def parse_flag(value: Any, key: str, default: bool) -> bool:
    """Read a yes/no setting from loaded configuration."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        word = value.strip().lower()
        if word in TRUE_WORDS:
            return True
        if word in FALSE_WORDS:
            return False
    raise InputError(f"{key} must be Y/N, yes/no or true/false, got {value!r}")


@dataclass(frozen=True)
class TableRef:
    """A table identifier parsed from user input."""
    schema: str
    name: str
    raw_input: str = field(default="", compare=False)

    @classmethod
    def parse(cls, raw: str, default_schema: str) -> TableRef:
        """
        Parse ``schema.table`` or ``table`` into a TableRef.

        Both parts are upper-cased; an unqualified name lands in default_schema.
        """
        text = raw.strip()
        if "." in text:
            schema, name = text.split(".", 1)
        else:
            schema, name = default_schema, text
        return cls(schema=schema.upper(), name=name.upper(), raw_input=raw)

    @property
    def key(self) -> Tuple[str, str]:
        return (self.schema.upper(), self.name.upper())

    @property
    def full_name(self) -> str:
        """Return schema-qualified table name."""
        return f"{self.schema}.{self.name}"

    @property
    def quoted_name(self) -> str:
        """Return the double-quoted, upper-cased identifier used in SQL."""
        return f'"{self.schema.upper()}"."{self.name.upper()}"'


@dataclass
class ColumnMetadata:
    """Metadata for a single column."""
    name: str
    position: int
    data_type: Optional[str] = None
    nullable: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "position": self.position,
            "data_type": self.data_type,
            "nullable": self.nullable,
        }

    def describe(self) -> str:
        """Return ``NAME TYPE [NOT NULL]`` for display."""
        text = f"{self.name} {self.data_type}" if self.data_type else self.name
        return text if self.nullable else f"{text} NOT NULL"

    @classmethod
    def from_dict(cls, data: Dict[str, Any], position: int = 0) -> ColumnMetadata:
        """Create from a dict, or from a bare column name string."""
        if isinstance(data, str):
            return cls(name=data, position=position)
        return cls(
            name=data["name"],
            position=data.get("position", position),
            data_type=data.get("data_type"),
            nullable=data.get("nullable", True),
        )


@dataclass
class TableMetadata:
    """Metadata for a database table."""
    name: str
    schema: str
    columns: List[ColumnMetadata] = field(default_factory=list)

    @property
    def full_name(self) -> str:
        """Return schema-qualified table name."""
        return f"{self.schema}.{self.name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "schema": self.schema,
            "columns": [c.to_dict() for c in self.columns],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TableMetadata:
        """Create from dictionary. Columns may be names or full dicts."""
        return cls(
            name=data["name"],
            schema=data["schema"],
            columns=[
                ColumnMetadata.from_dict(c, position=i)
                for i, c in enumerate(data.get("columns", []), start=1)
            ],
        )


@dataclass
class ForeignKey:
    """A referential constraint: child columns reference parent columns."""
    name: str
    child_schema: str
    child_table: str
    child_columns: List[str]
    parent_schema: str
    parent_table: str
    parent_columns: List[str]

    @property
    def column_pairs(self) -> List[Tuple[str, str]]:
        """(child_column, parent_column) pairs in position order."""
        return list(zip(self.child_columns, self.parent_columns))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "child_table": f"{self.child_schema}.{self.child_table}",
            "child_columns": self.child_columns,
            "parent_table": f"{self.parent_schema}.{self.parent_table}",
            "parent_columns": self.parent_columns,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_schema: str = "") -> ForeignKey:
        """Create from dictionary; table names may be schema-qualified."""
        child = TableRef.parse(data["child_table"], default_schema)
        parent = TableRef.parse(data["parent_table"], default_schema)
        return cls(
            name=data.get("name", f"FK_{child.name}_{parent.name}"),
            child_schema=child.schema,
            child_table=child.name,
            child_columns=[c.upper() for c in data["child_columns"]],
            parent_schema=parent.schema,
            parent_table=parent.name,
            parent_columns=[c.upper() for c in data["parent_columns"]],
        )


@dataclass
class JoinCondition:
    """An equi-join predicate between two aliased tables."""
    pairs: List[Tuple[str, str, str, str]]  # (left_alias, left_col, right_alias, right_col)
    source: str = "foreign_key"  # foreign_key | common_column

    def render(self) -> str:
        return " AND ".join(
            f"{la}.{lc} = {ra}.{rc}" for la, lc, ra, rc in self.pairs
        )


@dataclass
class JoinedTable:
    """A table attached to the join chain."""
    table: TableRef
    alias: str
    condition: Optional[JoinCondition] = None

    @property
    def is_anchor(self) -> bool:
        return self.condition is None


@dataclass
class SkippedTable:
    """A table that could not be related to any joined table."""
    table: TableRef
    alias: str


@dataclass
class ColumnEntry:
    """One entry of the generated SELECT list."""
    name: str
    alias: str
    position: int

    def render(self) -> str:
        return f"{self.alias}.{self.name}"


@dataclass
class ViewPlan:
    """Structured form of a view: join chain, select list and dropped tables."""
    joined: List[JoinedTable] = field(default_factory=list)
    columns: List[ColumnEntry] = field(default_factory=list)
    skipped: List[SkippedTable] = field(default_factory=list)

    @property
    def anchor(self) -> Optional[JoinedTable]:
        return self.joined[0] if self.joined else None


@dataclass
class GenerationResult:
    """Outcome of a generation run."""
    view_name: str
    requested_name: str
    sql: str
    executed: bool
    plan: ViewPlan

    @property
    def renamed(self) -> bool:
        return self.view_name != self.requested_name

    @property
    def skipped_count(self) -> int:
        return len(self.plan.skipped)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "view_name": self.view_name,
            "requested_name": self.requested_name,
            "executed": self.executed,
            "sql": self.sql,
            "joined": [
                {
                    "table": j.table.full_name,
                    "alias": j.alias,
                    "condition": j.condition.render() if j.condition else None,
                }
                for j in self.plan.joined
            ],
            "skipped": [
                {"table": s.table.full_name, "alias": s.alias}
                for s in self.plan.skipped
            ],
            "columns": [c.render() for c in self.plan.columns],
        }


@dataclass
class GenerationConfig:
    """Configuration for a generation run."""
    tables: List[str] = field(default_factory=list)
    view_name: str = ""
    execute: bool = True
    auto_rename: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GenerationConfig:
        """
        Create from a dictionary.

        ``tables`` may be a list or a comma-separated string. ``execute`` and
        ``auto_rename`` accept booleans or Y/N, yes/no and true/false in any case.
        """
        tables = data.get("tables") or []
        if isinstance(tables, str):
            tables = [t.strip() for t in tables.split(",") if t.strip()]
        if not isinstance(tables, list):
            raise InputError(f"tables must be a list or a comma-separated string, got {tables!r}")

        view_name = data.get("view_name") or ""
        if not isinstance(view_name, str):
            raise InputError(f"view_name must be a string, got {view_name!r}")

        return cls(
            tables=list(tables),
            view_name=view_name,
            execute=parse_flag(data.get("execute"), "execute", True),
            auto_rename=parse_flag(data.get("auto_rename"), "auto_rename", True),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> GenerationConfig:
        """Load a generation config from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)
