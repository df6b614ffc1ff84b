"""
View Synth - automatic multi-table view generator.

Given an ordered list of tables and a view name, discovers how the tables
join and writes a single CREATE VIEW statement over them.

Features:
- Join discovery from foreign key constraints, both directions
- Fallback to common column names when no constraint exists
- Global column name deduplication (first table wins)
- Automatic _V<n> renaming when the view name is taken
- Dry-run preview or direct execution against Oracle
"""

__version__ = "0.1.0"

from view_synth.exceptions import (
    CatalogError,
    ExecutionError,
    InputError,
    NamingConflictError,
    ViewSynthError,
)
from view_synth.models import (
    ColumnEntry,
    ColumnMetadata,
    ForeignKey,
    GenerationConfig,
    GenerationResult,
    JoinCondition,
    JoinedTable,
    SkippedTable,
    TableMetadata,
    TableRef,
    ViewPlan,
)
from view_synth.metadata import CatalogIntrospector, InMemoryCatalog, OracleCatalog
from view_synth.generator import ViewGenerator, render_create_view

__all__ = [
    # Core models
    "ColumnEntry",
    "ColumnMetadata",
    "ForeignKey",
    "GenerationConfig",
    "GenerationResult",
    "JoinCondition",
    "JoinedTable",
    "SkippedTable",
    "TableMetadata",
    "TableRef",
    "ViewPlan",
    # Catalogs
    "CatalogIntrospector",
    "InMemoryCatalog",
    "OracleCatalog",
    # Generation
    "ViewGenerator",
    "render_create_view",
    # Errors
    "ViewSynthError",
    "InputError",
    "NamingConflictError",
    "CatalogError",
    "ExecutionError",
]
