"""
Join discovery for view generation.

Turns an ordered table list into a join chain:
- Alias allocation by input position
- Relationship lookup via foreign keys, then common column names
- SELECT list collection with first-table-wins name deduplication
"""

from view_synth.discovery.aliases import allocate_aliases, parse_tables, validate_identifier
from view_synth.discovery.columns import ColumnCollector
from view_synth.discovery.join_resolver import JoinResolver

__all__ = [
    "allocate_aliases",
    "parse_tables",
    "validate_identifier",
    "ColumnCollector",
    "JoinResolver",
]
