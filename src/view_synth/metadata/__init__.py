"""
Catalog introspection for Oracle and in-memory catalogs.

Provides a common interface to read table columns and foreign key
relationships, check the object namespace and execute generated DDL.
"""

from view_synth.metadata.base import CatalogIntrospector
from view_synth.metadata.memory import InMemoryCatalog
from view_synth.metadata.oracle import OracleCatalog

__all__ = [
    "CatalogIntrospector",
    "InMemoryCatalog",
    "OracleCatalog",
]
