"""View name conflict handling."""

from __future__ import annotations

import logging
from typing import Tuple

from view_synth.exceptions import NamingConflictError
from view_synth.metadata.base import CatalogIntrospector

logger = logging.getLogger(__name__)

RENAME_SUFFIX = "_V"


def split_view_name(view_name: str, default_schema: str) -> Tuple[str, str]:
    """Return (schema, name) for the namespace lookup, upper-cased."""
    if "." in view_name:
        schema, name = view_name.split(".", 1)
    else:
        schema, name = default_schema, view_name
    return schema.upper(), name.upper()


def resolve_view_name(
    catalog: CatalogIntrospector,
    view_name: str,
    default_schema: str,
    auto_rename: bool = True,
) -> str:
    """
    Pick the name the view will be created under.

    An unused name is returned unchanged. A taken name either gets the first
    free ``_V<n>`` suffix (n = 1, 2, ...) or, with auto_rename off, raises
    NamingConflictError.
    """
    schema, name = split_view_name(view_name, default_schema)
    if not catalog.object_exists(schema, name):
        return view_name

    if not auto_rename:
        raise NamingConflictError(view_name, schema)

    n = 1
    while catalog.object_exists(schema, f"{name}{RENAME_SUFFIX}{n}"):
        n += 1

    renamed = f"{view_name}{RENAME_SUFFIX}{n}"
    logger.info(f"View {view_name} exists in {schema}; using {renamed}")
    return renamed
