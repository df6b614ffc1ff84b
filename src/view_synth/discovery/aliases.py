"""Table identifier parsing and alias allocation."""

from __future__ import annotations

import re
from typing import List, Sequence

from view_synth.exceptions import InputError
from view_synth.models import TableRef

IDENTIFIER_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_$#]*(\.[A-Za-z][A-Za-z0-9_$#]*)?$")


def validate_identifier(raw: str, kind: str = "table") -> str:
    """Check a ``name`` or ``schema.name`` identifier and return it stripped."""
    if raw is not None and not isinstance(raw, str):
        raise InputError(f"Malformed {kind} name: {raw!r}")
    text = (raw or "").strip()
    if not text:
        raise InputError(f"Empty {kind} name")
    if not IDENTIFIER_RE.match(text):
        raise InputError(f"Malformed {kind} name: {raw!r}")
    return text


def parse_tables(raw_tables: Sequence[str], default_schema: str) -> List[TableRef]:
    """Validate and parse the input table list, keeping order and duplicates."""
    if not raw_tables:
        raise InputError("Table list is empty")
    return [
        TableRef.parse(validate_identifier(raw, "table"), default_schema)
        for raw in raw_tables
    ]


def allocate_aliases(tables: Sequence[TableRef]) -> List[str]:
    """
    Assign ``t1..tN`` by input position.

    The result is aligned with ``tables``. Every occurrence gets its own
    alias, whether or not it is joined later.
    """
    return [f"t{i}" for i in range(1, len(tables) + 1)]
