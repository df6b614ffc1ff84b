"""Exception hierarchy for view generation.

A missing relationship between two tables is not an error: the table is
dropped from the view and reported on the result. A run stops on invalid
input, on a name collision that may not be resolved, on an unreachable
catalog or on a rejected CREATE VIEW.
"""

from __future__ import annotations

from typing import Optional


class ViewSynthError(Exception):
    """Base exception for view generation failures."""


class InputError(ViewSynthError):
    """Raised when the table list or view name is missing or malformed."""


class NamingConflictError(ViewSynthError):
    """Raised when the target view name exists and auto-rename is disabled."""

    def __init__(self, view_name: str, schema: str):
        self.view_name = view_name
        self.schema = schema
        super().__init__(
            f"An object named {view_name} already exists in schema {schema} "
            f"and auto-rename is disabled"
        )


class CatalogError(ViewSynthError):
    """Raised when the catalog cannot be reached or a dictionary query fails."""


class ExecutionError(ViewSynthError):
    """Raised when the execution sink rejects the generated statement.

    The driver error is folded into a single message; the statement that
    was attempted is kept on ``sql`` for reporting.
    """

    def __init__(self, message: str, sql: Optional[str] = None):
        self.sql = sql
        super().__init__(message)
