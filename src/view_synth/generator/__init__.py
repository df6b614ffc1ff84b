"""
Generator module for producing CREATE VIEW statements.

Handles join planning, SQL rendering, view name conflicts and execution.
"""

from view_synth.generator.generator import ViewGenerator
from view_synth.generator.naming import resolve_view_name
from view_synth.generator.sql import render_banner, render_create_view

__all__ = [
    "ViewGenerator",
    "resolve_view_name",
    "render_banner",
    "render_create_view",
]
