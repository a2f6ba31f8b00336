"""
MCP Tools for the InfoBooks loan service.

Tools are the operations with side effects: registering, logging in, renting,
returning and catalog administration. Each tool is a dictionary with a name,
a description, a JSON input schema and an async handler. Handlers are closures
over one Library instance, so several servers (or tests) can run side by side
with separate state.
"""

from typing import Any

from ..library import Library
from .accounts import build_account_tools
from .catalog import build_catalog_tools
from .circulation import build_circulation_tools


def build_tools(library: Library) -> list[dict[str, Any]]:
    """Every tool the server registers, bound to ``library``."""
    return (
        build_account_tools(library)
        + build_circulation_tools(library)
        + build_catalog_tools(library)
    )


__all__ = [
    "build_account_tools",
    "build_catalog_tools",
    "build_circulation_tools",
    "build_tools",
]
