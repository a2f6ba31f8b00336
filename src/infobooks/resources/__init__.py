"""InfoBooks MCP Resources Package

Resources are the read-only endpoints of the server: the catalog, a user's
loans and the admin dashboard. Each resource is a dictionary with a ``uri``
(or ``uri_template``), a name, a description, a MIME type and an async handler
bound to one Library instance.
"""

from typing import Any

from ..library import Library
from .books import build_book_resources
from .loans import build_loan_resources
from .stats import build_stats_resources


def build_resources(library: Library) -> list[dict[str, Any]]:
    """Every resource the server registers, bound to ``library``."""
    return (
        build_book_resources(library)
        + build_loan_resources(library)
        + build_stats_resources(library)
    )


__all__ = [
    "build_book_resources",
    "build_loan_resources",
    "build_resources",
    "build_stats_resources",
]
