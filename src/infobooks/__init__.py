"""
InfoBooks Loan Service Package.

This package implements an in-memory library-loan service: it tracks books,
users and loans and enforces the borrowing rules (availability counts, due
dates, overdue blocking) behind an MCP server.

Key Components:
- models: Pydantic models for users, books and loans
- store: the in-memory catalog store and its sample data
- services: loan lifecycle engine, accounts and reporting
- library: the facade the transport shell calls into
- tools: MCP tools (operations with side effects)
- resources: MCP resources (read-only endpoints)
"""

__version__ = "0.1.0"

from .errors import LibraryError
from .library import Library
from .store import CatalogStore

__all__ = [
    "CatalogStore",
    "Library",
    "LibraryError",
    "__version__",
]
