"""
Store package for the InfoBooks loan service.

This package provides:
- CatalogStore: the in-memory, lock-guarded owner of users, books and loans
- seed_sample_data: the demo catalog loaded at startup

Nothing here is persisted; the store lives as long as the process.
"""

from .catalog import CatalogStore
from .seed import SeedSummary, seed_sample_data

__all__ = [
    "CatalogStore",
    "SeedSummary",
    "seed_sample_data",
]
