"""Test configuration and fixtures for the InfoBooks loan service.

Every test gets its own CatalogStore and Library, so nothing leaks between
tests. The library's clock is pinned to 2025-11-10, which puts the sample
loan (borrowed 2025-11-01, due 2025-11-15) inside its loan period.
"""

import os
from collections.abc import Callable, Generator
from datetime import date
from unittest.mock import patch

import pytest

from infobooks.config import reset_config
from infobooks.library import Library
from infobooks.models.book import Book
from infobooks.store import CatalogStore, SeedSummary, seed_sample_data
from infobooks.utils import normalize_national_id

FIXED_TODAY = date(2025, 11, 10)

MIGUEL_NATIONAL_ID = "458.632.582-07"
LENITHA_NATIONAL_ID = "098.356.333-04"
ADMIN_NATIONAL_ID = "000.000.000-00"


def pytest_configure(config):
    config.addinivalue_line("markers", "mcp_protocol: tests that go through the MCP server")


# === Configuration Fixtures ===


@pytest.fixture(autouse=True)
def reset_service_config() -> Generator[None, None, None]:
    """Drop the cached configuration around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Run a test with no INFOBOOKS_* variables and no .env file lookups."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("INFOBOOKS_")}
    with patch.dict(os.environ, env, clear=True):
        yield


# === Store and Library Fixtures ===


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore()


@pytest.fixture
def library(store: CatalogStore) -> Library:
    return Library(store, clock=lambda: FIXED_TODAY)


@pytest.fixture
def seeded(library: Library) -> SeedSummary:
    """Load the sample catalog into the library's store."""
    return seed_sample_data(library.store)


@pytest.fixture
def miguel_id(seeded: SeedSummary) -> str:
    return seeded.users[normalize_national_id(MIGUEL_NATIONAL_ID)]


@pytest.fixture
def lenitha_id(seeded: SeedSummary) -> str:
    return seeded.users[normalize_national_id(LENITHA_NATIONAL_ID)]


@pytest.fixture
def admin_id(seeded: SeedSummary) -> str:
    return seeded.users[normalize_national_id(ADMIN_NATIONAL_ID)]


@pytest.fixture
def moby_dick_id(seeded: SeedSummary) -> str:
    return seeded.books["Moby Dick"]


@pytest.fixture
def sample_loan_id(seeded: SeedSummary) -> str:
    return seeded.loans[0]


@pytest.fixture
def add_book(store: CatalogStore) -> Callable[..., Book]:
    """Factory that inserts a book straight into the store."""

    def _add_book(
        title: str = "Test Book", total_qty: int = 2, available_qty: int | None = None
    ) -> Book:
        return store.insert_book(
            Book(
                title=title,
                author="Test Author",
                category="Testes",
                year=2020,
                total_qty=total_qty,
                available_qty=total_qty if available_qty is None else available_qty,
            )
        )

    return _add_book


@pytest.fixture
def register(library: Library) -> Callable[..., str]:
    """Factory that registers a patron and returns their user id."""
    counter = iter(range(10_000_000, 99_999_999))

    def _register(name: str = "Test Patron", secret: str = "secret123") -> str:
        return library.register_user(name, str(next(counter)), secret)

    return _register
