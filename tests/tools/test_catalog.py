"""Tests for the add_book tool."""

from datetime import datetime

import pytest

from infobooks.library import Library
from infobooks.tools import build_catalog_tools


@pytest.fixture
def add_book_handler(library: Library):
    (tool,) = build_catalog_tools(library)
    assert tool["name"] == "add_book"
    return tool["handler"]


def book_arguments(acting_user_id: str, **overrides) -> dict:
    arguments = {
        "acting_user_id": acting_user_id,
        "title": "Dom Casmurro",
        "author": "Machado de Assis",
        "category": "Clássicos",
        "year": 1899,
        "total_qty": 2,
    }
    arguments.update(overrides)
    return arguments


async def test_admin_adds_book(add_book_handler, admin_id, library: Library):
    result = await add_book_handler(book_arguments(admin_id))

    assert "isError" not in result
    book = result["data"]["book"]
    assert book["available_qty"] == 2
    assert book["is_available"] is True
    assert library.get_book(book["id"]).title == "Dom Casmurro"


async def test_patron_cannot_add_book(add_book_handler, miguel_id, library: Library):
    result = await add_book_handler(book_arguments(miguel_id))

    assert result["error"] == {"code": "unauthorized", "category": "unauthorized"}
    assert len(library.list_books()) == 5


@pytest.mark.parametrize(
    "overrides",
    [{"total_qty": -1}, {"title": ""}, {"year": datetime.now().year + 5}, {"year": "old"}],
)
async def test_invalid_book(add_book_handler, admin_id, overrides):
    result = await add_book_handler(book_arguments(admin_id, **overrides))

    assert result["error"] == {"code": "invalid_input", "category": "invalid_input"}


async def test_book_without_copies_can_be_added(add_book_handler, admin_id):
    result = await add_book_handler(book_arguments(admin_id, total_qty=0))

    assert result["data"]["book"]["is_available"] is False
