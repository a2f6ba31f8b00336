"""
Tests for the Book model.

These tests verify that the Book model:
1. Validates input data
2. Keeps 0 <= available_qty <= total_qty through every mutation
3. Takes and restores copies correctly at the boundaries
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from infobooks.errors import NoCopiesAvailableError
from infobooks.models.book import Book, BookView


def make_book(**overrides) -> Book:
    data = {
        "title": "Moby Dick",
        "author": "Herman Melville",
        "category": "Clássicos",
        "year": 1851,
        "total_qty": 2,
        "available_qty": 2,
    }
    data.update(overrides)
    return Book(**data)


class TestBookModel:
    """Test suite for the Book model."""

    def test_create_valid_book(self):
        book = make_book(category="  Clássicos  ", description="Descrição de Moby Dick")

        assert book.title == "Moby Dick"
        assert book.category == "Clássicos"
        assert book.is_available is True
        assert book.rented_qty == 0
        # Ids are generated as UUID4 strings
        assert len(book.id) == 36

    def test_available_cannot_exceed_total(self):
        with pytest.raises(ValidationError) as exc_info:
            make_book(total_qty=1, available_qty=2)
        assert "Available copies cannot exceed total copies" in str(exc_info.value)

    def test_negative_quantities_rejected(self):
        with pytest.raises(ValidationError):
            make_book(total_qty=-1, available_qty=0)
        with pytest.raises(ValidationError):
            make_book(available_qty=-1)

    def test_future_year_rejected(self):
        with pytest.raises(ValidationError):
            make_book(year=datetime.now().year + 2)

    def test_blank_title_rejected(self):
        with pytest.raises(ValidationError):
            make_book(title="")

    def test_assignment_is_validated(self):
        book = make_book(total_qty=2, available_qty=1)

        with pytest.raises(ValidationError):
            book.available_qty = 3
        with pytest.raises(ValidationError):
            book.available_qty = -1


class TestCopies:
    def test_take_copy_until_empty(self):
        book = make_book(total_qty=2, available_qty=2)

        book.take_copy()
        assert book.available_qty == 1
        book.take_copy()
        assert book.available_qty == 0
        assert book.is_available is False

        with pytest.raises(NoCopiesAvailableError):
            book.take_copy()
        assert book.available_qty == 0

    def test_book_without_copies_cannot_be_taken(self):
        book = make_book(total_qty=0, available_qty=0)

        with pytest.raises(NoCopiesAvailableError):
            book.take_copy()

    def test_restore_copy(self):
        book = make_book(total_qty=2, available_qty=0)

        assert book.restore_copy() is True
        assert book.available_qty == 1

    def test_restore_copy_saturates_at_total(self):
        book = make_book(total_qty=2, available_qty=2)

        assert book.restore_copy() is False
        assert book.available_qty == 2


def test_book_view_includes_availability():
    book = make_book(total_qty=1, available_qty=0)

    view = BookView.from_book(book)

    assert view.id == book.id
    assert view.is_available is False
    assert view.model_dump()["total_qty"] == 1
