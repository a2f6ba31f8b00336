"""Catalog lookups and admin book additions."""

import logging

from pydantic import ValidationError

from ..errors import BookNotFoundError, InvalidBookReferenceError, InvalidInputError
from ..models.book import Book, BookView
from ..store.catalog import CatalogStore
from ..utils import parse_identifier

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, store: CatalogStore):
        self.store = store

    def get_book(self, book_id: str) -> BookView:
        """
        Get a single book.

        Raises:
            InvalidBookReferenceError: If ``book_id`` is malformed
            BookNotFoundError: If the book does not exist
        """
        book_id = parse_identifier(book_id, InvalidBookReferenceError)
        book = self.store.find_book(book_id)
        if book is None:
            raise BookNotFoundError(f"Book {book_id} not found")
        return BookView.from_book(book)

    def list_books(self) -> list[BookView]:
        """All books in the order they were added to the catalog."""
        return [BookView.from_book(book) for book in self.store.books()]

    def add_book(
        self,
        title: str,
        author: str,
        category: str,
        year: int,
        total_qty: int,
        description: str = "",
    ) -> BookView:
        """
        Add a title to the catalog with every copy on the shelf.

        Raises:
            InvalidInputError: If a field is blank or out of range
        """
        try:
            book = Book(
                title=title,
                author=author,
                category=category,
                year=year,
                description=description,
                total_qty=total_qty,
                available_qty=total_qty,
            )
        except ValidationError as e:
            raise InvalidInputError(f"Invalid book: {e.error_count()} field(s) rejected") from e

        book = self.store.insert_book(book)
        logger.info("Added book %s (%s, %d copies)", book.id, book.title, book.total_qty)
        return BookView.from_book(book)
