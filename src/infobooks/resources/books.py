"""Book Resources - Catalog Browsing

Resources:
- library://books/list - Every book in the order it was added
- library://books/{book_id} - A single book with its availability
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..errors import InvalidInputError, NotFoundError
from ..library import Library

logger = logging.getLogger(__name__)


def build_book_resources(library: Library) -> list[dict[str, Any]]:
    """Create the book resources bound to ``library``."""

    async def list_books_handler() -> dict[str, Any]:
        """Return the whole catalog with availability counts."""
        try:
            logger.debug("MCP Resource Request - books/list")
            books = library.list_books()
            return {
                "books": [book.model_dump(mode="json") for book in books],
                "total": len(books),
                "available": sum(1 for book in books if book.is_available),
            }
        except Exception as e:
            logger.exception("Error in books/list resource")
            raise ResourceError(f"Failed to retrieve book list: {e!s}") from e

    async def get_book_handler(book_id: str) -> dict[str, Any]:
        """Return one book by id."""
        try:
            logger.debug("MCP Resource Request - books/%s", book_id)
            return library.get_book(book_id).model_dump(mode="json")
        except (InvalidInputError, NotFoundError) as e:
            raise ResourceError(f"Book not found: {book_id}") from e
        except Exception as e:
            logger.exception("Error in books/{book_id} resource")
            raise ResourceError(f"Failed to retrieve book details: {e!s}") from e

    return [
        {
            "uri": "library://books/list",
            "name": "Book Catalog",
            "description": "Every book in the catalog with total and available copies",
            "mime_type": "application/json",
            "handler": list_books_handler,
        },
        {
            "uri_template": "library://books/{book_id}",
            "name": "Book Details",
            "description": "Title, author, category, year, description and availability of a book",
            "mime_type": "application/json",
            "handler": get_book_handler,
        },
    ]
