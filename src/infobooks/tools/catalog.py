"""Catalog Tools - Catalog Maintenance

Tools:
- add_book: Add a new title to the catalog (administrators only)
"""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import LibraryError
from ..library import Library
from .responses import (
    format_error_response,
    format_library_error,
    format_success_response,
    format_validation_error,
    log_operation,
)

logger = logging.getLogger(__name__)


class AddBookInput(BaseModel):
    """Input schema for catalog additions."""

    acting_user_id: str = Field(..., description="Id of the administrator adding the book")
    title: str = Field(..., description="Book title", min_length=1, max_length=500)
    author: str = Field(..., description="Author name", min_length=1, max_length=200)
    category: str = Field(
        ...,
        description="Shelf category",
        min_length=1,
        max_length=100,
        examples=["Clássicos", "Suspense", "Filosofia"],
    )
    year: int = Field(..., description="Publication year", examples=[1851, 2018])
    total_qty: int = Field(..., description="Number of copies owned", ge=0, le=10_000)
    description: str = Field(default="", description="Short description", max_length=2000)

    @field_validator("year")
    @classmethod
    def validate_year(cls, v: int) -> int:
        """Ensure the publication year is not in the future."""
        if v > datetime.now().year + 1:
            raise ValueError("Publication year cannot be in the future")
        return v


def build_catalog_tools(library: Library) -> list[dict[str, Any]]:
    """Create the catalog tools bound to ``library``."""

    async def add_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Add a book with all of its copies available."""
        try:
            try:
                params = AddBookInput.model_validate(arguments)
            except ValidationError as e:
                logger.warning("Invalid add_book parameters: %s", e)
                return format_validation_error(e)

            try:
                book = library.add_book(
                    params.acting_user_id,
                    title=params.title,
                    author=params.author,
                    category=params.category,
                    year=params.year,
                    total_qty=params.total_qty,
                    description=params.description,
                )
            except LibraryError as e:
                logger.info("add_book failed - %s: %s", e.code, e)
                log_operation(
                    "add_book_failed", acting_user_id=params.acting_user_id, error_code=e.code
                )
                return format_library_error(e)

            log_operation(
                "add_book_success",
                acting_user_id=params.acting_user_id,
                book_id=book.id,
                total_qty=book.total_qty,
            )
            return format_success_response(
                f"Added '{book.title}' by {book.author} with {book.total_qty} copies.",
                {"book": book.model_dump(mode="json")},
            )

        except Exception as e:
            logger.exception("Unexpected error in add_book tool")
            return format_error_response("Unexpected error", str(e))

    return [
        {
            "name": "add_book",
            "description": (
                "Add a book to the catalog (administrators only). Every copy starts "
                "on the shelf."
            ),
            "inputSchema": AddBookInput.model_json_schema(),
            "handler": add_book_handler,
        }
    ]
