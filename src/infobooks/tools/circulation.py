"""Circulation Tools - Renting and Returning Books

Modifies library state through the loan lifecycle.

Tools:
- rent_book: Take a copy off the shelf and open a loan
- return_book: Close a loan and put the copy back (rejected once overdue)
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

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


class RentBookInput(BaseModel):
    """Input schema for book rentals."""

    user_id: str = Field(
        ...,
        description="Id of the borrowing user, as returned by login",
        min_length=1,
        examples=["5b0c7a0e-3f7e-4f0c-9d59-2a9c5f3f1e11"],
    )

    book_id: str = Field(
        ...,
        description="Id of the book to rent",
        min_length=1,
        examples=["0f4bd2c5-8a1d-4d89-b5a2-6f3a8e1c2d44"],
    )


class ReturnBookInput(BaseModel):
    """Input schema for book returns."""

    user_id: str = Field(
        ...,
        description="Id of the user returning the book; must be the borrower",
        min_length=1,
    )

    loan_id: str = Field(
        ...,
        description="Id of the loan to close, as returned by rent_book",
        min_length=1,
    )


def build_circulation_tools(library: Library) -> list[dict[str, Any]]:
    """Create the circulation tools bound to ``library``."""

    async def rent_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Process a rent request.

        Checks the borrower and the book's availability, then opens a loan
        due after the loan period.

        Client calls: tool.call("rent_book", {"user_id": "...", "book_id": "..."})
        """
        try:
            try:
                params = RentBookInput.model_validate(arguments)
            except ValidationError as e:
                logger.warning("Invalid rent parameters: %s", e)
                return format_validation_error(e)

            log_operation("rent_book_start", user_id=params.user_id, book_id=params.book_id)

            try:
                receipt = library.rent_book(params.user_id, params.book_id)
            except LibraryError as e:
                logger.info("Rent failed - %s: %s", e.code, e)
                log_operation(
                    "rent_book_failed",
                    user_id=params.user_id,
                    book_id=params.book_id,
                    error_code=e.code,
                )
                return format_library_error(e)

            log_operation(
                "rent_book_success",
                loan_id=receipt.loan_id,
                user_id=receipt.borrower_id,
                book_id=receipt.book_id,
                due_date=receipt.due_date.isoformat(),
            )

            message = (
                f"Rented '{receipt.book_title}'. "
                f"Due date: {receipt.due_date.strftime('%B %d, %Y')}. "
                f"{receipt.available_qty} copies left on the shelf."
            )
            return format_success_response(message, {"loan": receipt.model_dump(mode="json")})

        except Exception as e:
            logger.exception("Unexpected error in rent_book tool")
            return format_error_response("Unexpected error", str(e))

    async def return_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Process a return request.

        Only the borrower can return a loan, and only while it is not overdue.
        Overdue loans are rejected with a pointer to the front desk.
        """
        try:
            try:
                params = ReturnBookInput.model_validate(arguments)
            except ValidationError as e:
                logger.warning("Invalid return parameters: %s", e)
                return format_validation_error(e)

            log_operation("return_book_start", user_id=params.user_id, loan_id=params.loan_id)

            try:
                confirmation = library.return_book(params.user_id, params.loan_id)
            except LibraryError as e:
                logger.info("Return failed - %s: %s", e.code, e)
                log_operation(
                    "return_book_failed",
                    user_id=params.user_id,
                    loan_id=params.loan_id,
                    error_code=e.code,
                )
                return format_library_error(e)

            log_operation(
                "return_book_success",
                loan_id=confirmation.loan_id,
                book_id=confirmation.book_id,
                return_date=confirmation.return_date.isoformat(),
            )

            message = (
                f"Returned loan '{confirmation.loan_id}' on "
                f"{confirmation.return_date.strftime('%B %d, %Y')}. "
                f"{confirmation.available_qty} copies now on the shelf."
            )
            return format_success_response(
                message, {"return": confirmation.model_dump(mode="json")}
            )

        except Exception as e:
            logger.exception("Unexpected error in return_book tool")
            return format_error_response("Unexpected error", str(e))

    rent_book = {
        "name": "rent_book",
        "description": (
            "Rent one copy of a book. Requires an active user. Fails when the book does "
            "not exist or every copy is already out. The loan is due after the library's "
            "loan period (14 days by default)."
        ),
        "inputSchema": RentBookInput.model_json_schema(),
        "handler": rent_book_handler,
    }

    return_book = {
        "name": "return_book",
        "description": (
            "Return a rented book. Only the borrower can return a loan. Loans past their "
            "due date cannot be returned here and must be handled at the front desk."
        ),
        "inputSchema": ReturnBookInput.model_json_schema(),
        "handler": return_book_handler,
    }

    return [rent_book, return_book]
