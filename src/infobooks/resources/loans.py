"""Loan Resources - Borrowing History

Resources:
- library://loans/{user_id} - A user's loans, oldest first, with their state
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..errors import UserNotFoundError
from ..library import Library
from ..models.loan import LoanState

logger = logging.getLogger(__name__)


def build_loan_resources(library: Library) -> list[dict[str, Any]]:
    """Create the loan resources bound to ``library``."""

    async def get_user_loans_handler(user_id: str) -> dict[str, Any]:
        """Return every loan of ``user_id``.

        Each loan carries its state on today's date (active, overdue or
        returned), so clients can tell which ones can still be returned
        through return_book.
        """
        try:
            logger.debug("MCP Resource Request - loans/%s", user_id)

            try:
                user = library.get_user(user_id)
            except UserNotFoundError as e:
                raise ResourceError(f"User not found: {user_id}") from e

            loans = library.list_loans(user.id)
            return {
                "user_id": user.id,
                "loans": [loan.model_dump(mode="json") for loan in loans],
                "active": sum(1 for loan in loans if loan.state == LoanState.ACTIVE),
                "overdue": sum(1 for loan in loans if loan.state == LoanState.OVERDUE),
                "returned": sum(1 for loan in loans if loan.state == LoanState.RETURNED),
            }

        except ResourceError:
            raise
        except Exception as e:
            logger.exception("Error in loans/{user_id} resource")
            raise ResourceError(f"Failed to retrieve loans: {e!s}") from e

    return [
        {
            "uri_template": "library://loans/{user_id}",
            "name": "User Loans",
            "description": "A user's loans with due dates and whether each one is overdue",
            "mime_type": "application/json",
            "handler": get_user_loans_handler,
        }
    ]
