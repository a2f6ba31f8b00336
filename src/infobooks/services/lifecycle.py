"""
Loan lifecycle engine for the InfoBooks loan service.

This is where renting and returning happen:

1. **Rent**: take a copy off the shelf and open a loan due after the loan
   period
2. **Return**: close the borrower's loan and put the copy back
3. **Overdue policy**: a loan still out after its due date cannot be closed
   through self-service; the borrower has to go to the front desk

A loan moves Active -> (Active, overdue) -> Returned. Only Borrowed and
Returned are stored; overdue is worked out from the due date and "today"
every time it matters. "today" comes from the engine's clock unless the
caller passes one explicitly.

Every operation checks its preconditions before anything is written, inside
the store's per-record critical sections, so a rejected call leaves the store
exactly as it was.
"""

import logging
from collections.abc import Callable
from datetime import date, timedelta

from ..errors import (
    AlreadyReturnedError,
    BookNotFoundError,
    InvalidBookReferenceError,
    InvalidLoanReferenceError,
    LoanNotFoundError,
    OverdueError,
    UnauthorizedError,
)
from ..models.book import Book
from ..models.loan import Loan, LoanReceipt, ReturnConfirmation
from ..store.catalog import CatalogStore
from ..utils import canonical_identifier, parse_identifier, utc_today

logger = logging.getLogger(__name__)

DEFAULT_LOAN_PERIOD_DAYS = 14


class LoanLifecycleEngine:
    """
    Implements the rent/return transitions on top of a CatalogStore.

    The engine holds no records of its own; it only borrows them from the
    store for the duration of an operation.
    """

    def __init__(
        self,
        store: CatalogStore,
        loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
        clock: Callable[[], date] = utc_today,
    ):
        if loan_period_days < 1:
            raise ValueError("Loan period must be at least one day")
        self.store = store
        self.loan_period = timedelta(days=loan_period_days)
        self.clock = clock

    def due_date_for(self, borrow_date: date) -> date:
        return borrow_date + self.loan_period

    def rent_book(self, borrower_key: str, book_id: str, today: date | None = None) -> LoanReceipt:
        """
        Rent one copy of a book.

        The availability check and the decrement happen in a single critical
        section on the book, so concurrent rents of the last copy cannot both
        succeed. The loan is inserted after that lock is released.

        Args:
            borrower_key: Internal id of the borrowing user
            book_id: Id of the book to rent
            today: Borrow date; defaults to the engine's clock

        Returns:
            Receipt with the new loan id and its due date

        Raises:
            InvalidBookReferenceError: If ``book_id`` is malformed
            UnauthorizedError: If the borrower is unknown or deactivated
            BookNotFoundError: If the book does not exist
            NoCopiesAvailableError: If every copy is out (or none is owned)
        """
        book_id = parse_identifier(book_id, InvalidBookReferenceError)
        today = today or self.clock()

        borrower_id = canonical_identifier(borrower_key)
        borrower = self.store.get_user(borrower_id) if borrower_id is not None else None
        if borrower is None or not borrower.active:
            raise UnauthorizedError("Borrower is not an active user")

        def take_copy(book: Book | None) -> Book:
            if book is None:
                raise BookNotFoundError(f"Book {book_id} not found")
            book.take_copy()
            return book

        book = self.store.with_book_mut(book_id, take_copy)

        loan = Loan(
            borrower_id=borrower.id,
            book_id=book_id,
            borrow_date=today,
            due_date=self.due_date_for(today),
        )
        try:
            self.store.insert_loan(loan)
        except Exception:
            # The copy was taken but no loan holds it; put it back.
            logger.warning("Loan insert failed for book %s, restoring copy", book_id)
            self.store.with_book_mut(book_id, _restore_copy)
            raise

        logger.info(
            "Rented book %s to %s: loan %s due %s (%d left)",
            book_id,
            borrower.id,
            loan.id,
            loan.due_date,
            book.available_qty,
        )
        return LoanReceipt(
            loan_id=loan.id,
            book_id=book_id,
            book_title=book.title,
            borrower_id=borrower.id,
            borrow_date=loan.borrow_date,
            due_date=loan.due_date,
            available_qty=book.available_qty,
        )

    def return_book(
        self, borrower_key: str, loan_id: str, today: date | None = None
    ) -> ReturnConfirmation:
        """
        Return a borrowed book.

        The loan's lock is held for the whole operation and the book's lock is
        taken inside it, so the loan is only marked Returned if the copy was
        put back as well.

        Args:
            borrower_key: Internal id of the user returning the book
            loan_id: Id of the loan to close
            today: Return date; defaults to the engine's clock

        Returns:
            Confirmation with the return date and the new availability

        Raises:
            InvalidLoanReferenceError: If ``loan_id`` is malformed
            LoanNotFoundError: If the loan does not exist
            UnauthorizedError: If the loan belongs to someone else
            AlreadyReturnedError: If the loan was already returned
            OverdueError: If the loan is past its due date
        """
        loan_id = parse_identifier(loan_id, InvalidLoanReferenceError)
        borrower_id = canonical_identifier(borrower_key)
        today = today or self.clock()

        def close_loan(loan: Loan | None) -> ReturnConfirmation:
            if loan is None:
                raise LoanNotFoundError(f"Loan {loan_id} not found")
            if borrower_id is None or loan.borrower_id != borrower_id:
                raise UnauthorizedError("Loan belongs to another borrower")
            if loan.is_returned:
                raise AlreadyReturnedError(f"Loan {loan_id} was already returned")
            if loan.is_overdue(today):
                raise OverdueError(
                    f"Loan {loan_id} is {loan.days_overdue(today)} days overdue; "
                    "please return it at the library front desk"
                )

            loan.mark_returned(today)
            book = self.store.with_book_mut(loan.book_id, _restore_copy)
            return ReturnConfirmation(
                loan_id=loan.id,
                book_id=loan.book_id,
                return_date=today,
                available_qty=book.available_qty if book is not None else 0,
            )

        confirmation = self.store.with_loan_mut(loan_id, close_loan)
        logger.info(
            "Returned loan %s for book %s (%d available)",
            loan_id,
            confirmation.book_id,
            confirmation.available_qty,
        )
        return confirmation


def _restore_copy(book: Book | None) -> Book | None:
    if book is None:
        # Books are never removed; reaching this means the loan was corrupt.
        logger.error("Returned loan references a missing book")
        return None
    if not book.restore_copy():
        logger.warning("Book %s already had all copies on the shelf", book.id)
    return book
