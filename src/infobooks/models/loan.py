"""
Loan models for the InfoBooks loan service.

A loan records one copy of a book rented by one user:
- Loan: the stored record (status Borrowed or Returned)
- LoanReceipt: what a borrower gets back from a successful rent
- ReturnConfirmation: what a borrower gets back from a successful return
- LoanView: a loan with its derived state, for listings

Only two statuses are stored. Whether a borrowed loan is overdue depends on
the day it is looked at, so it is always derived from
``(status, due_date, today)`` and never written back to the record.
"""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..errors import AlreadyReturnedError
from ..utils import new_identifier


class LoanStatus(str, Enum):
    """Stored status of a loan."""

    BORROWED = "borrowed"
    RETURNED = "returned"


class LoanState(str, Enum):
    """Lifecycle state of a loan as seen on a given day."""

    ACTIVE = "active"
    OVERDUE = "overdue"
    RETURNED = "returned"


class Loan(BaseModel):
    """
    Represents a book loan.

    Created by the lifecycle engine when a copy is rented. A returned loan
    is terminal: it cannot be returned again or borrowed through again.
    """

    id: str = Field(
        default_factory=new_identifier,
        description="Unique identifier for the loan (UUID4)",
    )

    borrower_id: str = Field(
        ...,
        description="Internal id of the user who borrowed the book",
    )

    book_id: str = Field(
        ...,
        description="Id of the borrowed book",
    )

    borrow_date: date = Field(
        ...,
        description="UTC calendar day the book was borrowed",
        examples=["2025-11-01"],
    )

    due_date: date = Field(
        ...,
        description="Last UTC calendar day the book may be returned through self-service",
        examples=["2025-11-15"],
    )

    status: LoanStatus = Field(
        default=LoanStatus.BORROWED,
        description="Stored status of the loan",
    )

    return_date: date | None = Field(
        None,
        description="UTC calendar day the book was returned",
    )

    @model_validator(mode="after")
    def validate_dates(self) -> "Loan":
        self._check_dates()
        return self

    def _check_dates(self) -> None:
        """Validate date relationships and the return date/status pairing."""
        if self.due_date <= self.borrow_date:
            raise ValueError("Due date must be after borrow date")

        if self.status == LoanStatus.RETURNED and self.return_date is None:
            raise ValueError("Returned loans must have a return date")
        if self.status == LoanStatus.BORROWED and self.return_date is not None:
            raise ValueError("Borrowed loans cannot have a return date")

        if self.return_date and self.return_date < self.borrow_date:
            raise ValueError("Return date cannot be before borrow date")

    @property
    def is_returned(self) -> bool:
        return self.status == LoanStatus.RETURNED

    @property
    def loan_period_days(self) -> int:
        return (self.due_date - self.borrow_date).days

    def is_overdue(self, today: date) -> bool:
        """Check if the loan is still out after its due date."""
        return not self.is_returned and today > self.due_date

    def days_overdue(self, today: date) -> int:
        if not self.is_overdue(today):
            return 0
        return (today - self.due_date).days

    def state(self, today: date) -> LoanState:
        if self.is_returned:
            return LoanState.RETURNED
        if self.is_overdue(today):
            return LoanState.OVERDUE
        return LoanState.ACTIVE

    def mark_returned(self, today: date) -> None:
        """
        Mark the loan as returned on ``today``.

        Raises:
            AlreadyReturnedError: If the loan was already returned
        """
        if self.is_returned:
            raise AlreadyReturnedError(f"Loan {self.id} was already returned")
        self.return_date = today
        self.status = LoanStatus.RETURNED.value
        self._check_dates()

    # Assignments are not validated one by one: status and return_date change
    # together, so mark_returned re-checks the dates after setting both.
    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "id": "7c1e0f5e-2b7d-4c8e-8f55-1d0a2f3b4c5d",
                "borrower_id": "5b0f9c52-8c1f-4a52-9d5e-0f6f2f1a9b10",
                "book_id": "0d4c3a0e-6a55-4e36-9a1b-0c1d7e0b8f11",
                "borrow_date": "2025-11-01",
                "due_date": "2025-11-15",
                "status": "borrowed",
            }
        },
    )


class LoanReceipt(BaseModel):
    """Returned to the borrower after a successful rent."""

    loan_id: str
    book_id: str
    book_title: str
    borrower_id: str
    borrow_date: date
    due_date: date
    available_qty: int = Field(..., description="Copies left on the shelf after this rent")


class ReturnConfirmation(BaseModel):
    """Returned to the borrower after a successful return."""

    loan_id: str
    book_id: str
    return_date: date
    available_qty: int = Field(..., description="Copies on the shelf after this return")


class LoanView(BaseModel):
    """A loan with its derived state on a given day."""

    id: str
    borrower_id: str
    book_id: str
    borrow_date: date
    due_date: date
    return_date: date | None
    state: LoanState
    days_overdue: int

    @classmethod
    def from_loan(cls, loan: Loan, today: date) -> "LoanView":
        return cls(
            id=loan.id,
            borrower_id=loan.borrower_id,
            book_id=loan.book_id,
            borrow_date=loan.borrow_date,
            due_date=loan.due_date,
            return_date=loan.return_date,
            state=loan.state(today),
            days_overdue=loan.days_overdue(today),
        )

    model_config = ConfigDict(use_enum_values=True)
