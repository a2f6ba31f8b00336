"""
Reporting for the InfoBooks loan service.

Read-only aggregates over store snapshots, used by the admin dashboard:
- total books in the catalog
- active loans (borrowed, overdue or not)
- overdue loans (borrowed and past their due date)
- active users

Each count is taken from one snapshot of one collection. Counts from
different collections may be a moment apart, which is acceptable because
they are independent numbers.
"""

import logging
from collections.abc import Callable
from datetime import date

from pydantic import BaseModel, Field

from ..models.loan import LoanStatus, LoanView
from ..store.catalog import CatalogStore
from ..utils import utc_today

logger = logging.getLogger(__name__)


class DashboardStats(BaseModel):
    """Snapshot of the library's circulation."""

    total_books: int = Field(..., description="Titles in the catalog")
    active_loans: int = Field(..., description="Loans not yet returned, overdue or not")
    overdue_loans: int = Field(..., description="Loans not yet returned and past their due date")
    active_users: int = Field(..., description="Users allowed to log in and borrow")
    as_of: date = Field(..., description="Day the overdue count was computed for")


class ReportingService:
    """Computes dashboard numbers without ever writing to the store."""

    def __init__(self, store: CatalogStore, clock: Callable[[], date] = utc_today):
        self.store = store
        self.clock = clock

    def total_books(self) -> int:
        return len(self.store.books())

    def active_loan_count(self) -> int:
        return sum(1 for loan in self.store.loans() if loan.status == LoanStatus.BORROWED)

    def overdue_count(self, today: date | None = None) -> int:
        today = today or self.clock()
        return sum(1 for loan in self.store.loans() if loan.is_overdue(today))

    def active_user_count(self) -> int:
        return sum(1 for user in self.store.users() if user.active)

    def dashboard_stats(self, today: date | None = None) -> DashboardStats:
        today = today or self.clock()

        loans = self.store.loans()
        stats = DashboardStats(
            total_books=self.total_books(),
            active_loans=sum(1 for loan in loans if loan.status == LoanStatus.BORROWED),
            overdue_loans=sum(1 for loan in loans if loan.is_overdue(today)),
            active_users=self.active_user_count(),
            as_of=today,
        )
        logger.debug("Dashboard stats: %s", stats)
        return stats

    def list_loans(self, borrower_id: str | None = None, today: date | None = None) -> list[LoanView]:
        """
        List loans with their state on ``today``.

        Args:
            borrower_id: Only include this user's loans
            today: Day used to decide which loans are overdue

        Returns:
            Loans ordered by borrow date, oldest first
        """
        today = today or self.clock()
        loans = [
            loan
            for loan in self.store.loans()
            if borrower_id is None or loan.borrower_id == borrower_id
        ]
        loans.sort(key=lambda loan: loan.borrow_date)
        return [LoanView.from_loan(loan, today) for loan in loans]
