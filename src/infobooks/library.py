"""
Library facade for the InfoBooks loan service.

The facade is the only thing the MCP tools and resources talk to. It owns one
CatalogStore and wires the lifecycle engine, the account service, the catalog
service and the reporting service on top of it. Everything it returns is a
pydantic model built from copies of store records.

Admin operations (adding books, deactivating users) take the id of the acting
user and check that it belongs to an active administrator before doing
anything else.
"""

import logging
from collections.abc import Callable
from datetime import date

from .config import ServiceConfig
from .errors import UnauthorizedError
from .models.book import BookView
from .models.loan import LoanReceipt, LoanView, ReturnConfirmation
from .models.user import User, UserProfile
from .services import (
    DEFAULT_LOAN_PERIOD_DAYS,
    AccountService,
    CatalogService,
    DashboardStats,
    LoanLifecycleEngine,
    ReportingService,
)
from .store import CatalogStore, seed_sample_data
from .utils import canonical_identifier, utc_today

logger = logging.getLogger(__name__)


class Library:
    """Entry point for every loan service operation."""

    def __init__(
        self,
        store: CatalogStore | None = None,
        loan_period_days: int = DEFAULT_LOAN_PERIOD_DAYS,
        clock: Callable[[], date] = utc_today,
    ):
        self.store = store if store is not None else CatalogStore()
        self.clock = clock
        self.lifecycle = LoanLifecycleEngine(self.store, loan_period_days, clock)
        self.accounts = AccountService(self.store)
        self.catalog = CatalogService(self.store)
        self.reporting = ReportingService(self.store, clock)

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "Library":
        """Build a library from settings, seeding sample data when enabled."""
        library = cls(loan_period_days=config.loan_period_days)
        if config.seed_sample_data:
            seed_sample_data(library.store, config.loan_period_days)
        else:
            logger.info("Starting with an empty catalog")
        return library

    # === Accounts ===

    def register_user(self, name: str, national_id: str, secret: str) -> str:
        return self.accounts.register_user(name, national_id, secret)

    def authenticate(self, national_id: str, secret: str) -> UserProfile:
        return self.accounts.authenticate(national_id, secret)

    def get_user(self, user_id: str) -> UserProfile:
        return self.accounts.get_user(user_id)

    def set_user_active(self, acting_user_id: str, national_id: str, active: bool) -> UserProfile:
        """Deactivate or reactivate a user. Admin only."""
        self._require_admin(acting_user_id)
        return self.accounts.set_user_active(national_id, active)

    # === Circulation ===

    def rent_book(self, borrower_key: str, book_id: str, today: date | None = None) -> LoanReceipt:
        return self.lifecycle.rent_book(borrower_key, book_id, today)

    def return_book(
        self, borrower_key: str, loan_id: str, today: date | None = None
    ) -> ReturnConfirmation:
        return self.lifecycle.return_book(borrower_key, loan_id, today)

    # === Catalog ===

    def get_book(self, book_id: str) -> BookView:
        return self.catalog.get_book(book_id)

    def list_books(self) -> list[BookView]:
        return self.catalog.list_books()

    def add_book(
        self,
        acting_user_id: str,
        title: str,
        author: str,
        category: str,
        year: int,
        total_qty: int,
        description: str = "",
    ) -> BookView:
        """Add a title to the catalog. Admin only."""
        self._require_admin(acting_user_id)
        return self.catalog.add_book(title, author, category, year, total_qty, description)

    # === Reporting ===

    def dashboard_stats(self, today: date | None = None) -> DashboardStats:
        return self.reporting.dashboard_stats(today)

    def list_loans(
        self, borrower_key: str | None = None, today: date | None = None
    ) -> list[LoanView]:
        return self.reporting.list_loans(borrower_key, today)

    def _require_admin(self, acting_user_id: str) -> User:
        acting_id = canonical_identifier(acting_user_id)
        user = self.store.get_user(acting_id) if acting_id is not None else None
        if user is None or not user.active or not user.is_admin:
            raise UnauthorizedError("This operation requires an active administrator")
        return user
