"""
Services for the InfoBooks loan service.

- lifecycle: renting and returning books (LoanLifecycleEngine)
- accounts: registration, login and deactivation (AccountService)
- catalog: book lookups and additions (CatalogService)
- reporting: dashboard aggregates and loan listings (ReportingService)
"""

from .accounts import AccountService
from .catalog import CatalogService
from .lifecycle import DEFAULT_LOAN_PERIOD_DAYS, LoanLifecycleEngine
from .reporting import DashboardStats, ReportingService

__all__ = [
    "DEFAULT_LOAN_PERIOD_DAYS",
    "AccountService",
    "CatalogService",
    "DashboardStats",
    "LoanLifecycleEngine",
    "ReportingService",
]
