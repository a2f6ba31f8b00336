"""
InfoBooks Models.

Pydantic models for the core entities of the loan service:
- User: registered borrowers and admins
- Book: catalog titles with copy counts
- Loan: rent/return records

plus the read-only views handed back to callers (UserProfile, BookView,
LoanReceipt, ReturnConfirmation, LoanView).
"""

from .book import Book, BookView
from .loan import Loan, LoanReceipt, LoanState, LoanStatus, LoanView, ReturnConfirmation
from .user import User, UserProfile

__all__ = [
    "Book",
    "BookView",
    "Loan",
    "LoanReceipt",
    "LoanState",
    "LoanStatus",
    "LoanView",
    "ReturnConfirmation",
    "User",
    "UserProfile",
]
