"""
Sample data for the InfoBooks loan service.

Loads the demo catalog the server starts with when ``seed_sample_data`` is
enabled:
- one administrator and two patrons
- five books, among them "Moby Dick" with two copies
- one loan of "Moby Dick" to Miguel, borrowed on 2025-11-01

The loan takes its copy like any other rent, so Moby Dick starts with one
copy on the shelf and the availability counts stay consistent with the loans.
"""

import logging
from datetime import date, timedelta

from pydantic import BaseModel, Field

from ..credentials import hash_secret
from ..models.book import Book
from ..models.loan import Loan
from ..models.user import User
from ..utils import normalize_national_id
from .catalog import CatalogStore

logger = logging.getLogger(__name__)

SAMPLE_USERS = [
    # (name, national_id, secret, is_admin)
    ("Admin InfoBooks", "000.000.000-00", "adminpass", True),
    ("Miguel Silva Santos", "458.632.582-07", "12345678g", False),
    ("Lenitha Borges", "098.356.333-04", "lenitha123", False),
]

SAMPLE_BOOKS = [
    # (title, author, category, year, copies)
    ("Moby Dick", "Herman Melville", "Clássicos", 1851, 2),
    ("A Divina Comédia", "Dante Alighieri", "Clássicos", 1320, 1),
    ("O Homem de Giz", "C. J. Tudor", "Suspense", 2018, 3),
    ("O Livro do Desassossego", "Fernando Pessoa", "Filosofia", 1982, 1),
    ("Memórias Póstumas", "Machado de Assis", "Clássicos", 1881, 4),
]

SAMPLE_LOAN_BORROW_DATE = date(2025, 11, 1)


class SeedSummary(BaseModel):
    """Ids of the records created by ``seed_sample_data``."""

    users: dict[str, str] = Field(default_factory=dict, description="national ID -> user id")
    books: dict[str, str] = Field(default_factory=dict, description="title -> book id")
    loans: list[str] = Field(default_factory=list)


def seed_sample_data(store: CatalogStore, loan_period_days: int = 14) -> SeedSummary:
    """
    Populate an empty store with the demo catalog.

    Args:
        store: Store to populate
        loan_period_days: Loan period used for the sample loan's due date

    Returns:
        Ids of everything that was created
    """
    summary = SeedSummary()

    for name, national_id, secret, is_admin in SAMPLE_USERS:
        user = store.insert_user(
            User(
                name=name,
                national_id=normalize_national_id(national_id),
                secret_hash=hash_secret(secret),
                is_admin=is_admin,
            )
        )
        summary.users[user.national_id] = user.id

    for title, author, category, year, copies in SAMPLE_BOOKS:
        book = store.insert_book(
            Book(
                title=title,
                author=author,
                category=category,
                year=year,
                description=f"Descrição de {title}",
                total_qty=copies,
                available_qty=copies,
            )
        )
        summary.books[title] = book.id

    moby_id = summary.books["Moby Dick"]
    store.with_book_mut(moby_id, lambda book: book.take_copy())
    loan = store.insert_loan(
        Loan(
            borrower_id=summary.users[normalize_national_id("458.632.582-07")],
            book_id=moby_id,
            borrow_date=SAMPLE_LOAN_BORROW_DATE,
            due_date=SAMPLE_LOAN_BORROW_DATE + timedelta(days=loan_period_days),
        )
    )
    summary.loans.append(loan.id)

    logger.info(
        "Seeded %d users, %d books and %d loans",
        len(summary.users),
        len(summary.books),
        len(summary.loans),
    )
    return summary
