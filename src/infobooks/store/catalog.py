"""
In-memory catalog store for the InfoBooks loan service.

The store is the single owner of the user, book and loan collections. It is
built once at startup and handed to whoever needs it; there is no module-level
instance.

Locking discipline:

1. **Collection locks**: each collection has its own ``threading.Lock``,
   held only long enough to read or swap dictionary entries. Inserts and
   snapshots happen entirely under it, so nobody observes a half-applied
   insert.
2. **Record locks**: every record gets its own lock when it is inserted.
   ``with_*_mut`` holds that lock for the whole read-modify-write, so two
   updates to the same book (or loan) are strictly serialized while updates
   to different books run independently.
3. **Copy-on-write**: a mutation works on a copy of the record. The copy is
   re-validated and published only if the callback returns normally, so a
   failed precondition leaves the stored record untouched. Published records
   are never modified in place, which is what lets snapshots read them under
   the collection lock alone.

Lock order is record lock, then collection lock. Callers that need two
record locks take the loan before the book.
"""

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

from pydantic import BaseModel

from ..errors import BookNotFoundError, DuplicateKeyError
from ..models.book import Book
from ..models.loan import Loan
from ..models.user import User
from ..utils import normalize_national_id

logger = logging.getLogger(__name__)

RecordType = TypeVar("RecordType", bound=BaseModel)
ResultType = TypeVar("ResultType")


class _Collection(Generic[RecordType]):
    """A lockable id -> record mapping with one lock per record."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.lock = threading.Lock()
        self.records: dict[str, RecordType] = {}
        self.record_locks: dict[str, threading.Lock] = {}

    def get(self, record_id: str) -> RecordType | None:
        with self.lock:
            record = self.records.get(record_id)
        return record.model_copy() if record is not None else None

    def add(self, record_id: str, record: RecordType) -> None:
        """Insert a record. The caller must hold ``self.lock``."""
        self.records[record_id] = record
        self.record_locks[record_id] = threading.Lock()

    def snapshot(self) -> list[RecordType]:
        with self.lock:
            records = list(self.records.values())
        return [record.model_copy() for record in records]

    def mutate(
        self,
        record_id: str,
        fn: Callable[[RecordType | None], ResultType],
        check: Callable[[RecordType, RecordType], None] | None = None,
    ) -> ResultType:
        with self.lock:
            record_lock = self.record_locks.get(record_id)

        if record_lock is None:
            return fn(None)

        with record_lock:
            with self.lock:
                current = self.records[record_id]

            working = current.model_copy(deep=True)
            result = fn(working)

            published = type(working).model_validate(working.model_dump())
            if published.id != record_id:  # type: ignore[attr-defined]
                raise ValueError(f"{self.name} ids are immutable")
            if check is not None:
                check(current, published)

            with self.lock:
                self.records[record_id] = published
            return result


class CatalogStore:
    """
    Single source of truth for users, books and loans.

    Lookups never raise for absence: they return ``None``. Every record handed
    out is a copy, so callers can only change the store through its methods.
    """

    def __init__(self) -> None:
        self._users: _Collection[User] = _Collection("User")
        self._books: _Collection[Book] = _Collection("Book")
        self._loans: _Collection[Loan] = _Collection("Loan")
        # Guarded by self._users.lock
        self._user_ids_by_national_id: dict[str, str] = {}

    # === Lookups ===

    def find_user(self, national_id: str) -> User | None:
        """Find a user by national ID (formatted or already normalized)."""
        key = normalize_national_id(national_id)
        with self._users.lock:
            user_id = self._user_ids_by_national_id.get(key)
        if user_id is None:
            return None
        return self._users.get(user_id)

    def get_user(self, user_id: str) -> User | None:
        """Find a user by internal id."""
        return self._users.get(user_id)

    def find_book(self, book_id: str) -> Book | None:
        return self._books.get(book_id)

    def find_loan(self, loan_id: str) -> Loan | None:
        return self._loans.get(loan_id)

    # === Inserts ===

    def insert_user(self, user: User) -> User:
        """
        Add a new user.

        Raises:
            DuplicateKeyError: If the national ID or the id is already taken
        """
        with self._users.lock:
            if user.national_id in self._user_ids_by_national_id:
                raise DuplicateKeyError(f"National ID {user.national_id} is already registered")
            if user.id in self._users.records:
                raise DuplicateKeyError(f"User {user.id} already exists")
            stored = user.model_copy()
            self._users.add(stored.id, stored)
            self._user_ids_by_national_id[stored.national_id] = stored.id

        logger.debug("Inserted user %s", user.id)
        return user.model_copy()

    def insert_book(self, book: Book) -> Book:
        """
        Add a new book to the catalog.

        Raises:
            DuplicateKeyError: If the id is already taken
        """
        with self._books.lock:
            if book.id in self._books.records:
                raise DuplicateKeyError(f"Book {book.id} already exists")
            self._books.add(book.id, book.model_copy())

        logger.debug("Inserted book %s (%s)", book.id, book.title)
        return book.model_copy()

    def insert_loan(self, loan: Loan) -> Loan:
        """
        Add a new loan record.

        Raises:
            BookNotFoundError: If the loan references a book that does not exist
            DuplicateKeyError: If the id is already taken
        """
        # Books are never removed, so the reference stays valid once checked.
        with self._books.lock:
            book_exists = loan.book_id in self._books.records
        if not book_exists:
            raise BookNotFoundError(f"Book {loan.book_id} not found")

        with self._loans.lock:
            if loan.id in self._loans.records:
                raise DuplicateKeyError(f"Loan {loan.id} already exists")
            self._loans.add(loan.id, loan.model_copy())

        logger.debug("Inserted loan %s for book %s", loan.id, loan.book_id)
        return loan.model_copy()

    # === Scoped mutations ===

    def with_book_mut(self, book_id: str, fn: Callable[[Book | None], ResultType]) -> ResultType:
        """
        Apply ``fn`` to a book under that book's exclusive lock.

        ``fn`` receives a working copy (or ``None`` if the book does not exist)
        and may modify it. The copy replaces the stored book only if ``fn``
        returns normally and the result still validates.

        Returns:
            Whatever ``fn`` returns
        """
        return self._books.mutate(book_id, fn)

    def with_loan_mut(self, loan_id: str, fn: Callable[[Loan | None], ResultType]) -> ResultType:
        """Apply ``fn`` to a loan under that loan's exclusive lock (see with_book_mut)."""
        return self._loans.mutate(loan_id, fn)

    def with_user_mut(self, user_id: str, fn: Callable[[User | None], ResultType]) -> ResultType:
        """Apply ``fn`` to a user under that user's exclusive lock (see with_book_mut)."""
        return self._users.mutate(user_id, fn, check=_national_id_unchanged)

    # === Snapshots ===

    def users(self) -> list[User]:
        return self._users.snapshot()

    def books(self) -> list[Book]:
        """All books, in the order they were added."""
        return self._books.snapshot()

    def loans(self) -> list[Loan]:
        return self._loans.snapshot()


def _national_id_unchanged(current: User, updated: User) -> None:
    if current.national_id != updated.national_id:
        raise ValueError("National IDs cannot be changed")
