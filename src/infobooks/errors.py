"""
Error taxonomy for the InfoBooks loan service.

Every failure the core can report is a subclass of ``LibraryError``. The
classes are grouped by category so callers can branch on the broad kind of
failure (``NotFoundError``, ``ConflictError``...) or on the exact case
(``OverdueError``). Each class also carries a stable ``code`` string that the
transport shell puts in its error responses.

None of these errors is fatal to the process: they describe outcomes the
caller is expected to report back to the user.
"""


class LibraryError(Exception):
    """Base exception for loan service operations."""

    code = "library_error"
    category = "error"


class NotFoundError(LibraryError):
    """Raised when an entity is not found."""

    code = "not_found"
    category = "not_found"


class BookNotFoundError(NotFoundError):
    code = "book_not_found"


class LoanNotFoundError(NotFoundError):
    code = "loan_not_found"


class UserNotFoundError(NotFoundError):
    code = "user_not_found"


class ConflictError(LibraryError):
    """Raised when the current state of a record forbids the operation."""

    code = "conflict"
    category = "conflict"


class DuplicateKeyError(ConflictError):
    """Raised when attempting to create a duplicate entity."""

    code = "cpf_exists"


class NoCopiesAvailableError(ConflictError):
    code = "no_available"


class AlreadyReturnedError(ConflictError):
    code = "already_returned"


class PolicyRejection(LibraryError):
    """Raised when a business rule refuses an otherwise valid request."""

    code = "policy_rejection"
    category = "policy"


class OverdueError(PolicyRejection):
    """
    Raised when an overdue loan is returned through self-service.

    Overdue loans must be handled by library staff, so the caller should show
    the borrower where to go instead of retrying.
    """

    code = "overdue"


class UnauthorizedError(LibraryError):
    code = "unauthorized"
    category = "unauthorized"


class InvalidCredentialsError(UnauthorizedError):
    code = "invalid_credentials"


class InvalidInputError(LibraryError):
    """Raised when an argument is malformed (bad identifier, blank field)."""

    code = "invalid_input"
    category = "invalid_input"


class InvalidBookReferenceError(InvalidInputError):
    code = "invalid_book"


class InvalidLoanReferenceError(InvalidInputError):
    code = "invalid_loan"
