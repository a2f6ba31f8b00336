"""Small helpers shared by the store, the services and the transport shell."""

import uuid
from datetime import UTC, date, datetime

from .errors import InvalidInputError

ASCII_DIGITS = frozenset("0123456789")


def normalize_national_id(national_id: str) -> str:
    """Keep only the ASCII digits of a national ID ("458.632.582-07" -> "45863258207")."""
    return "".join(ch for ch in national_id if ch in ASCII_DIGITS)


def utc_today() -> date:
    """Current calendar day in UTC, the single canonical day for due dates."""
    return datetime.now(UTC).date()


def new_identifier() -> str:
    return str(uuid.uuid4())


def parse_identifier(
    value: str, error_cls: type[InvalidInputError] = InvalidInputError
) -> str:
    """
    Validate and canonicalize a UUID identifier.

    Args:
        value: Raw identifier supplied by a caller
        error_cls: Error raised when the value is not a UUID

    Returns:
        The identifier in canonical lowercase hyphenated form

    Raises:
        InvalidInputError: (or ``error_cls``) if the value is malformed
    """
    try:
        return str(uuid.UUID(str(value).strip()))
    except ValueError as e:
        raise error_cls(f"Malformed identifier: {value!r}") from e


def canonical_identifier(value: str) -> str | None:
    """Canonical form of a UUID identifier, or None if ``value`` is not one."""
    try:
        return parse_identifier(value)
    except InvalidInputError:
        return None
