"""
Account operations for the InfoBooks loan service.

Registration, login by national ID and secret, and soft deactivation. There
is no session or token layer: a successful login hands back the user's
profile and the caller keeps the user id for later rents and returns.
"""

import logging

from pydantic import ValidationError

from ..credentials import hash_secret, verify_secret
from ..errors import InvalidCredentialsError, InvalidInputError, UserNotFoundError
from ..models.user import User, UserProfile
from ..store.catalog import CatalogStore
from ..utils import canonical_identifier, normalize_national_id

logger = logging.getLogger(__name__)


class AccountService:
    """Registers and authenticates users against a CatalogStore."""

    def __init__(self, store: CatalogStore):
        self.store = store

    def register_user(self, name: str, national_id: str, secret: str) -> str:
        """
        Register a new, active, non-admin user.

        Args:
            name: Display name
            national_id: National ID, with or without formatting
            secret: Credential the user will log in with

        Returns:
            The new user's id

        Raises:
            InvalidInputError: If the name or secret is blank, or the national
                ID contains no digits
            DuplicateKeyError: If the national ID is already registered
        """
        normalized = normalize_national_id(national_id)
        if not normalized:
            raise InvalidInputError("National ID must contain digits")
        if not name.strip():
            raise InvalidInputError("Name cannot be blank")
        if not secret.strip():
            raise InvalidInputError("Secret cannot be blank")

        try:
            user = User(name=name, national_id=normalized, secret_hash=hash_secret(secret))
        except ValidationError as e:
            raise InvalidInputError(f"Invalid user: {e.error_count()} field(s) rejected") from e

        user = self.store.insert_user(user)
        logger.info("Registered user %s", user.id)
        return user.id

    def authenticate(self, national_id: str, secret: str) -> UserProfile:
        """
        Check a national ID and secret.

        Unknown users, wrong secrets and deactivated users all fail the same
        way so the response does not reveal which national IDs exist.

        Raises:
            InvalidCredentialsError: If the credentials are not accepted
        """
        user = self.store.find_user(national_id)
        if user is None or not user.active or not verify_secret(secret, user.secret_hash):
            raise InvalidCredentialsError("Invalid national ID or secret")
        return user.to_profile()

    def get_user(self, user_id: str) -> UserProfile:
        """
        Look up a user by internal id.

        Raises:
            UserNotFoundError: If no user has this id
        """
        canonical = canonical_identifier(user_id)
        user = self.store.get_user(canonical) if canonical is not None else None
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user.to_profile()

    def set_user_active(self, national_id: str, active: bool) -> UserProfile:
        """
        Deactivate or reactivate a user. Users are never deleted.

        Raises:
            UserNotFoundError: If no user has this national ID
        """
        user = self.store.find_user(national_id)
        if user is None:
            raise UserNotFoundError(f"No user with national ID {national_id}")

        def apply(record: User | None) -> UserProfile:
            if record is None:
                raise UserNotFoundError(f"User {user.id} not found")
            record.active = active
            return record.to_profile()

        profile = self.store.with_user_mut(user.id, apply)
        logger.info("User %s active=%s", user.id, active)
        return profile
