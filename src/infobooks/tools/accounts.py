"""Account Tools - Registration, Login and Deactivation

Tools:
- register_user: Create a new patron account
- login: Check a national ID and secret and return the user's profile
- set_user_active: Admin soft-deactivation and reactivation
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..errors import LibraryError
from ..library import Library
from .responses import (
    format_error_response,
    format_library_error,
    format_success_response,
    format_validation_error,
    log_operation,
)

logger = logging.getLogger(__name__)


class RegisterUserInput(BaseModel):
    """Input schema for user registration."""

    name: str = Field(..., description="Full name", min_length=1, max_length=200)

    national_id: str = Field(
        ...,
        description="National ID (CPF), formatted or digits only",
        min_length=1,
        max_length=32,
        examples=["458.632.582-07", "45863258207"],
    )

    secret: str = Field(..., description="Password for later logins", min_length=1)


class LoginInput(BaseModel):
    """Input schema for login."""

    national_id: str = Field(..., description="National ID (CPF)", min_length=1)
    secret: str = Field(..., description="Password", min_length=1)


class SetUserActiveInput(BaseModel):
    """Input schema for activating or deactivating a user."""

    acting_user_id: str = Field(..., description="Id of the administrator making the change")
    national_id: str = Field(..., description="National ID of the user to change", min_length=1)
    active: bool = Field(..., description="False to deactivate, True to reactivate")


def build_account_tools(library: Library) -> list[dict[str, Any]]:
    """Create the account tools bound to ``library``."""

    async def register_user_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Register a new active, non-admin user."""
        try:
            try:
                params = RegisterUserInput.model_validate(arguments)
            except ValidationError as e:
                logger.warning("Invalid registration parameters: %s", e)
                return format_validation_error(e)

            try:
                user_id = library.register_user(params.name, params.national_id, params.secret)
            except LibraryError as e:
                logger.info("Registration failed - %s: %s", e.code, e)
                log_operation("register_user_failed", error_code=e.code)
                return format_library_error(e)

            log_operation("register_user_success", user_id=user_id)
            return format_success_response(
                f"Registered '{params.name}'. You can now log in.", {"user_id": user_id}
            )

        except Exception as e:
            logger.exception("Unexpected error in register_user tool")
            return format_error_response("Unexpected error", str(e))

    async def login_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Authenticate a user. The secret is never logged."""
        try:
            try:
                params = LoginInput.model_validate(arguments)
            except ValidationError as e:
                logger.warning("Invalid login parameters: %s", e)
                return format_validation_error(e)

            try:
                profile = library.authenticate(params.national_id, params.secret)
            except LibraryError as e:
                logger.info("Login failed - %s", e.code)
                log_operation("login_failed", error_code=e.code)
                return format_library_error(e)

            log_operation("login_success", user_id=profile.id, is_admin=profile.is_admin)
            return format_success_response(
                f"Welcome, {profile.name}.", {"user": profile.model_dump(mode="json")}
            )

        except Exception as e:
            logger.exception("Unexpected error in login tool")
            return format_error_response("Unexpected error", str(e))

    async def set_user_active_handler(arguments: dict[str, Any]) -> dict[str, Any]:
        """Deactivate or reactivate a user on behalf of an administrator."""
        try:
            try:
                params = SetUserActiveInput.model_validate(arguments)
            except ValidationError as e:
                logger.warning("Invalid set_user_active parameters: %s", e)
                return format_validation_error(e)

            try:
                profile = library.set_user_active(
                    params.acting_user_id, params.national_id, params.active
                )
            except LibraryError as e:
                logger.info("set_user_active failed - %s: %s", e.code, e)
                log_operation(
                    "set_user_active_failed",
                    acting_user_id=params.acting_user_id,
                    error_code=e.code,
                )
                return format_library_error(e)

            log_operation(
                "set_user_active_success",
                acting_user_id=params.acting_user_id,
                user_id=profile.id,
                active=profile.active,
            )
            state = "reactivated" if profile.active else "deactivated"
            return format_success_response(
                f"User '{profile.name}' {state}.", {"user": profile.model_dump(mode="json")}
            )

        except Exception as e:
            logger.exception("Unexpected error in set_user_active tool")
            return format_error_response("Unexpected error", str(e))

    return [
        {
            "name": "register_user",
            "description": (
                "Register a new library user with a name, a national ID (CPF) and a password. "
                "Fails if the national ID is already registered."
            ),
            "inputSchema": RegisterUserInput.model_json_schema(),
            "handler": register_user_handler,
        },
        {
            "name": "login",
            "description": (
                "Log in with a national ID and password. Returns the user's id, which "
                "rent_book and return_book expect as user_id."
            ),
            "inputSchema": LoginInput.model_json_schema(),
            "handler": login_handler,
        },
        {
            "name": "set_user_active",
            "description": (
                "Deactivate or reactivate a user (administrators only). Deactivated users "
                "cannot log in or rent books; their loans are kept."
            ),
            "inputSchema": SetUserActiveInput.model_json_schema(),
            "handler": set_user_active_handler,
        },
    ]
