"""Response formatting and audit logging shared by every InfoBooks tool."""

import logging
from typing import Any

from pydantic import ValidationError

from ..errors import LibraryError

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("infobooks.audit")

_ERROR_TYPES = {
    "not_found": "Not found",
    "conflict": "Conflict",
    "policy": "Rejected by policy",
    "unauthorized": "Unauthorized",
    "invalid_input": "Invalid parameters",
}


def format_error_response(
    error_type: str, details: str, code: str = "internal_error", category: str = "error"
) -> dict[str, Any]:
    """Format error responses consistently across all tools."""
    return {
        "isError": True,
        "content": [{"type": "text", "text": f"{error_type}: {details}"}],
        "error": {"code": code, "category": category},
    }


def format_library_error(error: LibraryError) -> dict[str, Any]:
    """Turn an expected business failure into an error response."""
    return format_error_response(
        _ERROR_TYPES.get(error.category, "Operation failed"),
        str(error),
        code=error.code,
        category=error.category,
    )


def format_validation_error(error: ValidationError) -> dict[str, Any]:
    """Turn rejected tool arguments into an ``invalid_input`` response."""
    problems = "; ".join(
        f"{'.'.join(str(part) for part in issue['loc']) or 'arguments'}: {issue['msg']}"
        for issue in error.errors()
    )
    return format_error_response(
        "Invalid parameters", problems, code="invalid_input", category="invalid_input"
    )


def format_success_response(message: str, data: dict[str, Any]) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": message}], "data": data}


def log_operation(operation: str, **kwargs) -> None:
    """Log operation details for audit trail."""
    audit_logger.info(
        "Operation: %s | Details: %s", operation, " | ".join(f"{k}={v}" for k, v in kwargs.items())
    )
