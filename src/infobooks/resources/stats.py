"""Statistics Resources - Admin Dashboard

Resources:
- library://stats/dashboard - Books, active loans, overdue loans and active users
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError

from ..library import Library

logger = logging.getLogger(__name__)


def build_stats_resources(library: Library) -> list[dict[str, Any]]:
    """Create the statistics resources bound to ``library``."""

    async def dashboard_handler() -> dict[str, Any]:
        try:
            logger.debug("MCP Resource Request - stats/dashboard")
            return library.dashboard_stats().model_dump(mode="json")
        except Exception as e:
            logger.exception("Error in stats/dashboard resource")
            raise ResourceError(f"Failed to compute dashboard statistics: {e!s}") from e

    return [
        {
            "uri": "library://stats/dashboard",
            "name": "Dashboard Statistics",
            "description": "Total books, active loans, overdue loans and active users",
            "mime_type": "application/json",
            "handler": dashboard_handler,
        }
    ]
