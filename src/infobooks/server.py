"""InfoBooks MCP Server - FastMCP Implementation

Exposes the library loan service to MCP clients.

Features exposed:
- Resources: Book catalog, a user's loans, dashboard statistics
- Tools: Registration, login, renting, returning, catalog and user administration

Nothing is built at import time: ``main`` reads the settings, builds one
Library and hands it to ``create_server``.
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .config import ServiceConfig, get_config
from .library import Library
from .resources import build_resources
from .tools import build_tools

logger = logging.getLogger(__name__)


def configure_logging(config: ServiceConfig) -> None:
    """Send logs to stderr; stdout carries the MCP protocol on stdio."""
    logging.basicConfig(
        level=logging.DEBUG if config.debug else config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not config.debug:
        logging.getLogger("fastmcp").setLevel(logging.WARNING)


def create_server(library: Library, config: ServiceConfig) -> FastMCP:
    """Build a FastMCP server whose tools and resources all use ``library``."""
    mcp = FastMCP(
        name=config.server_name,
        version=config.server_version,
        instructions=(
            "InfoBooks library loan service. Log in to get your user id, browse the "
            "catalog through the library://books resources, rent and return books with "
            "the rent_book and return_book tools, and check your loans at "
            "library://loans/{user_id}. Overdue loans must be returned at the front desk."
        ),
    )

    resources = build_resources(library)
    for resource in resources:
        uri = resource.get("uri_template", resource.get("uri"))
        logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
        try:
            mcp.resource(
                uri,
                name=resource["name"],
                description=resource["description"],
                mime_type=resource["mime_type"],
            )(resource["handler"])
        except Exception:
            logger.exception("Failed to register resource %s", resource["name"])
            raise

    logger.info("Registered %d resources", len(resources))

    tools = build_tools(library)
    for tool in tools:
        logger.debug("Registering tool: %s", tool["name"])
        try:
            mcp.tool(name=tool["name"], description=tool["description"])(tool["handler"])
        except Exception:
            logger.exception("Failed to register tool %s", tool["name"])
            raise

    logger.info("Registered %d tools", len(tools))
    return mcp


def run_server(mcp: FastMCP, config: ServiceConfig) -> None:
    """Run the server on the configured transport until it is stopped."""

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, initiating shutdown...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if config.transport == "stdio":
        logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting %s v%s on http://%s:%d",
            config.server_name,
            config.server_version,
            config.http_host,
            config.http_port,
        )
        mcp.run(transport="streamable-http", host=config.http_host, port=config.http_port)


def main() -> None:
    """Main entry point for the MCP server."""
    config = get_config()
    configure_logging(config)

    try:
        logger.info("=" * 60)
        logger.info("InfoBooks MCP Server")
        logger.info("Version: %s", config.server_version)
        logger.info("Transport: %s", config.transport)
        logger.info("Loan period: %d days", config.loan_period_days)
        logger.info("=" * 60)

        library = Library.from_config(config)
        run_server(create_server(library, config), config)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to start MCP server")
        sys.exit(1)


if __name__ == "__main__":
    main()
