"""MCP server exposing the query_dual_models tool over stdio."""

from __future__ import annotations

import asyncio
import logging
import sys

import httpx
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from dualmodel import __version__
from dualmodel.client import BackendClient
from dualmodel.config import Settings, configure_logging, load_settings
from dualmodel.dispatcher import DualDispatcher
from dualmodel.errors import ConfigurationError, DualModelError
from dualmodel.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolCallFailed(DualModelError):
    """Raised inside the call_tool handler so the SDK marks the result isError."""

    code = "TOOL_CALL_FAILED"


def build_registry(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> ToolRegistry:
    """Wire client, dispatcher and registry for one process."""
    client = BackendClient(settings, transport=transport)
    return ToolRegistry(settings, DualDispatcher(settings, client))


def create_server(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> Server:
    """Create the low-level MCP server bound to a ToolRegistry."""
    registry = build_registry(settings, transport)
    server = Server(settings.SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=descriptor.name,
                description=descriptor.description,
                inputSchema=descriptor.input_schema,
            )
            for descriptor in registry.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict | None) -> list[types.TextContent]:
        outcome = await registry.call_tool(name, arguments)
        if outcome.is_error:
            raise ToolCallFailed(outcome.text)
        return [types.TextContent(type="text", text=outcome.text)]

    return server


async def serve(settings: Settings) -> None:
    """Run the MCP server on stdio until the client closes the channel."""
    server = create_server(settings)

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Server running, waiting for MCP requests on stdio")
        logger.info(f"Models: {' & '.join(b.model for b in settings.backends)}")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main() -> None:
    """Entry point: check configuration, then serve until stdin closes."""
    configure_logging()
    logger.info("Dual Model MCP server starting")

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

    configure_logging(settings.LOG_LEVEL)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
