#!/usr/bin/env python3
"""
MCP stdio Server - Hexagonal Architecture

Exposes the download, list and downloaded handlers as MCP tools.

Run with: ann-downloader-mcp [--dir DIR]

Configuration:
- ANN_DOWNLOADER_DIR: Download directory (default: ~/Dropbox/Personal/年报, else cwd)
- ANN_DOWNLOADER_CATEGORY: Default category selector (default: annual reports)
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .adapters.mcp import TOOL_SCHEMAS, MCPHandlers
from .config import configure_logging, get_default_dir
from .container import Container
from .formatters import format_download, format_list_announcements, format_list_downloaded

logger = logging.getLogger(__name__)

# MCP Server instance
mcp_server = Server("ann-downloader")

# Set by main() before the server starts
handlers: MCPHandlers | None = None

FORMATTERS = {
    "download_announcements": format_download,
    "list_announcements": format_list_announcements,
    "list_downloaded": format_list_downloaded,
}


@mcp_server.list_tools()  # type: ignore[misc,no-untyped-call]
async def list_tools() -> list[Tool]:
    """List available MCP tools"""
    return [Tool(**schema) for schema in TOOL_SCHEMAS.values()]


@mcp_server.call_tool()  # type: ignore[misc,no-untyped-call]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls"""
    logger.info(f"call_tool: {name} args={arguments}")

    try:
        result = await _dispatch_tool(name, arguments)
    except Exception as e:
        logger.error(f"call_tool: {name} FAILED: {e}")
        raise

    formatter = FORMATTERS.get(name)
    if formatter:
        formatted_text = formatter(result)
    else:
        formatted_text = json.dumps(result, indent=2, ensure_ascii=False)

    logger.info(f"call_tool: {name} returning {len(formatted_text)} chars")
    return [TextContent(type="text", text=formatted_text)]


async def _dispatch_tool(name: str, arguments: dict[str, Any]) -> Any:
    """Dispatch tool call to appropriate handler"""
    if handlers is None:
        raise RuntimeError("Server handlers are not initialized")

    if name == "download_announcements":
        return await handlers.download_announcements(
            symbols=arguments["symbols"],
            years=arguments.get("years"),
            recent_years=arguments.get("recent_years"),
            all_years=arguments.get("all_years", False),
            match=arguments.get("match"),
            exclude=arguments.get("exclude"),
            category=arguments.get("category"),
            no_skip=arguments.get("no_skip", False)
        )

    elif name == "list_announcements":
        return await handlers.list_announcements(
            symbols=arguments["symbols"],
            years=arguments.get("years"),
            recent_years=arguments.get("recent_years"),
            all_years=arguments.get("all_years", False),
            match=arguments.get("match"),
            exclude=arguments.get("exclude"),
            category=arguments.get("category")
        )

    elif name == "list_downloaded":
        return await handlers.list_downloaded(code=arguments.get("code"))

    else:
        raise ValueError(f"Unknown tool: {name}")


async def serve(container: Container) -> None:
    """Run the MCP server on stdio until the client disconnects"""
    global handlers
    handlers = MCPHandlers(container)

    async with stdio_server() as (read_stream, write_stream):
        await mcp_server.run(
            read_stream, write_stream, mcp_server.create_initialization_options()
        )


def main():
    """Main entry point for the MCP server."""
    parser = argparse.ArgumentParser(
        description="ann-downloader MCP server (stdio)"
    )
    parser.add_argument(
        "--dir",
        default=None,
        help="Download directory (default: $ANN_DOWNLOADER_DIR, ~/Dropbox/Personal/年报, or cwd)"
    )
    args = parser.parse_args()

    # stdout carries the MCP protocol, log to stderr only
    configure_logging()

    base_dir = Path(args.dir) if args.dir else get_default_dir()
    if not base_dir.is_dir():
        logger.error(f"{base_dir} not exists")
        sys.exit(1)

    logger.info(f"Download directory: {base_dir}")
    container = Container(base_dir=base_dir)
    try:
        asyncio.run(serve(container))
    finally:
        container.close()


if __name__ == "__main__":
    main()
