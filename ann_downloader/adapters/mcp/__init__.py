"""
MCP Adapters

MCP protocol adapters that expose the core functionality as MCP tools.
"""
from .tool_definitions import TOOL_SCHEMAS
from .handlers import MCPHandlers, build_filter_config

__all__ = ["TOOL_SCHEMAS", "MCPHandlers", "build_filter_config"]
