"""MCP Skeleton - a minimal framework for MCP servers over stdio.

Supply a server identity, a hook that registers tools and a callable that
executes them; the framework handles JSON-RPC framing, dispatch and error
reporting.
"""

from .codec import JsonRpcRequest, ParseError, decode, encode
from .config import ServerIdentity
from .decorators import FunctionToolExecutor, mcp_tool
from .schema import create_array_property, create_enum_property, create_input_schema, create_property
from .server import McpServer, describe_tools
from .tools import ToolExecutionError, ToolRegistry

__all__ = [
    "FunctionToolExecutor",
    "JsonRpcRequest",
    "McpServer",
    "ParseError",
    "ServerIdentity",
    "ToolExecutionError",
    "ToolRegistry",
    "create_array_property",
    "create_enum_property",
    "create_input_schema",
    "create_property",
    "decode",
    "describe_tools",
    "encode",
    "mcp_tool",
]
