"""Decorators for exposing plain functions as MCP tools."""

import inspect
import json
import logging
from typing import Any, Callable, Dict, Iterable, Optional

from .schema import schema_from_signature
from .tools import ToolExecutionError


def mcp_tool(
    *,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Callable[[Callable], Callable]:
    """Decorator to mark a function as an MCP tool.

    Args:
        name: Optional custom name for the tool. If not provided, uses the
            function name with underscores replaced by dashes.
        description: Optional description override. If not provided, uses the
            first line of the function's docstring.

    Example:
        @mcp_tool(name="calculate-average")
        def average(numbers: List[float]) -> float:
            '''Calculate the average of a list of numbers.'''
            ...
    """
    def decorator(func: Callable) -> Callable:
        func._mcp_tool = True  # type: ignore
        func._mcp_tool_name = name or func.__name__.replace("_", "-")  # type: ignore
        func._mcp_tool_description = description  # type: ignore
        return func

    return decorator


def tool_description(func: Callable) -> str:
    """Description from the decorator, else the first docstring line."""
    description = getattr(func, "_mcp_tool_description", None)
    if not description and func.__doc__:
        description = inspect.cleandoc(func.__doc__).split("\n")[0]
    return description or f"Tool: {getattr(func, '_mcp_tool_name', func.__name__)}"


def _to_text(result: Any) -> str:
    if isinstance(result, str):
        return result
    if isinstance(result, (dict, list)):
        return json.dumps(result, indent=2, default=str)
    return str(result)


class FunctionToolExecutor:
    """Tool executor backed by ``@mcp_tool`` functions.

    Collect decorated functions, register their schemas with a server from
    its ``setup_tools`` hook, and pass the instance itself as the server's
    executor.

    Example:
        tools = FunctionToolExecutor.from_objects([add, subtract])
        server = McpServer(identity, tools.register_all, tools)
    """

    def __init__(self) -> None:
        self._functions: Dict[str, Callable[..., Any]] = {}

    @classmethod
    def from_objects(cls, objects: Iterable[Any]) -> "FunctionToolExecutor":
        """Collect every object marked with ``@mcp_tool``."""
        executor = cls()
        for obj in objects:
            if getattr(obj, "_mcp_tool", False):
                executor.add(obj)
        return executor

    def add(self, func: Callable[..., Any]) -> None:
        tool_name = getattr(func, "_mcp_tool_name", func.__name__)
        self._functions[tool_name] = func
        logging.debug(f"Discovered MCP tool: {tool_name}")

    def register_all(self, server: Any) -> None:
        """Register every collected function with ``server``."""
        for tool_name, func in self._functions.items():
            server.register_tool(tool_name, tool_description(func), schema_from_signature(func))

    def __call__(self, name: str, arguments: Dict[str, Any]) -> str:
        if name not in self._functions:
            raise ToolExecutionError(f"Unknown tool: {name}")

        func = self._functions[name]
        logging.debug(f"Calling tool: {name} with arguments: {arguments}")
        try:
            inspect.signature(func).bind(**arguments)
        except TypeError as e:
            raise ToolExecutionError(f"Invalid arguments for {name}: {e}") from e
        return _to_text(func(**arguments))
