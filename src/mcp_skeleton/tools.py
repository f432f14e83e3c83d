"""Tool registry and the tool executor contract."""

import logging
from typing import Any, Callable, Dict, List, Optional

from mcp import types

# Signature of the capability supplied by the embedding application:
# given a tool name and its arguments, return the text result.
ToolExecutor = Callable[[str, Dict[str, Any]], str]


class ToolExecutionError(Exception):
    """Raised by a tool executor when a tool call fails.

    The message is returned to the client verbatim as the error message of
    a -32000 response.
    """

    pass


class ToolRegistry:
    """Ordered mapping from tool name to its descriptor.

    Registration order is preserved. Registering a name again replaces the
    descriptor in place.
    """

    def __init__(self) -> None:
        self._tools: Dict[str, types.Tool] = {}

    def register(self, name: str, description: str, input_schema: Dict[str, Any]) -> types.Tool:
        """Add or replace a tool.

        Args:
            name: Unique tool name
            description: Human-readable description
            input_schema: JSON-Schema-like object describing the arguments

        Returns:
            The stored descriptor
        """
        if name in self._tools:
            logging.debug(f"Overwriting registered tool: {name}")
        tool = types.Tool(name=name, description=description, inputSchema=input_schema)
        self._tools[name] = tool
        return tool

    def get(self, name: str) -> Optional[types.Tool]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def list_tools(self) -> List[Dict[str, Any]]:
        """Return all descriptors as JSON objects, in registration order."""
        return [tool.model_dump(by_alias=True, exclude_none=True, mode="json") for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
