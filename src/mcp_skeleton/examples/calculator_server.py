"""Example: simple calculator MCP server built from annotated functions.

Decorate plain functions with @mcp_tool, collect them in a
FunctionToolExecutor and hand it to McpServer as both the setup hook and
the executor.

You can test it with Claude Desktop by adding this to your config:

{
  "mcpServers": {
    "calculator": {
      "command": "mcp-calculator"
    }
  }
}
"""

import argparse
import sys
from typing import List, Optional

from mcp_skeleton import FunctionToolExecutor, McpServer, ServerIdentity, describe_tools, mcp_tool

IDENTITY = ServerIdentity(name="calculator", version="1.0.0")


@mcp_tool()
def add(a: float, b: float) -> float:
    """Add two numbers together.

    Args:
        a: First number
        b: Second number

    Returns:
        Sum of a and b
    """
    return a + b


@mcp_tool()
def subtract(a: float, b: float) -> float:
    """Subtract b from a.

    Args:
        a: Number to subtract from
        b: Number to subtract

    Returns:
        Result of a - b
    """
    return a - b


@mcp_tool()
def multiply(a: float, b: float) -> float:
    """Multiply two numbers.

    Args:
        a: First number
        b: Second number

    Returns:
        Product of a and b
    """
    return a * b


@mcp_tool()
def divide(a: float, b: float) -> float:
    """Divide a by b.

    Args:
        a: Dividend
        b: Divisor (must not be zero)

    Returns:
        Result of a / b
    """
    if b == 0:
        raise ValueError("Cannot divide by zero")
    return a / b


@mcp_tool(name="calculate-average")
def average(numbers: List[float]) -> float:
    """Calculate the average of a list of numbers.

    Args:
        numbers: List of numbers to average

    Returns:
        Average value
    """
    if not numbers:
        raise ValueError("Cannot calculate average of empty list")
    return sum(numbers) / len(numbers)


def create_server(**kwargs) -> McpServer:
    tools = FunctionToolExecutor.from_objects([add, subtract, multiply, divide, average])
    return McpServer(IDENTITY, tools.register_all, tools, **kwargs)


def main(args: Optional[List[str]] = None) -> None:
    """Entry point for the calculator server."""
    parser = argparse.ArgumentParser(prog=IDENTITY.name, description=f"{IDENTITY.name} - MCP server")
    parser.add_argument("--describe", action="store_true", help="Show available tools and their parameters")
    parsed_args = parser.parse_args(args)

    server = create_server()
    if parsed_args.describe:
        describe_tools(server)
        sys.exit(0)

    print(f"Starting {IDENTITY.name} MCP server...", file=sys.stderr)
    server.serve()


if __name__ == "__main__":
    main()
