"""Pytest configuration for the test suite."""

import io
import sys
import os

import pytest

# Add the src directory to the Python path so tests can import from it
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src'))

from mcp_skeleton import McpServer, ServerIdentity, ToolExecutionError, create_input_schema, create_property  # noqa: E402


def echo_setup(server):
    server.register_tool(
        "echo",
        "Echo the given text",
        create_input_schema({"text": create_property("string", "Text to echo")}, ["text"]),
    )
    server.register_tool("noop", "Do nothing", create_input_schema())


def echo_execute(name, arguments):
    if name == "echo":
        return arguments.get("text", "")
    if name == "noop":
        return ""
    raise ToolExecutionError(f"Unknown tool: {name}")


@pytest.fixture
def identity():
    return ServerIdentity(name="test-server", version="9.9.9")


@pytest.fixture
def make_server(identity):
    """Build an echo server reading ``input_text`` and writing to a buffer."""
    def _make(input_text="", **kwargs):
        kwargs.setdefault("debug", False)
        return McpServer(
            identity,
            echo_setup,
            echo_execute,
            stdin=io.StringIO(input_text),
            stdout=io.StringIO(),
            **kwargs,
        )
    return _make
