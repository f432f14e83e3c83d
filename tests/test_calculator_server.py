"""Tests for the calculator server built from annotated functions."""

import io
import json

import pytest

from mcp_skeleton.examples.calculator_server import add, average, create_server, divide, multiply, subtract


class TestCalculatorFunctions:
    """The plain tool functions."""

    def test_add_operation(self):
        """Test the add operation."""
        assert add(5.0, 3.0) == 8.0
        assert add(-5.0, 3.0) == -2.0
        assert abs(add(0.1, 0.2) - 0.3) < 0.0001  # Handle floating point precision

    def test_subtract_operation(self):
        """Test the subtract operation."""
        assert subtract(10.0, 4.0) == 6.0
        assert subtract(3.0, 5.0) == -2.0

    def test_multiply_operation(self):
        """Test the multiply operation."""
        assert multiply(4.0, 3.0) == 12.0
        assert multiply(0.0, 100.0) == 0.0

    def test_divide_operation(self):
        """Test the divide operation."""
        assert divide(7.0, 2.0) == 3.5
        with pytest.raises(ValueError, match="Cannot divide by zero"):
            divide(10.0, 0.0)

    def test_average_operation(self):
        """Test the average operation."""
        assert average([1.0, 2.0, 3.0, 4.0, 5.0]) == 3.0
        with pytest.raises(ValueError, match="Cannot calculate average of empty list"):
            average([])


class TestCalculatorServer:
    """The calculator behind the stdio protocol."""

    @pytest.fixture
    def server(self):
        return create_server(stdin=io.StringIO(), stdout=io.StringIO(), debug=False)

    def call(self, server, name, arguments, request_id=1):
        return server.handle_message(json.dumps({
            "jsonrpc": "2.0",
            "id": request_id,
            "method": "tools/call",
            "params": {"name": name, "arguments": arguments},
        }))

    def test_tool_discovery(self, server):
        """Test that all decorated tools are discovered in order."""
        assert server.tools.names() == ["add", "subtract", "multiply", "divide", "calculate-average"]

    def test_list_tools_schema(self, server):
        """Test the generated tool schemas."""
        response = server.handle_message('{"jsonrpc": "2.0", "id": 1, "method": "tools/list"}')
        add_tool = response["result"]["tools"][0]

        assert add_tool["description"] == "Add two numbers together."
        schema = add_tool["inputSchema"]
        assert schema["type"] == "object"
        assert schema["properties"]["a"] == {"type": "number", "description": "First number"}
        assert schema["required"] == ["a", "b"]

        average_tool = response["result"]["tools"][4]
        assert average_tool["inputSchema"]["properties"]["numbers"]["items"] == {"type": "number"}

    def test_call_tool(self, server):
        """Test calling a tool through the protocol."""
        response = self.call(server, "add", {"a": 5.0, "b": 3.0})
        assert response["result"]["content"] == [{"type": "text", "text": "8.0"}]

    def test_call_tool_error_message_is_raw(self, server):
        """Test that a tool error message is passed through unchanged."""
        response = self.call(server, "divide", {"a": 10.0, "b": 0.0}, request_id="div")
        assert response == {
            "jsonrpc": "2.0",
            "id": "div",
            "error": {"code": -32000, "message": "Cannot divide by zero"},
        }

    def test_missing_parameter(self, server):
        """Test the error for a missing parameter."""
        response = self.call(server, "add", {"a": 5.0})
        assert response["error"]["code"] == -32000
        assert response["error"]["message"].startswith("Invalid arguments for add")

    def test_server_initialization(self, server):
        """Test the server identity and tool count."""
        assert server.identity.name == "calculator"
        assert server.identity.version == "1.0.0"
        assert len(server.tools) == 5
