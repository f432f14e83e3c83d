"""Stdio session loop for MCP servers.

Example:
    def setup_tools(server):
        server.register_tool(
            "echo",
            "Echo the given text",
            create_input_schema({"text": create_property("string", "Text to echo")}, ["text"]),
        )

    def execute_tool(name, arguments):
        if name == "echo":
            return arguments.get("text", "")
        raise ToolExecutionError(f"Unknown tool: {name}")

    McpServer(ServerIdentity("echo-server", "1.0.0"), setup_tools, execute_tool).serve()
"""

import json
import logging
import sys
from datetime import datetime
from typing import IO, Any, Callable, Dict, Optional

from .codec import INTERNAL_ERROR, ParseError, Response, decode, encode, make_error
from .config import LOG_FORMAT, ServerIdentity, debug_enabled
from .dispatcher import ListProvider, MethodDispatcher
from .framing import LineFramer, iter_messages
from .tools import ToolExecutor, ToolRegistry

SetupHook = Callable[["McpServer"], None]


class McpServer:
    """A single stdio MCP session.

    Args:
        identity: Name and version reported to clients
        setup_tools: Called once during construction to register tools
        execute_tool: Runs a tool call and returns its text result
        stdin: Input stream. Defaults to ``sys.stdin``
        stdout: Output stream for protocol messages. Defaults to ``sys.stdout``
        debug: Log every request and response to stderr. Defaults to the
            ``MCP_DEBUG`` environment variable
        list_resources: Optional provider for ``resources/list``
        list_prompts: Optional provider for ``prompts/list``
    """

    def __init__(
        self,
        identity: ServerIdentity,
        setup_tools: SetupHook,
        execute_tool: ToolExecutor,
        stdin: Optional[IO[str]] = None,
        stdout: Optional[IO[str]] = None,
        debug: Optional[bool] = None,
        list_resources: Optional[ListProvider] = None,
        list_prompts: Optional[ListProvider] = None,
    ) -> None:
        self.identity = identity
        self.debug = debug_enabled() if debug is None else debug
        self._stdin = stdin
        self._stdout = stdout
        self.tools = ToolRegistry()
        self.dispatcher = MethodDispatcher(
            identity,
            self.tools,
            execute_tool,
            list_resources=list_resources,
            list_prompts=list_prompts,
        )

        logging.basicConfig(
            stream=sys.stderr,
            level=logging.DEBUG if self.debug else logging.WARNING,
            format=LOG_FORMAT,
        )

        setup_tools(self)
        logging.debug(f"Registered tools for {identity.name}: {', '.join(self.tools.names())}")

    @property
    def stdin(self) -> IO[str]:
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self) -> IO[str]:
        return self._stdout if self._stdout is not None else sys.stdout

    def register_tool(self, name: str, description: str, input_schema: Dict[str, Any]) -> None:
        """Register a tool. A tool with the same name is replaced."""
        self.tools.register(name, description, input_schema)

    def _debug_log(self, message: str, data: Dict[str, Any]) -> None:
        if not self.debug:
            return
        log_data = {
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "message": message,
            "data": data,
        }
        logging.debug("MCP Debug: " + json.dumps(log_data, default=str))

    def handle_message(self, text: str) -> Optional[Response]:
        """Decode and dispatch one complete message.

        Returns:
            The response envelope, or None when no reply is due.
        """
        request = decode(text)
        if isinstance(request, ParseError):
            logging.warning(f"Parse error: {request.detail}")
            return request.to_response()

        self._debug_log("Received request", request.to_dict())
        try:
            return self.dispatcher.dispatch(request)
        except Exception as e:
            logging.exception(f"MCP Server Error: {e}")
            if request.is_notification:
                return None
            return make_error(request.id, INTERNAL_ERROR, f"Internal error: {e}")

    def _encode(self, response: Response) -> str:
        try:
            return encode(response)
        except (TypeError, ValueError) as e:
            logging.exception(f"MCP Server Error: {e}")
            return encode(make_error(response.get("id"), INTERNAL_ERROR, f"Internal error: {e}"))

    def _send(self, response: Response) -> None:
        self._debug_log("Sending response", response)
        line = self._encode(response)
        out = self.stdout
        out.write(line)
        out.flush()

    def serve(self) -> None:
        """Serve requests until the input stream is exhausted.

        Faults escaping the loop are logged and end the session without
        raising.
        """
        logging.debug(f"Starting {self.identity.name} v{self.identity.version}")
        try:
            for message in iter_messages(self.stdin):
                response = self.handle_message(message)
                if response is not None:
                    self._send(response)
        except Exception as e:
            logging.exception(f"MCP Server Fatal Error: {e}")
        logging.debug("Input closed, session finished")

    def serve_once(self) -> None:
        """Handle a single complete message, then return."""
        framer = LineFramer()
        for line in self.stdin:
            message = framer.feed(line)
            if message is None:
                continue
            response = self.handle_message(message)
            if response is not None:
                self._send(response)
            return


def describe_tools(server: McpServer, stream: Optional[IO[str]] = None) -> None:
    """Print human-readable descriptions of all registered tools."""
    out = stream if stream is not None else sys.stdout
    print(f"\n{server.identity.name} v{server.identity.version}", file=out)
    print("=" * 60, file=out)
    print("\nAvailable Tools:\n", file=out)

    for tool in server.tools.list_tools():
        print(f"Tool: {tool['name']}", file=out)
        print(f"  Description: {tool.get('description') or 'No description available'}", file=out)

        schema = tool.get("inputSchema", {})
        properties = schema.get("properties") or {}
        if not properties:
            print("  Parameters: None", file=out)
        else:
            print("  Parameters:", file=out)
            required = schema.get("required", [])
            for param_name, param_info in properties.items():
                param_type = param_info.get("type", "any")
                if param_type == "array" and "items" in param_info:
                    param_type = f"array[{param_info['items'].get('type', 'any')}]"
                if "enum" in param_info:
                    enum_values = ", ".join(f"'{v}'" for v in param_info["enum"])
                    param_type = f"{param_type} ({enum_values})"
                status = "(required)" if param_name in required else "(optional)"
                print(f"    - {param_name}: {param_type} {status}", file=out)
                print(f"      {param_info.get('description', 'No description')}", file=out)

        print(file=out)
