"""Method dispatch for MCP requests.

The method table is built once per dispatcher. Each handler receives the
request id and params and returns a complete response envelope, or None
when no reply is due.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from mcp import types
from pydantic import BaseModel

from .codec import METHOD_NOT_FOUND, SERVER_ERROR, JsonRpcRequest, RequestId, Response, make_error, make_result
from .config import DEFAULT_PROTOCOL_VERSION, SUPPORTED_PROTOCOL_VERSIONS, ServerIdentity
from .tools import ToolExecutor, ToolRegistry

Handler = Callable[[RequestId, Dict[str, Any]], Optional[Response]]
ListProvider = Callable[[], List[Dict[str, Any]]]


def _dump(model: BaseModel, **kwargs: Any) -> Dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json", **kwargs)


def negotiate_protocol_version(requested: Any) -> str:
    """Echo a supported client version, otherwise answer with the default."""
    if requested in SUPPORTED_PROTOCOL_VERSIONS:
        return requested
    return DEFAULT_PROTOCOL_VERSION


class MethodDispatcher:
    """Routes JSON-RPC requests to the MCP method handlers.

    Args:
        identity: Name and version reported by ``initialize``
        registry: Tools returned by ``tools/list``
        execute_tool: Capability invoked by ``tools/call``
        list_resources: Optional provider for ``resources/list``
        list_prompts: Optional provider for ``prompts/list``
    """

    def __init__(
        self,
        identity: ServerIdentity,
        registry: ToolRegistry,
        execute_tool: ToolExecutor,
        list_resources: Optional[ListProvider] = None,
        list_prompts: Optional[ListProvider] = None,
    ) -> None:
        self.identity = identity
        self.registry = registry
        self._execute_tool = execute_tool
        self._list_resources = list_resources
        self._list_prompts = list_prompts
        self._handlers: Dict[str, Handler] = {
            "initialize": self._handle_initialize,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
            "resources/list": self._handle_resources_list,
            "prompts/list": self._handle_prompts_list,
            "notifications/initialized": self._handle_initialized,
        }

    def dispatch(self, request: JsonRpcRequest) -> Optional[Response]:
        """Handle one request.

        Returns:
            The response envelope, or None for notifications.
        """
        response = self._dispatch(request)

        if request.is_notification:
            if response is not None and "error" in response:
                logging.warning(f"Dropped error for notification {request.method!r}: {response['error']['message']}")
            return None

        return response

    def _dispatch(self, request: JsonRpcRequest) -> Optional[Response]:
        handler = self._handlers.get(request.method)
        if handler is None:
            return make_error(request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}")

        try:
            return handler(request.id, request.params)
        except Exception as e:
            logging.error(f"Error handling {request.method}: {e}", exc_info=True)
            return make_error(request.id, SERVER_ERROR, f"Server error: {e}")

    def _handle_initialize(self, request_id: RequestId, params: Dict[str, Any]) -> Response:
        result = types.InitializeResult(
            protocolVersion=negotiate_protocol_version(params.get("protocolVersion")),
            capabilities=types.ServerCapabilities(
                tools=types.ToolsCapability(listChanged=True),
                resources=types.ResourcesCapability(),
                prompts=types.PromptsCapability(),
            ),
            serverInfo=types.Implementation(name=self.identity.name, version=self.identity.version),
        )
        return make_result(request_id, _dump(result, include={"protocolVersion", "capabilities", "serverInfo"}))

    def _handle_tools_list(self, request_id: RequestId, params: Dict[str, Any]) -> Response:
        tools = self.registry.list_tools()
        logging.debug(f"Listed {len(tools)} tools")
        return make_result(request_id, {"tools": tools})

    def _handle_tools_call(self, request_id: RequestId, params: Dict[str, Any]) -> Response:
        tool_name = params.get("name", "")
        arguments = params.get("arguments") or {}

        try:
            text = self._execute_tool(tool_name, arguments)
        except Exception as e:
            logging.info(f"Tool {tool_name!r} failed: {e}")
            return make_error(request_id, SERVER_ERROR, str(e))

        result = types.CallToolResult(content=[types.TextContent(type="text", text=text)])
        return make_result(request_id, _dump(result, include={"content": {"__all__": {"type", "text"}}}))

    def _handle_resources_list(self, request_id: RequestId, params: Dict[str, Any]) -> Response:
        resources = self._list_resources() if self._list_resources else []
        return make_result(request_id, {"resources": resources})

    def _handle_prompts_list(self, request_id: RequestId, params: Dict[str, Any]) -> Response:
        prompts = self._list_prompts() if self._list_prompts else []
        return make_result(request_id, {"prompts": prompts})

    def _handle_initialized(self, request_id: RequestId, params: Dict[str, Any]) -> None:
        logging.debug("Client finished initialization")
        return None
