"""JSON-RPC 2.0 envelope encoding and decoding."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from mcp.types import INTERNAL_ERROR, METHOD_NOT_FOUND, PARSE_ERROR

JSONRPC_VERSION = "2.0"

# Application-defined error code shared by handler faults and tool failures.
SERVER_ERROR = -32000

__all__ = [
    "INTERNAL_ERROR",
    "JSONRPC_VERSION",
    "JsonRpcRequest",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "ParseError",
    "SERVER_ERROR",
    "decode",
    "encode",
    "loads",
    "make_error",
    "make_result",
]

RequestId = Union[str, int, None]
Response = Dict[str, Any]


@dataclass
class JsonRpcRequest:
    """A decoded JSON-RPC request or notification."""

    method: str = ""
    id: RequestId = None
    params: Dict[str, Any] = field(default_factory=dict)
    jsonrpc: str = JSONRPC_VERSION
    has_id: bool = False

    @property
    def is_notification(self) -> bool:
        """Requests without an id (absent or null) never get a reply."""
        return self.id is None

    @classmethod
    def from_dict(cls, message: Dict[str, Any]) -> "JsonRpcRequest":
        method = message.get("method")
        params = message.get("params")
        return cls(
            method=method if isinstance(method, str) else "",
            id=message.get("id"),
            params=params if isinstance(params, dict) else {},
            jsonrpc=message.get("jsonrpc", JSONRPC_VERSION),
            has_id="id" in message,
        )

    def to_dict(self) -> Dict[str, Any]:
        message: Dict[str, Any] = {"jsonrpc": self.jsonrpc, "method": self.method}
        if self.has_id or self.id is not None:
            message["id"] = self.id
        if self.params:
            message["params"] = self.params
        return message


@dataclass(frozen=True)
class ParseError:
    """Result of decoding text that is not a JSON-RPC object."""

    detail: str = ""
    code: int = PARSE_ERROR
    message: str = "Parse error"

    def to_response(self) -> Response:
        return make_error(None, self.code, self.message)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {name}")


def loads(text: str) -> Any:
    """Parse strict JSON. ``NaN`` and ``Infinity`` literals are rejected."""
    return json.loads(text, parse_constant=_reject_constant)


def decode(text: str) -> Union[JsonRpcRequest, ParseError]:
    """Parse ``text`` into a request.

    Args:
        text: One complete JSON text unit

    Returns:
        The decoded request, or a ParseError when the text is not valid
        JSON or is not a JSON object.
    """
    try:
        message = loads(text)
    except ValueError as e:
        return ParseError(detail=str(e))

    if not isinstance(message, dict):
        return ParseError(detail=f"Expected a JSON object, got {type(message).__name__}")

    return JsonRpcRequest.from_dict(message)


def encode(response: Response) -> str:
    """Serialize an envelope to a single newline-terminated JSON line."""
    return json.dumps(response, ensure_ascii=False, allow_nan=False, separators=(",", ":")) + "\n"


def make_result(request_id: RequestId, result: Dict[str, Any]) -> Response:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def make_error(request_id: RequestId, code: int, message: str) -> Response:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }
