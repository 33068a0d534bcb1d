"""
MCP Protocol definitions.

Implements the JSON-RPC 2.0 envelopes used by the Model Context Protocol,
plus the tool and resource descriptors a server advertises.
"""

import copy
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

JSONRPC_VERSION = "2.0"
PROTOCOL_VERSION = "2024-11-05"

RequestId = Union[str, int, None]


class ErrorCode(Enum):
    """JSON-RPC and MCP error codes."""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603
    # Server-defined range
    TOOL_ERROR = -32000
    RESOURCE_NOT_FOUND = -32002


@dataclass
class JsonRpcError:
    """JSON-RPC error object."""
    code: int
    message: str
    data: Optional[Any] = None

    @classmethod
    def from_code(cls, code: ErrorCode, message: str, data: Any = None) -> "JsonRpcError":
        return cls(code=code.value, message=message, data=data)

    def to_dict(self) -> dict:
        result = {"code": self.code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "JsonRpcError":
        return cls(
            code=data["code"],
            message=data.get("message", ""),
            data=data.get("data"),
        )


@dataclass
class JsonRpcRequest:
    """
    JSON-RPC request message.

    ``has_id`` records whether the ``id`` key was present at all, since an
    absent id and an explicit ``null`` id are both represented as ``None``.
    """
    method: str
    id: RequestId = None
    params: Optional[Any] = None
    jsonrpc: str = JSONRPC_VERSION
    has_id: bool = True

    @property
    def is_notification(self) -> bool:
        """Notifications never get a response."""
        return not self.has_id and self.method.startswith("notifications/")

    def to_dict(self) -> dict:
        result = {"jsonrpc": self.jsonrpc, "method": self.method}
        if self.has_id:
            result["id"] = self.id
        if self.params is not None:
            result["params"] = self.params
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict) -> "JsonRpcRequest":
        return cls(
            jsonrpc=data.get("jsonrpc", JSONRPC_VERSION),
            id=data.get("id"),
            method=data.get("method", ""),
            params=data.get("params"),
            has_id="id" in data,
        )

    @classmethod
    def from_json(cls, json_str: str) -> "JsonRpcRequest":
        return cls.from_dict(json.loads(json_str))


@dataclass
class JsonRpcResponse:
    """
    JSON-RPC response message.

    Carries either a result or an error, never both. Use ``success`` and
    ``failure`` to build one.
    """
    id: RequestId = None
    result: Optional[Any] = None
    error: Optional[JsonRpcError] = None
    jsonrpc: str = JSONRPC_VERSION

    def __post_init__(self):
        if self.error is not None and self.result is not None:
            raise ValueError("Response cannot carry both a result and an error")

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict:
        result = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            result["error"] = self.error.to_dict()
        else:
            result["result"] = self.result
        return result

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def success(cls, id: RequestId, result: Any) -> "JsonRpcResponse":
        return cls(id=id, result=result)

    @classmethod
    def failure(cls, id: RequestId, error: JsonRpcError) -> "JsonRpcResponse":
        return cls(id=id, error=error)

    @classmethod
    def from_dict(cls, data: dict) -> "JsonRpcResponse":
        if "error" in data and data["error"] is not None:
            return cls.failure(data.get("id"), JsonRpcError.from_dict(data["error"]))
        return cls.success(data.get("id"), data.get("result"))


@dataclass(frozen=True)
class ToolDescriptor:
    """Advertised definition of a tool, as returned by ``tools/list``."""
    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": copy.deepcopy(self.input_schema),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ToolDescriptor":
        schema = data.get("input_schema")
        if schema is None:
            schema = data.get("inputSchema", {})
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            input_schema=copy.deepcopy(schema),
        )


@dataclass(frozen=True)
class ResourceDescriptor:
    """Advertised definition of a readable resource."""
    uri: str
    name: Optional[str] = None
    description: Optional[str] = None
    mime_type: Optional[str] = None

    def to_dict(self) -> dict:
        result = {"uri": self.uri}
        if self.name is not None:
            result["name"] = self.name
        if self.description is not None:
            result["description"] = self.description
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        return result


def text_content(text: str) -> dict:
    """Build a single MCP text content block."""
    return {"type": "text", "text": text}


def validate_request(data: Any) -> Optional[str]:
    """Check the JSON-RPC envelope shape. Returns error message if invalid."""
    if not isinstance(data, dict):
        return "Request must be a JSON object"

    version = data.get("jsonrpc", JSONRPC_VERSION)
    if version != JSONRPC_VERSION:
        return f"Unsupported jsonrpc version: {version!r}"

    method = data.get("method")
    if not isinstance(method, str) or not method:
        return "Missing or invalid 'method'"

    return None


def tool_list_result(descriptors: List[ToolDescriptor]) -> dict:
    """Shape the ``tools/list`` result payload."""
    return {"tools": [d.to_dict() for d in descriptors]}
