"""
Error types for each layer of the server.

Errors that can reach a client carry a JSON-RPC code and convert themselves
into an error object at the envelope boundary; the rest stay local to the
process (startup, transport).
"""

from typing import Any, Optional

from .protocol import ErrorCode, JsonRpcError


class MCPDispatchError(Exception):
    """Base class for all mcp_dispatch errors."""


class ConfigError(MCPDispatchError):
    """Configuration could not be loaded or is invalid."""


class RegistryError(MCPDispatchError):
    """Tool registration failed (duplicate name, frozen registry)."""


class TransportError(MCPDispatchError):
    """The underlying stream failed. Terminates the serving loop."""


class MessageParseError(MCPDispatchError, ValueError):
    """A single inbound line was not valid JSON."""


class RpcError(MCPDispatchError):
    """An error reported to the client as a JSON-RPC error object."""
    code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, data: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def to_rpc_error(self) -> JsonRpcError:
        return JsonRpcError.from_code(self.code, self.message, self.data)


class InvalidParamsError(RpcError):
    code = ErrorCode.INVALID_PARAMS


class ResourceNotFoundError(RpcError):
    code = ErrorCode.RESOURCE_NOT_FOUND

    def __init__(self, message: str, uri: str):
        super().__init__(message, data={"uri": uri})
        self.uri = uri


class ToolError(RpcError):
    """
    Failure while invoking a tool.

    Every variant shares the tool error code; ``kind`` tells them apart and
    is sent to the client in ``error.data``.
    """
    code = ErrorCode.TOOL_ERROR
    kind = "tool_error"

    def __init__(self, message: str):
        super().__init__(message, data={"kind": self.kind})


class UnknownToolError(ToolError):
    kind = "unknown_tool"

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class InvalidArgumentsError(ToolError):
    kind = "invalid_arguments"

    def __init__(self, detail: str):
        super().__init__(f"Failed to parse arguments: {detail}")
        self.detail = detail


class ToolExecutionError(ToolError):
    """Raised by tool domain logic (division by zero, missing file, ...)."""
    kind = "execution_failed"


class InternalToolError(ToolError):
    kind = "internal_error"
