"""
mcp-dispatch - JSON-RPC tool dispatch for the Model Context Protocol.

The Model Context Protocol (MCP) lets AI clients discover and call tools
exposed by a server. This package provides the registry, invoker, envelope
handler and newline-delimited transport, plus a set of example tools.
"""

__version__ = "0.1.0"

from .protocol import (
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    ResourceDescriptor,
    ToolDescriptor,
)
from .errors import (
    ConfigError,
    InternalToolError,
    InvalidArgumentsError,
    MCPDispatchError,
    MessageParseError,
    RegistryError,
    ToolError,
    ToolExecutionError,
    TransportError,
    UnknownToolError,
)
from .config import ServerConfig, ToolConfig, load_config
from .registry import ToolRegistry
from .invoker import InvocationStats, ToolInvoker
from .resources import DocumentResourceProvider, ResourceProvider
from .server import MCPServer, create_server
from .tools import BaseTool, ToolArguments
from .transport import NewlineTransport, Transport

__all__ = [
    # Protocol
    "ErrorCode",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "ResourceDescriptor",
    "ToolDescriptor",
    # Errors
    "ConfigError",
    "InternalToolError",
    "InvalidArgumentsError",
    "MCPDispatchError",
    "MessageParseError",
    "RegistryError",
    "ToolError",
    "ToolExecutionError",
    "TransportError",
    "UnknownToolError",
    # Config
    "ServerConfig",
    "ToolConfig",
    "load_config",
    # Dispatch
    "ToolRegistry",
    "InvocationStats",
    "ToolInvoker",
    "MCPServer",
    "create_server",
    "BaseTool",
    "ToolArguments",
    # Resources
    "DocumentResourceProvider",
    "ResourceProvider",
    # Transport
    "NewlineTransport",
    "Transport",
]
