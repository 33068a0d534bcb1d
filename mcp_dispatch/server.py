"""
MCP Server implementation.

Parses JSON-RPC envelopes, dispatches them to method handlers and wraps
results and errors in response envelopes. Each message is handled to
completion before the next one is read.
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .config import ServerConfig
from .errors import (
    InvalidParamsError,
    RpcError,
    TransportError,
    MessageParseError,
)
from .invoker import ToolInvoker
from .protocol import (
    PROTOCOL_VERSION,
    ErrorCode,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    text_content,
    tool_list_result,
    validate_request,
)
from .registry import ToolRegistry
from .resources import DocumentResourceProvider, ResourceProvider
from .tools import (
    AnalyzeTextTool,
    BaseTool,
    CalculatorTool,
    DeleteFileTool,
    DocumentDetailsTool,
    DocumentStore,
    EchoTool,
    FileInfoTool,
    FilePolicy,
    GreetingTool,
    ListDirectoryTool,
    ReadFileTool,
    SearchDocumentsTool,
    StatusTool,
    TransformTextTool,
    WriteFileTool,
)
from .tools.server_info import DEFAULT_ECHO_PREFIX
from .transport import NewlineTransport, Transport


logger = logging.getLogger(__name__)

Handler = Callable[[Optional[Any]], Awaitable[Any]]


class MCPServer:
    """
    MCP Server that routes requests to tools and resources.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        registry: Optional[ToolRegistry] = None,
        invoker: Optional[ToolInvoker] = None,
        resources: Optional[ResourceProvider] = None,
    ):
        self.config = config if config is not None else ServerConfig()
        self.registry = registry if registry is not None else ToolRegistry()
        self.invoker = invoker or ToolInvoker(self.registry)
        self.resources = resources
        self._transport: Optional[Transport] = None
        self._running = False
        self._handlers: Dict[str, Handler] = {}

        self._register_default_handlers()

    def _register_default_handlers(self) -> None:
        """Register built-in MCP method handlers."""
        self._handlers["initialize"] = self._handle_initialize
        self._handlers["notifications/initialized"] = self._handle_initialized
        self._handlers["ping"] = self._handle_ping
        self._handlers["tools/list"] = self._handle_list_tools
        self._handlers["tools/call"] = self._handle_call_tool
        self._handlers["resources/list"] = self._handle_list_resources
        self._handlers["resources/read"] = self._handle_read_resource

    def register_tool(self, tool: BaseTool, description: Optional[str] = None) -> None:
        """Register a tool with the server."""
        self.registry.register(tool, description)

    def register_handler(self, method: str, handler: Handler) -> None:
        """Register a custom method handler."""
        self._handlers[method] = handler

    @property
    def running(self) -> bool:
        return self._running

    async def _handle_initialize(self, params: Optional[Any]) -> dict:
        capabilities = {"tools": {"listChanged": False}}
        if self.resources is not None:
            capabilities["resources"] = {}
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": capabilities,
            "serverInfo": {
                "name": self.config.name,
                "version": self.config.version,
            },
        }

    async def _handle_initialized(self, params: Optional[Any]) -> dict:
        logger.info("Client initialized")
        return {}

    async def _handle_ping(self, params: Optional[Any]) -> dict:
        return {}

    async def _handle_list_tools(self, params: Optional[Any]) -> dict:
        return tool_list_result(self.registry.list())

    async def _handle_call_tool(self, params: Optional[Any]) -> dict:
        if not isinstance(params, dict):
            raise InvalidParamsError("Missing params")

        name = params.get("name")
        if not isinstance(name, str):
            raise InvalidParamsError("Missing tool name")

        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}

        result = await self.invoker.invoke(name, arguments)
        return {"content": [text_content(json.dumps(result))]}

    async def _handle_list_resources(self, params: Optional[Any]) -> dict:
        if self.resources is None:
            return {"resources": []}
        return {"resources": [r.to_dict() for r in self.resources.list_resources()]}

    async def _handle_read_resource(self, params: Optional[Any]) -> dict:
        uri = params.get("uri") if isinstance(params, dict) else None
        if not isinstance(uri, str):
            raise InvalidParamsError("Missing resource uri")
        if self.resources is None:
            raise InvalidParamsError(f"No resources available: {uri}")
        return self.resources.read_resource(uri)

    async def process_request(self, request: JsonRpcRequest) -> JsonRpcResponse:
        """Process a single parsed request. Never raises."""
        handler = self._handlers.get(request.method)

        if handler is None:
            error = JsonRpcError.from_code(
                ErrorCode.METHOD_NOT_FOUND,
                f"Unknown method: {request.method}",
            )
            return JsonRpcResponse.failure(request.id, error)

        try:
            result = await handler(request.params)
        except RpcError as e:
            return JsonRpcResponse.failure(request.id, e.to_rpc_error())
        except Exception as e:
            logger.exception(f"Error processing {request.method}: {e}")
            error = JsonRpcError.from_code(ErrorCode.INTERNAL_ERROR, str(e))
            return JsonRpcResponse.failure(request.id, error)

        return JsonRpcResponse.success(request.id, result)

    async def handle(self, raw: Any) -> Optional[dict]:
        """
        Handle one decoded message.

        Returns:
            The response envelope, or None when nothing must be sent back
            (notifications, invalid messages without an id)
        """
        problem = validate_request(raw)
        if problem is not None:
            if isinstance(raw, dict) and "id" in raw:
                error = JsonRpcError.from_code(
                    ErrorCode.INVALID_REQUEST,
                    f"Invalid Request: {problem}",
                )
                return JsonRpcResponse.failure(raw["id"], error).to_dict()
            logger.warning(f"Dropping invalid message without id: {problem}")
            return None

        request = JsonRpcRequest.from_dict(raw)
        response = await self.process_request(request)

        if request.is_notification:
            return None
        return response.to_dict()

    async def run(self, transport: Optional[Transport] = None) -> None:
        """
        Serve until end of stream.

        Malformed lines are logged and skipped; a transport failure is
        logged and ends the loop.
        """
        self._transport = transport or NewlineTransport()
        self.registry.freeze()
        self._running = True

        logger.info(
            f"MCP Server {self.config.name} v{self.config.version} starting "
            f"with {len(self.registry)} tools"
        )

        try:
            async with self._transport:
                while self._running:
                    try:
                        message = await self._transport.receive()
                    except MessageParseError as e:
                        logger.warning(f"Skipping malformed line: {e}")
                        continue
                    except TransportError as e:
                        logger.error(f"Transport failure, stopping: {e}")
                        break

                    if message is None:
                        logger.info("EOF received, shutting down")
                        break

                    try:
                        response = await self.handle(message)
                        if response is not None:
                            await self._transport.send(response)
                    except TransportError as e:
                        logger.error(f"Transport failure, stopping: {e}")
                        break
                    except Exception as e:
                        logger.exception(f"Error in main loop: {e}")
        finally:
            self._running = False
            logger.info("Server stopped")

    def stop(self) -> None:
        """Signal the server to stop after the current message."""
        self._running = False


def create_server(
    config: Optional[ServerConfig] = None,
    tools: Optional[List[BaseTool]] = None,
    store: Optional[DocumentStore] = None,
) -> MCPServer:
    """
    Create an MCP server with configuration and tools.

    Args:
        config: Server configuration
        tools: Extra tools to register after the built-in ones
        store: Document store for the document tools and resources

    Returns:
        Configured MCPServer instance
    """
    config = config if config is not None else ServerConfig()
    store = store if store is not None else DocumentStore()
    server = MCPServer(config, resources=DocumentResourceProvider(store))

    policy = FilePolicy(
        allowed_paths=list(config.allowed_paths),
        allowed_extensions=config.allowed_extensions,
        max_file_size=config.max_file_size,
        read_only=config.read_only,
    )
    echo_prefix = config.tool_config("echo").parameters.get("prefix", DEFAULT_ECHO_PREFIX)

    builtin = [
        GreetingTool(),
        CalculatorTool(),
        TransformTextTool(),
        AnalyzeTextTool(),
        EchoTool(prefix=echo_prefix),
        StatusTool(config, server.invoker.stats, server.registry),
        SearchDocumentsTool(store),
        DocumentDetailsTool(store),
        ReadFileTool(policy),
        FileInfoTool(policy),
        ListDirectoryTool(policy),
    ]
    if not config.read_only:
        builtin.extend([WriteFileTool(policy), DeleteFileTool(policy)])

    for tool in builtin + list(tools or []):
        tool_config = config.tool_config(tool.name)
        if not tool_config.enabled:
            logger.info(f"Tool {tool.name} disabled by configuration")
            continue
        server.register_tool(tool, tool_config.description_override)

    return server
