"""Tools that report on the server itself: echo and status."""

from datetime import datetime, timezone
from typing import Dict, List

from pydantic import BaseModel, Field

from .base import BaseTool, NoArguments, ToolArguments

DEFAULT_ECHO_PREFIX = "Echo: "


class EchoRequest(ToolArguments):
    message: str = Field(description="Message to echo back")


class EchoResponse(BaseModel):
    echo: str
    original: str
    timestamp: str


class StatusResponse(BaseModel):
    server_name: str
    version: str
    uptime_seconds: int
    total_requests: int
    failed_requests: int
    enabled_tools: List[str]
    calls_by_tool: Dict[str, int]


class EchoTool(BaseTool):
    """Echo a message back with a configurable prefix."""

    def __init__(self, prefix: str = DEFAULT_ECHO_PREFIX):
        self.prefix = prefix

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo messages with optional prefix"

    @property
    def arguments_model(self):
        return EchoRequest

    def execute(self, request: EchoRequest) -> EchoResponse:
        return EchoResponse(
            echo=f"{self.prefix}{request.message}",
            original=request.message,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


class StatusTool(BaseTool):
    """
    Report server identity, uptime and call counters.

    Reads the invoker's stats and the registry it is registered in; both
    are only touched from the event loop.
    """

    def __init__(self, config, stats, registry):
        self.config = config
        self.stats = stats
        self.registry = registry

    @property
    def name(self) -> str:
        return "status"

    @property
    def description(self) -> str:
        return "Get server status and statistics"

    @property
    def arguments_model(self):
        return NoArguments

    def execute(self, request: NoArguments) -> StatusResponse:
        return StatusResponse(
            server_name=self.config.name,
            version=self.config.version,
            uptime_seconds=int(self.stats.uptime()),
            total_requests=self.stats.total_calls,
            failed_requests=self.stats.failed_calls,
            enabled_tools=self.registry.names(),
            calls_by_tool=dict(self.stats.calls_by_tool),
        )
