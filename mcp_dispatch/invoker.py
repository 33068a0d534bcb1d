"""
Tool invoker.

Looks a tool up, validates the raw arguments into its typed request,
runs it and turns the typed response back into a JSON value.
"""

import inspect
import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from pydantic import BaseModel, ValidationError

from .errors import (
    InternalToolError,
    InvalidArgumentsError,
    ToolError,
    ToolExecutionError,
    UnknownToolError,
)
from .registry import ToolRegistry
from .tools.base import BaseTool, ToolArguments


logger = logging.getLogger(__name__)


@dataclass
class InvocationStats:
    """
    Counters for tool calls handled by an invoker.

    ``calls_by_tool`` only holds registered tool names, so its size is
    bounded by the registry.
    """
    started_at: float = field(default_factory=time.monotonic)
    total_calls: int = 0
    failed_calls: int = 0
    calls_by_tool: Dict[str, int] = field(default_factory=dict)

    def record_call(self) -> None:
        self.total_calls += 1

    def record_tool_call(self, name: str) -> None:
        self.calls_by_tool[name] = self.calls_by_tool.get(name, 0) + 1

    def record_failure(self) -> None:
        self.failed_calls += 1

    def uptime(self) -> float:
        return time.monotonic() - self.started_at


def format_validation_error(error: ValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class ToolInvoker:
    """Runs tools from a registry. No retries, no timeouts."""

    def __init__(self, registry: ToolRegistry, stats: Optional[InvocationStats] = None):
        self.registry = registry
        self.stats = stats or InvocationStats()

    async def invoke(self, name: str, arguments: Any = None) -> Any:
        """
        Invoke a tool by name.

        Args:
            name: Tool name, not required to be registered
            arguments: JSON object with the call arguments

        Returns:
            The tool result as a JSON-compatible value

        Raises:
            ToolError: UnknownToolError, InvalidArgumentsError,
                ToolExecutionError or InternalToolError
        """
        self.stats.record_call()
        try:
            return await self._invoke(name, arguments)
        except ToolError as e:
            self.stats.record_failure()
            logger.info(f"Tool call {name} failed ({e.kind}): {e.message}")
            raise

    async def _invoke(self, name: str, arguments: Any) -> Any:
        tool = self.registry.get(name)
        if tool is None:
            raise UnknownToolError(name)
        self.stats.record_tool_call(name)

        request = self._parse_arguments(tool, arguments)

        try:
            result = tool.execute(request)
            if inspect.isawaitable(result):
                result = await result
        except ToolError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}: {e}")
            raise ToolExecutionError(str(e) or type(e).__name__) from e

        return self._serialize(result)

    @staticmethod
    def _parse_arguments(tool: BaseTool, arguments: Any) -> ToolArguments:
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise InvalidArgumentsError(
                f"expected an object, got {type(arguments).__name__}"
            )

        try:
            return tool.arguments_model.model_validate(arguments)
        except ValidationError as e:
            raise InvalidArgumentsError(format_validation_error(e)) from e

    @staticmethod
    def _serialize(result: Any) -> Any:
        if isinstance(result, BaseModel):
            result = result.model_dump(mode="json")

        try:
            json.dumps(result, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise InternalToolError(f"Failed to serialize response: {e}") from e

        return result
