"""
Base classes for MCP tools.

A tool declares a pydantic model for its arguments; that model is both the
advertised input schema and the typed request handed to ``execute``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Type

from pydantic import BaseModel, ConfigDict

from ..protocol import ToolDescriptor


class ToolArguments(BaseModel):
    """Base for tool request models. Strict: no string-to-number coercion."""
    model_config = ConfigDict(strict=True)


class BaseTool(ABC):
    """Base class for MCP tools."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Tool description."""
        pass

    @property
    @abstractmethod
    def arguments_model(self) -> Type[ToolArguments]:
        """Pydantic model the call arguments are validated into."""
        pass

    @abstractmethod
    def execute(self, request: Any) -> Any:
        """
        Run the tool on a validated request.

        May be a coroutine function. Returns a pydantic model or a plain
        JSON value; raises ToolExecutionError for domain failures.
        """
        pass

    def input_schema(self) -> Dict[str, Any]:
        """JSON Schema for the tool arguments."""
        return self.arguments_model.model_json_schema()

    def get_descriptor(self, description: Optional[str] = None) -> ToolDescriptor:
        """Get the advertised tool definition."""
        return ToolDescriptor(
            name=self.name,
            description=description or self.description,
            input_schema=self.input_schema(),
        )


class NoArguments(ToolArguments):
    """Request model for tools that take no arguments."""
