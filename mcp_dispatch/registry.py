"""
Tool registry.

Holds the tools a server exposes, in registration order. Descriptors are
built once at registration and never change afterwards.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .errors import RegistryError
from .protocol import ToolDescriptor
from .tools.base import BaseTool


logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry for managing tools."""

    def __init__(self, tools: Optional[Iterable[BaseTool]] = None):
        self._tools: Dict[str, BaseTool] = {}
        self._descriptors: Dict[str, ToolDescriptor] = {}
        self._frozen = False

        for tool in tools or ():
            self.register(tool)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, tool: BaseTool, description: Optional[str] = None) -> ToolDescriptor:
        """
        Register a tool.

        Args:
            tool: Tool to expose
            description: Replaces the tool's own description when given

        Returns:
            The descriptor that will be advertised for the tool
        """
        if self._frozen:
            raise RegistryError(f"Registry is frozen, cannot register: {tool.name}")
        if tool.name in self._tools:
            raise RegistryError(f"Tool already registered: {tool.name}")

        descriptor = tool.get_descriptor(description)
        self._tools[tool.name] = tool
        self._descriptors[tool.name] = descriptor
        logger.debug(f"Registered tool {tool.name}")
        return descriptor

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    def get(self, name: str) -> Optional[BaseTool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def lookup(self, name: str) -> Optional[ToolDescriptor]:
        """Get a tool descriptor by name."""
        return self._descriptors.get(name)

    def list(self) -> List[ToolDescriptor]:
        """All descriptors, in registration order."""
        return [self._descriptors[name] for name in self._tools]

    def names(self) -> List[str]:
        return [name for name in self._tools]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
