"""Built-in MCP tools."""

from .base import BaseTool, NoArguments, ToolArguments
from .calculator import CalculatorTool
from .documents import (
    DocumentDetailsTool,
    DocumentStore,
    SearchDocumentsTool,
)
from .files import (
    DeleteFileTool,
    FileInfoTool,
    FilePolicy,
    ListDirectoryTool,
    ReadFileTool,
    WriteFileTool,
)
from .greeting import GreetingTool
from .server_info import EchoTool, StatusTool
from .text import AnalyzeTextTool, TransformTextTool

__all__ = [
    "BaseTool",
    "NoArguments",
    "ToolArguments",
    "CalculatorTool",
    "DocumentDetailsTool",
    "DocumentStore",
    "SearchDocumentsTool",
    "DeleteFileTool",
    "FileInfoTool",
    "FilePolicy",
    "ListDirectoryTool",
    "ReadFileTool",
    "WriteFileTool",
    "GreetingTool",
    "EchoTool",
    "StatusTool",
    "AnalyzeTextTool",
    "TransformTextTool",
]
