"""Tests for mcp_dispatch.tools (non-file tools)."""

import pytest

from mcp_dispatch.config import ServerConfig
from mcp_dispatch.errors import ToolExecutionError
from mcp_dispatch.invoker import InvocationStats
from mcp_dispatch.registry import ToolRegistry
from mcp_dispatch.tools import (
    AnalyzeTextTool,
    CalculatorTool,
    DocumentDetailsTool,
    DocumentStore,
    EchoTool,
    GreetingTool,
    SearchDocumentsTool,
    StatusTool,
    TransformTextTool,
)
from mcp_dispatch.tools.calculator import CalculatorRequest
from mcp_dispatch.tools.documents import Document, DocumentDetailsRequest, SearchRequest
from mcp_dispatch.tools.greeting import GreetingRequest
from mcp_dispatch.tools.server_info import EchoRequest
from mcp_dispatch.tools.text import TextAnalysisRequest, TextTransformRequest, capitalize_words
from mcp_dispatch.tools.base import NoArguments


class TestGreetingTool:
    def test_create(self):
        tool = GreetingTool()
        assert tool.name == "greeting"

    def test_greet(self):
        response = GreetingTool().execute(GreetingRequest(name="Ada"))
        assert response.message == "Hello, Ada! Welcome to the MCP server."
        assert response.language == "en"

    def test_greet_in_spanish(self):
        response = GreetingTool().execute(GreetingRequest(name="Ada", language="es"))
        assert response.message.startswith("¡Hola, Ada!")
        assert response.language == "es"

    def test_unknown_language_falls_back(self):
        response = GreetingTool().execute(GreetingRequest(name="Ada", language="xx"))
        assert response.language == "en"

    def test_schema(self):
        schema = GreetingTool().input_schema()
        assert schema["type"] == "object"
        assert schema["required"] == ["name"]
        assert schema["properties"]["language"]["enum"] == ["en", "es", "fr", "de"]


class TestCalculatorTool:
    @pytest.mark.parametrize("operation,expected", [
        ("add", 8.0),
        ("subtract", 2.0),
        ("multiply", 15.0),
        ("divide", 5 / 3),
    ])
    def test_operations(self, operation, expected):
        response = CalculatorTool().execute(CalculatorRequest(operation=operation, a=5, b=3))
        assert response.result == pytest.approx(expected)

    def test_operation_performed(self):
        response = CalculatorTool().execute(CalculatorRequest(operation="add", a=5, b=3.5))
        assert response.operation_performed == "5 add 3.5"

    def test_division_by_zero(self):
        with pytest.raises(ToolExecutionError) as exc_info:
            CalculatorTool().execute(CalculatorRequest(operation="divide", a=5, b=0))
        assert "Division by zero" in exc_info.value.message

    def test_unsupported_operation(self):
        with pytest.raises(ToolExecutionError) as exc_info:
            CalculatorTool().execute(CalculatorRequest(operation="modulo", a=5, b=3))
        assert "Unsupported operation: modulo" in exc_info.value.message

    @pytest.mark.parametrize("operation", ["multiply", "add"])
    def test_overflow_is_execution_error(self, operation):
        request = CalculatorRequest(operation=operation, a=1e308, b=1e308)
        with pytest.raises(ToolExecutionError) as exc_info:
            CalculatorTool().execute(request)
        assert "out of range" in exc_info.value.message
        assert exc_info.value.kind == "execution_failed"

    def test_schema(self):
        schema = CalculatorTool().input_schema()
        assert set(schema["required"]) == {"operation", "a", "b"}
        assert schema["properties"]["a"]["type"] == "number"


class TestTextTools:
    @pytest.mark.parametrize("operation,expected", [
        ("uppercase", "  HELLO WORLD  "),
        ("lowercase", "  hello world  "),
        ("reverse", "  dlroW olleH  "),
        ("capitalize", "Hello World"),
        ("trim", "Hello World"),
    ])
    def test_transform(self, operation, expected):
        request = TextTransformRequest(text="  Hello World  ", operation=operation)
        assert TransformTextTool().execute(request).result == expected

    def test_unsupported_transformation(self):
        request = TextTransformRequest(text="x", operation="shout")
        with pytest.raises(ToolExecutionError) as exc_info:
            TransformTextTool().execute(request)
        assert "Unsupported transformation: shout" in exc_info.value.message

    def test_capitalize_words(self):
        assert capitalize_words("hello  big\tworld") == "Hello Big World"
        assert capitalize_words("") == ""

    def test_analyze(self):
        response = AnalyzeTextTool().execute(TextAnalysisRequest(text="Hello world\nline 2"))
        assert response.word_count == 4
        assert response.character_count == 18
        assert response.line_count == 2
        assert response.has_uppercase is True
        assert response.has_lowercase is True
        assert response.has_numbers is True

    def test_analyze_empty(self):
        response = AnalyzeTextTool().execute(TextAnalysisRequest(text=""))
        assert response.word_count == 0
        assert response.line_count == 0
        assert response.has_uppercase is False


class TestEchoTool:
    def test_default_prefix(self):
        response = EchoTool().execute(EchoRequest(message="hi"))
        assert response.echo == "Echo: hi"
        assert response.original == "hi"
        assert response.timestamp

    def test_custom_prefix(self):
        response = EchoTool(prefix=">> ").execute(EchoRequest(message="hi"))
        assert response.echo == ">> hi"


class TestStatusTool:
    def test_status(self):
        config = ServerConfig(name="status-test", version="9.9.9")
        stats = InvocationStats()
        stats.record_call()
        stats.record_tool_call("greeting")
        stats.record_call()
        stats.record_tool_call("greeting")
        stats.record_failure()
        registry = ToolRegistry()
        tool = StatusTool(config, stats, registry)
        registry.register(GreetingTool())
        registry.register(tool)

        response = tool.execute(NoArguments())
        assert response.server_name == "status-test"
        assert response.version == "9.9.9"
        assert response.total_requests == 2
        assert response.failed_requests == 1
        assert response.enabled_tools == ["greeting", "status"]
        assert response.uptime_seconds >= 0
        assert response.calls_by_tool == {"greeting": 2}


class TestDocumentStore:
    def test_sample_documents(self):
        store = DocumentStore()
        assert len(store) == 4
        assert store.get("doc1").title == "Introduction to Model Context Protocol"

    def test_search_orders_by_score(self):
        store = DocumentStore([
            Document("a", "Notes", "mentions python once", "x", "2024-01-01T00:00:00Z"),
            Document("b", "Python tips", "tips", "x", "2024-01-01T00:00:00Z", ["python"]),
            Document("c", "Misc", "misc", "x", "2024-01-01T00:00:00Z", ["Python"]),
        ])
        assert [d.id for d in store.search("PYTHON")] == ["b", "c", "a"]

    def test_search_limit(self):
        store = DocumentStore()
        assert len(store.search("protocol", limit=1)) == 1

    def test_search_no_match(self):
        assert DocumentStore().search("zzz-not-there") == []


class TestDocumentTools:
    def test_search_documents(self):
        tool = SearchDocumentsTool(DocumentStore())
        response = tool.execute(SearchRequest(query="Python", limit=10))
        ids = [m.id for m in response.matches]
        assert ids == ["doc2", "doc3"]
        assert response.total_count == 2
        assert response.matches[0].uri == "document://doc2"

    def test_document_details(self):
        tool = DocumentDetailsTool(DocumentStore())
        details = tool.execute(DocumentDetailsRequest(document_id="doc4"))
        assert details["title"] == "JSON-RPC 2.0 Specification"
        assert "JSON-RPC" in details["tags"]

    def test_document_not_found(self):
        tool = DocumentDetailsTool(DocumentStore())
        with pytest.raises(ToolExecutionError) as exc_info:
            tool.execute(DocumentDetailsRequest(document_id="nope"))
        assert "Document not found: nope" in exc_info.value.message
