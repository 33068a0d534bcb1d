"""
Document tools.

An in-memory document store with keyword search. The same store backs the
``document://`` resources.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from ..errors import ToolExecutionError
from .base import BaseTool, ToolArguments

DOCUMENT_URI_SCHEME = "document://"
DEFAULT_SEARCH_LIMIT = 10


@dataclass
class Document:
    id: str
    title: str
    content: str
    author: str
    created_at: str
    tags: List[str] = field(default_factory=list)

    @property
    def uri(self) -> str:
        return f"{DOCUMENT_URI_SCHEME}{self.id}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "created_at": self.created_at,
            "tags": list(self.tags),
        }


SAMPLE_DOCUMENTS = [
    Document(
        id="doc1",
        title="Introduction to Model Context Protocol",
        content=(
            "The Model Context Protocol (MCP) is an open protocol that standardizes "
            "how applications provide context to LLMs. Servers expose tools and "
            "resources; any MCP client can discover and use them without a custom "
            "integration per data source."
        ),
        author="MCP Team",
        created_at="2024-01-01T00:00:00Z",
        tags=["MCP", "Protocol", "AI"],
    ),
    Document(
        id="doc2",
        title="Python Packaging Overview",
        content=(
            "A Python distribution bundles one or more import packages with their "
            "metadata. setuptools builds it from setup.py, and pip installs it "
            "together with its declared dependencies."
        ),
        author="Python Community",
        created_at="2024-01-02T00:00:00Z",
        tags=["Python", "Packaging", "Tooling"],
    ),
    Document(
        id="doc3",
        title="Async Programming with asyncio",
        content=(
            "asyncio runs coroutines on a single-threaded event loop. Tasks yield "
            "control at await points, typically around network or file I/O, which "
            "lets one process serve many connections."
        ),
        author="asyncio Contributors",
        created_at="2024-01-03T00:00:00Z",
        tags=["Python", "Async", "asyncio"],
    ),
    Document(
        id="doc4",
        title="JSON-RPC 2.0 Specification",
        content=(
            "JSON-RPC is a stateless, light-weight remote procedure call protocol. "
            "It is transport agnostic and defines how requests, responses and "
            "errors are encoded as JSON objects."
        ),
        author="JSON-RPC Working Group",
        created_at="2024-01-04T00:00:00Z",
        tags=["JSON-RPC", "Protocol", "API"],
    ),
]


class DocumentStore:
    """Documents keyed by id, in insertion order."""

    def __init__(self, documents: Optional[Iterable[Document]] = None):
        if documents is None:
            documents = SAMPLE_DOCUMENTS
        self._documents: Dict[str, Document] = {doc.id: doc for doc in documents}

    def get(self, document_id: str) -> Optional[Document]:
        return self._documents.get(document_id)

    def all(self) -> List[Document]:
        return list(self._documents.values())

    def search(self, query: str, limit: Optional[int] = None) -> List[Document]:
        """
        Case-insensitive substring search over title, content, author and tags.

        Results are ordered by score (title match 2, tag match 1), ties kept
        in store order.
        """
        needle = query.lower()

        def tag_match(doc: Document) -> bool:
            return any(needle in tag.lower() for tag in doc.tags)

        def score(doc: Document) -> int:
            return (2 if needle in doc.title.lower() else 0) + (1 if tag_match(doc) else 0)

        matches = [
            doc for doc in self._documents.values()
            if needle in doc.title.lower()
            or needle in doc.content.lower()
            or needle in doc.author.lower()
            or tag_match(doc)
        ]
        matches.sort(key=score, reverse=True)

        if limit is not None:
            matches = matches[:limit]
        return matches

    def __len__(self) -> int:
        return len(self._documents)


class SearchRequest(ToolArguments):
    query: str = Field(description="Search query to find relevant documents")
    limit: int = Field(
        DEFAULT_SEARCH_LIMIT,
        ge=0,
        description="Maximum number of results to return",
    )


class DocumentSummary(BaseModel):
    id: str
    title: str
    author: str
    uri: str
    tags: List[str]


class SearchResponse(BaseModel):
    matches: List[DocumentSummary]
    total_count: int


class DocumentDetailsRequest(ToolArguments):
    document_id: str = Field(description="ID of the document to retrieve details for")


class SearchDocumentsTool(BaseTool):

    def __init__(self, store: DocumentStore):
        self.store = store

    @property
    def name(self) -> str:
        return "search_documents"

    @property
    def description(self) -> str:
        return "Search through available documents using keywords"

    @property
    def arguments_model(self):
        return SearchRequest

    def execute(self, request: SearchRequest) -> SearchResponse:
        matches = self.store.search(request.query, request.limit)
        return SearchResponse(
            matches=[
                DocumentSummary(
                    id=doc.id,
                    title=doc.title,
                    author=doc.author,
                    uri=doc.uri,
                    tags=list(doc.tags),
                )
                for doc in matches
            ],
            total_count=len(matches),
        )


class DocumentDetailsTool(BaseTool):

    def __init__(self, store: DocumentStore):
        self.store = store

    @property
    def name(self) -> str:
        return "get_document_details"

    @property
    def description(self) -> str:
        return "Get detailed information about a specific document"

    @property
    def arguments_model(self):
        return DocumentDetailsRequest

    def execute(self, request: DocumentDetailsRequest) -> dict:
        document = self.store.get(request.document_id)
        if document is None:
            raise ToolExecutionError(f"Document not found: {request.document_id}")
        return document.to_dict()
