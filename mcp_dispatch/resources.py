"""
Resource providers.

Resources are read-only content addressed by URI, served through
``resources/list`` and ``resources/read``.
"""

from abc import ABC, abstractmethod
from typing import List

from .errors import ResourceNotFoundError
from .protocol import ResourceDescriptor
from .tools.documents import DOCUMENT_URI_SCHEME, DocumentStore


class ResourceProvider(ABC):
    """Base class for resource providers."""

    @abstractmethod
    def list_resources(self) -> List[ResourceDescriptor]:
        pass

    @abstractmethod
    def read_resource(self, uri: str) -> dict:
        """Return the ``resources/read`` result for a URI."""
        pass


class DocumentResourceProvider(ResourceProvider):
    """Exposes every document in a store as ``document://<id>``."""

    mime_type = "text/plain"

    def __init__(self, store: DocumentStore):
        self.store = store

    def list_resources(self) -> List[ResourceDescriptor]:
        return [
            ResourceDescriptor(
                uri=doc.uri,
                name=doc.title,
                description=f"Document by {doc.author} - Tags: {', '.join(doc.tags)}",
                mime_type=self.mime_type,
            )
            for doc in self.store.all()
        ]

    def read_resource(self, uri: str) -> dict:
        if not uri.startswith(DOCUMENT_URI_SCHEME):
            raise ResourceNotFoundError(f"Invalid document URI: {uri}", uri)

        document_id = uri[len(DOCUMENT_URI_SCHEME):]
        document = self.store.get(document_id)
        if document is None:
            raise ResourceNotFoundError(f"Document not found: {document_id}", uri)

        return {
            "contents": [
                {"uri": uri, "mimeType": self.mime_type, "text": document.content},
            ],
        }
