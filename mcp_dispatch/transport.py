"""
MCP Transport layer implementations.

Messages are newline-delimited JSON: one JSON-RPC message per line, no
other framing.
"""

import json
import sys
from abc import ABC, abstractmethod
from typing import Any, Optional

from .errors import MessageParseError, TransportError


class Transport(ABC):
    """Abstract base class for MCP transports."""

    @abstractmethod
    async def send(self, message: dict) -> None:
        """Send a message."""
        pass

    @abstractmethod
    async def receive(self) -> Optional[Any]:
        """Receive a message. Returns None on EOF/close."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the transport."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class NewlineTransport(Transport):
    """
    Transport over a pair of text streams, stdin/stdout by default.

    ``receive`` skips blank lines, raises MessageParseError for a line that
    is not JSON and TransportError when the stream itself fails.
    """

    def __init__(
        self,
        input_stream=None,
        output_stream=None,
    ):
        self.input = input_stream or sys.stdin
        self.output = output_stream or sys.stdout
        self._closed = False

    async def send(self, message: dict) -> None:
        """Write one message followed by a newline."""
        if self._closed:
            raise TransportError("Transport is closed")

        content = json.dumps(message)

        try:
            self.output.write(content + "\n")
            self.output.flush()
        except (OSError, ValueError) as e:
            raise TransportError(f"Failed to send: {e}") from e

    async def receive(self) -> Optional[Any]:
        """Read the next non-blank line and parse it."""
        if self._closed:
            return None

        while True:
            try:
                line = self.input.readline()
            except (OSError, ValueError) as e:
                raise TransportError(f"Failed to read: {e}") from e

            if not line:
                return None  # EOF
            if line.strip():
                break

        try:
            return json.loads(line)
        except ValueError as e:
            raise MessageParseError(f"Invalid JSON: {e}") from e

    async def close(self) -> None:
        """Close the transport. The streams are left open."""
        self._closed = True
