"""Tests for mcp_dispatch.transport module."""

import io
import json

import pytest

from mcp_dispatch.errors import MessageParseError, TransportError
from mcp_dispatch.transport import NewlineTransport


class BrokenStream(io.StringIO):
    def readline(self, *args):
        raise OSError("stream broken")

    def write(self, s):
        raise OSError("stream broken")


class TestNewlineTransport:
    @pytest.mark.asyncio
    async def test_send(self):
        output = io.StringIO()
        transport = NewlineTransport(io.StringIO(), output)

        await transport.send({"jsonrpc": "2.0", "id": 1, "result": {}})

        assert output.getvalue().endswith("\n")
        assert output.getvalue().count("\n") == 1
        assert json.loads(output.getvalue()) == {"jsonrpc": "2.0", "id": 1, "result": {}}

    @pytest.mark.asyncio
    async def test_send_escapes_newlines(self):
        output = io.StringIO()
        transport = NewlineTransport(io.StringIO(), output)

        await transport.send({"text": "line1\nline2"})
        assert output.getvalue().count("\n") == 1

    @pytest.mark.asyncio
    async def test_receive(self):
        data = '{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'
        transport = NewlineTransport(io.StringIO(data), io.StringIO())

        message = await transport.receive()
        assert message["method"] == "ping"

    @pytest.mark.asyncio
    async def test_receive_last_line_without_newline(self):
        transport = NewlineTransport(io.StringIO('{"id": 2}'), io.StringIO())
        assert await transport.receive() == {"id": 2}

    @pytest.mark.asyncio
    async def test_receive_skips_blank_lines(self):
        data = '\n   \n{"id": 1}\n'
        transport = NewlineTransport(io.StringIO(data), io.StringIO())
        assert await transport.receive() == {"id": 1}

    @pytest.mark.asyncio
    async def test_receive_eof(self):
        transport = NewlineTransport(io.StringIO(""), io.StringIO())
        assert await transport.receive() is None

    @pytest.mark.asyncio
    async def test_receive_invalid_json(self):
        data = 'not json\n{"id": 1}\n'
        transport = NewlineTransport(io.StringIO(data), io.StringIO())

        with pytest.raises(MessageParseError):
            await transport.receive()
        # The next line is still readable
        assert await transport.receive() == {"id": 1}

    @pytest.mark.asyncio
    async def test_receive_stream_failure(self):
        transport = NewlineTransport(BrokenStream(), io.StringIO())
        with pytest.raises(TransportError):
            await transport.receive()

    @pytest.mark.asyncio
    async def test_send_stream_failure(self):
        transport = NewlineTransport(io.StringIO(), BrokenStream())
        with pytest.raises(TransportError):
            await transport.send({"id": 1})

    @pytest.mark.asyncio
    async def test_close(self):
        transport = NewlineTransport(io.StringIO('{"id": 1}\n'), io.StringIO())
        await transport.close()

        assert await transport.receive() is None
        with pytest.raises(TransportError):
            await transport.send({"id": 1})

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with NewlineTransport(io.StringIO(), io.StringIO()) as transport:
            await transport.send({"id": 1})
        assert transport._closed is True
