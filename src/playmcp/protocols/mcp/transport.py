"""MCP server transports — the byte streams the server reads and writes.

Each transport satisfies the :class:`ServerTransport` protocol, providing
``open``, ``read``, ``write``, and ``close`` methods. ``read`` returns decoded
text chunks with no framing applied; an empty string means EOF.
"""

from __future__ import annotations

import asyncio
import codecs
import io
import os
import stat
import sys
from typing import Protocol, TextIO, runtime_checkable

DEFAULT_CHUNK_SIZE = 65536


@runtime_checkable
class ServerTransport(Protocol):
    """Abstract duplex text stream for a JSON-RPC server."""

    async def open(self) -> None: ...
    async def read(self) -> str: ...
    def write(self, line: str) -> None: ...
    async def close(self) -> None: ...


class StreamTransport:
    """Reads from an :class:`asyncio.StreamReader`, writes to a text stream.

    Input bytes are decoded as UTF-8 incrementally, so a multi-byte character
    split across two reads is not corrupted.
    """

    def __init__(
        self,
        reader: asyncio.StreamReader | None,
        output: TextIO,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._reader = reader
        self._output = output
        self._chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    async def open(self) -> None:
        """Nothing to open; the reader is supplied by the caller."""

    async def read(self) -> str:
        """Return the next decoded chunk, or ``""`` at EOF."""
        while True:
            data = await self._read_bytes()
            if not data:
                return self._decoder.decode(b"", final=True)
            text = self._decoder.decode(data)
            # A lone partial code point decodes to "" and must not look like EOF.
            if text:
                return text

    async def _read_bytes(self) -> bytes:
        if self._reader is None:
            msg = "Transport not connected"
            raise RuntimeError(msg)
        return await self._reader.read(self._chunk_size)

    def write(self, line: str) -> None:
        """Write one protocol line and flush it."""
        self._output.write(line)
        self._output.flush()

    async def close(self) -> None:
        self._reader = None


class StdioServerTransport(StreamTransport):
    """Serves over the process's stdin/stdout.

    When stdin is a pipe, socket or tty it is attached to the running event
    loop with :meth:`asyncio.loop.connect_read_pipe`. A regular file (``serve
    < requests.jsonl``) cannot be registered with the loop, so it is read in a
    worker thread instead. stdout is switched to UTF-8 and must carry protocol
    lines only; diagnostics go to stderr.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        super().__init__(None, stdout or sys.stdout, chunk_size=chunk_size)
        self._stdin = stdin or sys.stdin
        self._pipe: asyncio.ReadTransport | None = None
        self._file: io.BufferedIOBase | None = None

    async def open(self) -> None:
        """Attach stdin for reading and make stdout write UTF-8."""
        if isinstance(self._output, io.TextIOWrapper):
            self._output.reconfigure(encoding="utf-8")

        if _is_regular_file(self._stdin):
            self._file = getattr(self._stdin, "buffer", self._stdin)
            return

        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=self._chunk_size)
        protocol = asyncio.StreamReaderProtocol(reader)
        self._pipe, _ = await loop.connect_read_pipe(lambda: protocol, self._stdin)
        self._reader = reader

    async def _read_bytes(self) -> bytes:
        if self._file is not None:
            return await asyncio.to_thread(self._file.read1, self._chunk_size)
        return await super()._read_bytes()

    async def close(self) -> None:
        if self._pipe is not None:
            self._pipe.close()
            self._pipe = None
        self._file = None
        await super().close()


def _is_regular_file(stream: TextIO) -> bool:
    try:
        return stat.S_ISREG(os.fstat(stream.fileno()).st_mode)
    except (OSError, ValueError):
        return False
