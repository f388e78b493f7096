"""Newline framing for the stdio transport.

One JSON message per line. The framer owns the only accumulation buffer in
the server; a partial trailing line is kept until its newline arrives.
"""

from __future__ import annotations


class LineFramer:
    """Split a stream of text chunks into complete, non-blank lines.

    Usage::

        framer = LineFramer()
        framer.feed('{"a": 1}\\n{"b"')   # -> ['{"a": 1}']
        framer.feed(': 2}\\n')            # -> ['{"b": 2}']
    """

    def __init__(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> str:
        """Text received after the last newline."""
        return self._buffer

    def feed(self, chunk: str) -> list[str]:
        """Append *chunk* and return every line it completed."""
        self._buffer += chunk
        lines: list[str] = []
        while "\n" in self._buffer:
            line, self._buffer = self._buffer.split("\n", 1)
            if line.strip():
                lines.append(line)
        return lines

    def flush(self) -> list[str]:
        """Return the unterminated remainder as a final line (at EOF)."""
        rest, self._buffer = self._buffer, ""
        return [rest] if rest.strip() else []
