"""Line-oriented view of an input stream with one line of lookahead."""

from __future__ import annotations

from typing import IO, Iterator, Optional, Union

from rnastruct.core.exceptions import ParseError


class LineStream:
    """Wrap a text or binary stream and hand out lines without terminators.

    Formats need to look at the next line before deciding whether it still
    belongs to the current record; ``peek`` does that without consuming it.
    Byte lines are decoded with `encoding`; undecodable bytes are a ParseError.
    """

    __slots__ = ("_stream", "_encoding", "_pending", "_has_pending", "line_number")

    def __init__(self, stream: IO, encoding: str = "utf-8"):
        self._stream = stream
        self._encoding = encoding
        self._pending: Optional[str] = None
        self._has_pending = False
        self.line_number = 0

    @classmethod
    def wrap(cls, stream: Union["LineStream", IO]) -> "LineStream":
        """Return `stream` itself if it is already a LineStream."""
        if isinstance(stream, cls):
            return stream
        return cls(stream)

    def _pull(self) -> Optional[str]:
        # text streams decode inside readline, so both paths can fail here
        try:
            raw = self._stream.readline()
            if isinstance(raw, bytes):
                raw = raw.decode(self._encoding)
        except UnicodeDecodeError as e:
            raise ParseError(f"undecodable input ({e.reason})", self.line_number + 1) from e
        if not raw:
            return None
        return raw.rstrip("\r\n")

    def peek(self) -> Optional[str]:
        """Next line, or None at end of stream; does not consume it."""
        if not self._has_pending:
            self._pending = self._pull()
            self._has_pending = True
        return self._pending

    def readline(self) -> Optional[str]:
        """Consume and return the next line, or None at end of stream."""
        line = self.peek()
        self._has_pending = False
        self._pending = None
        if line is not None:
            self.line_number += 1
        return line

    def at_eof(self) -> bool:
        return self.peek() is None

    def skip_blank_lines(self) -> None:
        while True:
            line = self.peek()
            if line is None or line.strip():
                return
            self.readline()

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.readline()
            if line is None:
                return
            yield line
