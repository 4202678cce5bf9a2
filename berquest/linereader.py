"""Line-at-a-time reading from a stream through a fixed-size buffer."""

from __future__ import annotations

from typing import AnyStr, Generic, Iterator, Optional

DEFAULT_BUFFER_SIZE = 42


def _newline_index(data: AnyStr) -> int:
    """Return the index of the first newline in *data*, or -1 if there is none."""
    if isinstance(data, bytes):
        return data.find(b"\n")
    return data.find("\n")


class LineReader(Generic[AnyStr]):
    """Read newline-terminated lines from a text or binary stream.

    Each line keeps its trailing newline; the last line may lack one.
    Data is pulled from the stream *buffer_size* units at a time and
    whatever follows a line is kept for the next call.
    """

    def __init__(self, stream, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {buffer_size}")
        self._stream = stream
        self._buffer_size = buffer_size
        self._pending: Optional[AnyStr] = None

    def readline(self) -> Optional[AnyStr]:
        """Return the next line, or None once the stream is exhausted."""
        pending = self._pending
        while True:
            try:
                chunk = self._stream.read(self._buffer_size)
            except OSError:
                self._pending = None
                raise
            if not chunk:
                break
            pending = chunk if pending is None else pending + chunk
            if _newline_index(chunk) != -1:
                break
        if not pending:
            self._pending = None
            return None
        end = _newline_index(pending)
        if end == -1:
            self._pending = None
            return pending
        line, rest = pending[:end + 1], pending[end + 1:]
        self._pending = rest or None
        return line

    def __iter__(self) -> Iterator[AnyStr]:
        while (line := self.readline()) is not None:
            yield line