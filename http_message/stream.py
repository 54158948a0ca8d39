# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""In-memory message body stream.

Provides the ``StreamInterface`` protocol that message bodies must satisfy and
``BoundedMemoryStream``, a seekable read/write stream over a single ``str``
buffer.  The stream is the only mutable object in the package; it has a single
owner and performs no locking.

Once ``close()`` or ``detach()`` has been called the stream is terminally
closed and every other operation raises ``StreamClosedError``.
"""

from __future__ import annotations

import io
import logging
from types import TracebackType
from typing import Any, Protocol, runtime_checkable

from http_message._debug import fmt_buffer, stream_logger
from http_message.errors import InvalidArgument, StreamClosedError, describe_type

__all__ = ["BoundedMemoryStream", "StreamInterface"]

_WHENCE = frozenset({io.SEEK_SET, io.SEEK_CUR, io.SEEK_END})


# ---------------------------------------------------------------------------
# StreamInterface protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class StreamInterface(Protocol):
    """Capability set required of a message body."""

    def read(self, length: int) -> str:
        """Read up to *length* characters from the cursor."""
        ...

    def write(self, data: str) -> int:
        """Write *data* at the cursor and return the number of characters written."""
        ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Move the cursor."""
        ...

    def tell(self) -> int:
        """Current cursor position."""
        ...

    def rewind(self) -> None:
        """Seek to the start."""
        ...

    def eof(self) -> bool:
        """Whether the cursor is at the end of the stream."""
        ...

    def get_size(self) -> int | None:
        """Stream size, or ``None`` if unknown."""
        ...

    def get_contents(self) -> str:
        """Remaining contents from the cursor."""
        ...

    def get_metadata(self, key: str | None = None) -> Any:
        """Stream metadata."""
        ...

    def readable(self) -> bool:
        """Whether the stream can be read."""
        ...

    def writable(self) -> bool:
        """Whether the stream can be written."""
        ...

    def seekable(self) -> bool:
        """Whether the stream can be repositioned."""
        ...

    def close(self) -> None:
        """Release the underlying buffer."""
        ...

    def detach(self) -> Any:
        """Release and return the underlying buffer."""
        ...


# ---------------------------------------------------------------------------
# BoundedMemoryStream
# ---------------------------------------------------------------------------


class BoundedMemoryStream:
    """Readable, writable, seekable stream over an in-memory string.

    Writes overwrite from the cursor and extend the buffer only when they run
    past its end.  The cursor always satisfies ``0 <= tell() <= get_size()``;
    seeking outside that range is rejected.

    Supports context manager protocol; the stream is closed on exit.
    """

    __slots__ = ("_buffer", "_cursor")

    def __init__(self, initial: str = "") -> None:
        """Initialize with *initial* as the buffer and the cursor at 0."""
        if not isinstance(initial, str):
            raise InvalidArgument.create(1, "initial", "str", describe_type(initial))
        self._buffer: str | None = initial
        self._cursor = 0

    @classmethod
    def from_string(cls, initial: str) -> BoundedMemoryStream:
        """Create a stream holding *initial*, positioned at the start."""
        return cls(initial)

    def _open_buffer(self) -> str:
        if self._buffer is None:
            raise StreamClosedError("Stream is closed")
        return self._buffer

    # -- reading -------------------------------------------------------------

    def read(self, length: int) -> str:
        """Read up to *length* characters and advance the cursor.

        Fewer characters are returned at the end of the buffer.

        Raises:
            InvalidArgument: If *length* is not an ``int`` or is negative.
            StreamClosedError: If the stream is closed.

        """
        buffer = self._open_buffer()
        if not isinstance(length, int) or isinstance(length, bool):
            raise InvalidArgument.create(1, "length", "int", describe_type(length))
        if length < 0:
            raise InvalidArgument(f"Argument #1 (length) must be >= 0, got {length}")
        chunk = buffer[self._cursor : self._cursor + length]
        self._cursor += len(chunk)
        return chunk

    def get_contents(self) -> str:
        """Return everything from the cursor to the end and move the cursor there."""
        buffer = self._open_buffer()
        chunk = buffer[self._cursor :]
        self._cursor = len(buffer)
        return chunk

    # -- writing -------------------------------------------------------------

    def write(self, data: str) -> int:
        """Overwrite the buffer from the cursor with *data*.

        The buffer grows when the write runs past its end.

        Returns:
            Number of characters written.

        Raises:
            InvalidArgument: If *data* is not a ``str``.
            StreamClosedError: If the stream is closed.

        """
        buffer = self._open_buffer()
        if not isinstance(data, str):
            raise InvalidArgument.create(1, "data", "str", describe_type(data))
        end = self._cursor + len(data)
        self._buffer = buffer[: self._cursor] + data + buffer[end:]
        self._cursor = end
        return len(data)

    # -- positioning ---------------------------------------------------------

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """Reposition the cursor.

        Args:
            offset: Offset relative to *whence*.
            whence: ``io.SEEK_SET``, ``io.SEEK_CUR`` or ``io.SEEK_END``.

        Returns:
            The new cursor position.

        Raises:
            InvalidArgument: For a non-``int`` offset, an unsupported
                *whence*, or a resulting position outside ``0..size``.
            StreamClosedError: If the stream is closed.

        """
        buffer = self._open_buffer()
        if not isinstance(offset, int) or isinstance(offset, bool):
            raise InvalidArgument.create(1, "offset", "int", describe_type(offset))
        if not isinstance(whence, int) or isinstance(whence, bool) or whence not in _WHENCE:
            raise InvalidArgument(f"Argument #2 (whence) must be SEEK_SET, SEEK_CUR or SEEK_END, got {whence!r}")
        if whence == io.SEEK_SET:
            position = offset
        elif whence == io.SEEK_CUR:
            position = self._cursor + offset
        else:
            position = len(buffer) + offset
        if position < 0 or position > len(buffer):
            raise InvalidArgument(f"Seek position {position} is outside the stream (size {len(buffer)})")
        self._cursor = position
        return position

    def tell(self) -> int:
        """Return the cursor position."""
        self._open_buffer()
        return self._cursor

    def rewind(self) -> None:
        """Seek to the start of the stream."""
        self.seek(0)

    def eof(self) -> bool:
        """Return ``True`` when the cursor is at the end of the buffer."""
        return self._cursor == len(self._open_buffer())

    def get_size(self) -> int:
        """Return the buffer length."""
        return len(self._open_buffer())

    # -- capabilities --------------------------------------------------------

    def readable(self) -> bool:
        """Always ``True`` while open."""
        self._open_buffer()
        return True

    def writable(self) -> bool:
        """Always ``True`` while open."""
        self._open_buffer()
        return True

    def seekable(self) -> bool:
        """Always ``True`` while open."""
        self._open_buffer()
        return True

    def get_metadata(self, key: str | None = None) -> dict[str, Any] | None:
        """Return stream metadata.

        No metadata is tracked: an empty mapping is returned without a key,
        and ``None`` for any key.
        """
        self._open_buffer()
        if key is None:
            return {}
        if not isinstance(key, str):
            raise InvalidArgument.create(1, "key", "str|None", describe_type(key))
        return None

    # -- lifecycle -----------------------------------------------------------

    @property
    def closed(self) -> bool:
        """Whether the buffer has been released."""
        return self._buffer is None

    def close(self) -> None:
        """Release the buffer.  Closing twice is a no-op."""
        self.detach()

    def detach(self) -> str | None:
        """Release the buffer and return its final contents.

        Returns:
            The buffer, or ``None`` if the stream was already closed.

        """
        buffer, self._buffer = self._buffer, None
        self._cursor = 0
        if buffer is not None and stream_logger.isEnabledFor(logging.DEBUG):
            stream_logger.debug("Stream released: %s", fmt_buffer(buffer))
        return buffer

    def __enter__(self) -> BoundedMemoryStream:
        """Enter the context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the stream on exit."""
        self.close()

    def __str__(self) -> str:
        """Return the whole buffer regardless of the cursor position."""
        return self._open_buffer()

    def __repr__(self) -> str:
        """Return a debug representation."""
        if self._buffer is None:
            return "BoundedMemoryStream(closed)"
        return f"BoundedMemoryStream({fmt_buffer(self._buffer)}, cursor={self._cursor})"
