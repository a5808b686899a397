"""
Bounded window over a parent byte stream.

A window exposes ``length`` bytes of its parent, starting at the parent's
position when the window is created. All reads, writes and seeks stay inside
that range. Closing the window either closes the parent or moves the parent
past the end of the window, so several windows can be laid back to back over
one shared stream (length-prefixed records, packed uploads) without the caller
tracking offsets by hand.

The window keeps its own cursor in step with the parent's. Nobody else may use
the parent while a window over it is open.
"""

import io
from typing import Optional, Protocol, runtime_checkable

from ...core.exceptions import (
    InvalidStreamArgumentError,
    StreamDisposedError,
    StreamNotSupportedError,
    StreamOutOfRangeError,
    StreamOverflowError,
)
from ...core.logging import get_logger

logger = get_logger(__name__)

# Chunk size used when draining or padding the parent on close.
ADVANCE_CHUNK_SIZE = 4096


@runtime_checkable
class ByteStream(Protocol):
    """Byte stream capabilities a window needs from its parent and offers itself."""

    def read(self, size: int = -1) -> bytes: ...

    def write(self, data) -> Optional[int]: ...

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int: ...

    def tell(self) -> int: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...

    def readable(self) -> bool: ...

    def writable(self) -> bool: ...

    def seekable(self) -> bool: ...


class BoundedWindowStream:
    """
    Fixed-length window onto a parent stream.

    Args:
        parent: Stream to delegate I/O to
        length: Window size in bytes; ``None`` takes every byte left in the
            parent from its current position
        closes_parent: Close the parent when the window is closed instead of
            advancing it past the window

    The ``throw_on_overflow`` attribute (default ``True``) decides whether a
    write crossing the end of the window raises or is truncated to fit.
    """

    def __init__(
        self,
        parent: ByteStream,
        length: Optional[int] = None,
        closes_parent: bool = False,
    ):
        if parent is None:
            raise InvalidStreamArgumentError("A parent stream is required")
        if not isinstance(parent, ByteStream):
            raise InvalidStreamArgumentError(
                f"Parent must be a byte stream, got {type(parent).__name__}"
            )

        if length is None:
            length = self._remaining_in(parent)
        if length < 0:
            raise InvalidStreamArgumentError(f"Window length cannot be negative: {length}")

        self._parent: Optional[ByteStream] = parent
        self._length = length
        self._closes_parent = closes_parent
        self._position = 0
        self.throw_on_overflow = True

    @classmethod
    def wrap(
        cls,
        parent: ByteStream,
        length: Optional[int] = None,
        closes_parent: bool = False,
    ) -> "BoundedWindowStream":
        """Open a window over ``parent``; same arguments as the constructor."""
        return cls(parent, length, closes_parent)

    @staticmethod
    def _remaining_in(parent: ByteStream) -> int:
        """Number of bytes between the parent's position and its end."""
        if not parent.seekable():
            raise StreamNotSupportedError(
                "Cannot infer the window length: parent stream does not report its length"
            )

        start = parent.tell()
        end = parent.seek(0, io.SEEK_END)
        parent.seek(start, io.SEEK_SET)
        return end - start

    def _checked_parent(self) -> ByteStream:
        if self._parent is None:
            raise StreamDisposedError(f"{type(self).__name__} is closed")
        return self._parent

    # Capabilities

    def readable(self) -> bool:
        return self._parent is not None and self._parent.readable()

    def writable(self) -> bool:
        return self._parent is not None and self._parent.writable()

    def seekable(self) -> bool:
        return self._parent is not None and self._parent.seekable()

    @property
    def closed(self) -> bool:
        return self._parent is None

    @property
    def closes_parent(self) -> bool:
        return self._closes_parent

    # Size and position

    @property
    def length(self) -> int:
        return self._length

    def __len__(self) -> int:
        return self._length

    @property
    def position(self) -> int:
        return self._position

    @position.setter
    def position(self, value: int) -> None:
        parent = self._checked_parent()
        if not parent.seekable():
            raise StreamNotSupportedError("Cannot seek on this window: parent stream is not seekable")
        # Upper bound is strict: the end of the window itself is not addressable.
        if value < 0 or value >= self._length:
            raise StreamOutOfRangeError(
                f"Cannot seek outside of the window bounds [0, {self._length}): {value}"
            )

        parent.seek(value - self._position, io.SEEK_CUR)
        self._position = value

    def tell(self) -> int:
        self._checked_parent()
        return self._position

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """
        Move the window cursor and the parent with it.

        Args:
            offset: Offset relative to ``whence``
            whence: ``io.SEEK_SET``, ``io.SEEK_CUR`` or ``io.SEEK_END``

        Returns:
            The new position inside the window

        Raises:
            StreamNotSupportedError: If the parent is not seekable
            StreamOutOfRangeError: If the target is outside ``[0, length)``
        """
        parent = self._checked_parent()
        if not parent.seekable():
            raise StreamNotSupportedError("Cannot seek on this window: parent stream is not seekable")

        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self._position + offset
        elif whence == io.SEEK_END:
            target = self._length + offset
        else:
            raise InvalidStreamArgumentError(f"Unknown seek origin: {whence}")

        self.position = target
        return self._position

    def truncate(self, size: Optional[int] = None) -> int:
        self._checked_parent()
        raise StreamNotSupportedError("The length of a window cannot be changed")

    # I/O

    def read(self, size: Optional[int] = -1) -> bytes:
        """
        Read up to ``size`` bytes, never past the end of the window.

        Returns an empty bytes object once the window is exhausted, without
        touching the parent.
        """
        parent = self._checked_parent()

        remaining = self._length - self._position
        if remaining <= 0:
            return b""

        if size is None or size < 0 or size > remaining:
            size = remaining

        data = parent.read(size)
        if not data:
            return b""

        self._position += len(data)
        return data

    def readall(self) -> bytes:
        return self.read(-1)

    def readinto(self, buffer) -> int:
        view = memoryview(buffer).cast("B")
        data = self.read(len(view))
        view[:len(data)] = data
        return len(data)

    def read_byte(self) -> Optional[int]:
        """Read a single byte; ``None`` at the end of the window."""
        data = self.read(1)
        return data[0] if data else None

    def write(self, data) -> int:
        """
        Write ``data`` at the current position.

        Raises:
            StreamNotSupportedError: If the parent is not writable
            StreamOverflowError: If ``data`` does not fit in the window and
                ``throw_on_overflow`` is set
        """
        parent = self._checked_parent()
        if not parent.writable():
            raise StreamNotSupportedError("Cannot write to this window: parent stream is not writable")

        view = memoryview(data).cast("B")
        count = len(view)
        remaining = self._length - self._position
        if count > remaining:
            if self.throw_on_overflow:
                raise StreamOverflowError(
                    f"Cannot write {count} bytes outside the limits of this window "
                    f"({remaining} bytes left)"
                )
            count = remaining
            view = view[:count]

        written = parent.write(view)
        if written is None:
            written = count

        self._position += written
        return written

    def flush(self) -> None:
        self._checked_parent().flush()

    # Lifecycle

    def close(self) -> None:
        """
        Release the window.

        With ``closes_parent`` the parent is closed. Otherwise the parent is
        moved past whatever is left of the window: by seeking if it can, by
        reading and discarding if it is readable, or by writing zeros if it is
        only writable. Closing twice is a no-op.
        """
        parent, self._parent = self._parent, None
        if parent is None:
            return

        if self._closes_parent:
            parent.close()
            return

        remaining = self._length - self._position
        if remaining > 0:
            self._advance_parent(parent, remaining)

    @staticmethod
    def _advance_parent(parent: ByteStream, remaining: int) -> None:
        if parent.seekable():
            parent.seek(remaining, io.SEEK_CUR)
            logger.debug(f"Skipped {remaining} unread window bytes by seeking the parent")

        elif parent.readable():
            drained = 0
            while drained < remaining:
                chunk = parent.read(min(remaining - drained, ADVANCE_CHUNK_SIZE))
                if not chunk:
                    break
                drained += len(chunk)
            logger.debug(f"Drained {drained} of {remaining} unread window bytes from the parent")

        elif parent.writable():
            padding = bytes(min(remaining, ADVANCE_CHUNK_SIZE))
            left = remaining
            while left > 0:
                count = min(left, len(padding))
                written = parent.write(padding[:count])
                left -= written or count
            logger.debug(f"Padded {remaining} unwritten window bytes with zeros")

    def __enter__(self) -> "BoundedWindowStream":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"BoundedWindowStream(length={self._length}, position={self._position}, "
            f"closed={self.closed})"
        )
