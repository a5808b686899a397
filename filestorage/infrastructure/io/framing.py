"""
Length-prefixed records laid out back to back in one stream.

Each record is a 4-byte big-endian length followed by that many payload bytes.
Payloads are always accessed through a BoundedWindowStream, so a record that is
only partly read or written still leaves the stream positioned at the next one.
"""

import struct
from contextlib import contextmanager
from typing import Iterator, List

from .substream import BoundedWindowStream, ByteStream
from ...core.exceptions import InvalidStreamArgumentError, StorageError

FRAME_HEADER = struct.Struct(">I")
MAX_FRAME_LENGTH = 2 ** 32 - 1


@contextmanager
def reserve_frame(parent: ByteStream, length: int) -> Iterator[BoundedWindowStream]:
    """
    Write a record header and hand out a window for its payload.

    Closing the window moves the parent to the end of the record whatever the
    caller wrote. Unwritten bytes are zero-padded on forward-only sinks; on
    seekable sinks they are skipped and filled in by the next write.
    """
    if length < 0 or length > MAX_FRAME_LENGTH:
        raise InvalidStreamArgumentError(f"Frame length out of range: {length}")

    parent.write(FRAME_HEADER.pack(length))
    with BoundedWindowStream(parent, length, closes_parent=False) as window:
        yield window


def write_frame(parent: ByteStream, payload: bytes) -> None:
    """Append one record holding ``payload``."""
    with reserve_frame(parent, len(payload)) as window:
        window.write(payload)


def iter_frames(parent: ByteStream) -> Iterator[BoundedWindowStream]:
    """
    Yield a read window for each record until the parent is exhausted.

    A window is closed before the next header is read; keep no reference to it
    past the current iteration.

    Raises:
        StorageError: If the stream ends in the middle of a header
    """
    while True:
        header = parent.read(FRAME_HEADER.size)
        if not header:
            return
        if len(header) < FRAME_HEADER.size:
            raise StorageError(
                f"Truncated frame header: expected {FRAME_HEADER.size} bytes, got {len(header)}"
            )

        (length,) = FRAME_HEADER.unpack(header)
        with BoundedWindowStream(parent, length, closes_parent=False) as window:
            yield window


def read_frames(parent: ByteStream) -> List[bytes]:
    """Read every remaining record payload."""
    return [window.read() for window in iter_frames(parent)]
