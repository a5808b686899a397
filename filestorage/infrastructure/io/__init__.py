"""
Stream helpers shared by the storage backends.
"""

from .substream import BoundedWindowStream, ByteStream
from .framing import iter_frames, read_frames, reserve_frame, write_frame

__all__ = [
    "BoundedWindowStream",
    "ByteStream",
    "iter_frames",
    "read_frames",
    "reserve_frame",
    "write_frame",
]
