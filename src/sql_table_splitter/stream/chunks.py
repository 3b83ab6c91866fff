"""Fixed-size chunk reading from binary sources."""

from collections.abc import Iterator
from typing import BinaryIO


def iter_chunks(handle: BinaryIO, chunk_size: int) -> Iterator[bytes]:
    """
    Yield successive chunks of at most chunk_size bytes until the source is exhausted.

    Reads strictly forward; errors raised by the handle propagate to the caller.
    """
    if chunk_size <= 0:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")

    while chunk := handle.read(chunk_size):
        yield chunk
