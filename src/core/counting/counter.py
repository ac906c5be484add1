"""Streaming byte and character counting with bounded memory usage."""
from __future__ import annotations

from pathlib import Path

from common.models import DEFAULT_CHUNK_SIZE, Encoding
from core.sources import ByteSource, FileByteSource
from .session import DecodeSession


def count_characters(
    source: ByteSource,
    encoding: Encoding | str = Encoding.UTF8,
    keep_bom: bool = False,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Count codepoints in ``source``, reading at most ``chunk_size`` bytes at a time.

    Raises ``MalformedSequenceError`` or ``TruncatedInputError``; no partial
    count is returned on failure.
    """

    if chunk_size <= 0:
        raise ValueError("chunk_size must be greater than zero")
    session = DecodeSession(encoding, keep_bom=keep_bom)
    while True:
        chunk = source.read_chunk(chunk_size)
        if not chunk:
            break
        session.feed(chunk)
    return session.finish()


def count_bytes(source: ByteSource) -> int:
    return source.total_size()


class CharacterCounter:
    """Counts codepoints in a file without materializing it."""

    def __init__(
        self,
        *,
        encoding: Encoding | str = Encoding.UTF8,
        keep_bom: bool = False,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be greater than zero")
        self.encoding = Encoding.parse(encoding)
        self.keep_bom = keep_bom
        self.chunk_size = chunk_size

    def count(self, path: Path) -> int:
        with FileByteSource(path) as source:
            return count_characters(
                source,
                self.encoding,
                self.keep_bom,
                chunk_size=self.chunk_size,
            )
