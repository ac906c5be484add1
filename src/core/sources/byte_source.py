"""Chunked byte sources feeding the counting engine."""
from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Protocol, Sequence

from common.errors import SourceUnavailableError


class ByteSource(Protocol):
    """Anything that hands out bounded chunks and knows its total length."""

    def read_chunk(self, max_bytes: int) -> bytes:
        ...

    def total_size(self) -> int:
        ...


class FileByteSource:
    """Binary file reader; an empty chunk means end-of-stream, and stays that way."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self.bytes_read = 0
        self._handle: Optional[BinaryIO] = None
        self._exhausted = False

    def open(self) -> "FileByteSource":
        if self._handle is not None:
            return self
        try:
            self._handle = self.path.open("rb")
        except OSError as exc:
            raise SourceUnavailableError(
                f"Failed to open {self.path}: {exc.strerror or exc}", path=str(self.path)
            ) from exc
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "FileByteSource":
        return self.open()

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read_chunk(self, max_bytes: int) -> bytes:
        if max_bytes <= 0:
            raise ValueError("max_bytes must be greater than zero")
        if self._exhausted:
            return b""
        handle = self._require_handle()
        try:
            chunk = handle.read(max_bytes)
        except OSError as exc:
            raise SourceUnavailableError(
                f"Failed to read {self.path}: {exc.strerror or exc}", path=str(self.path)
            ) from exc
        if not chunk:
            self._exhausted = True
            return b""
        self.bytes_read += len(chunk)
        return chunk

    def total_size(self) -> int:
        """Byte length taken from the end-of-stream offset; the read position is kept."""

        handle = self._require_handle()
        try:
            position = handle.tell()
            end = handle.seek(0, os.SEEK_END)
            handle.seek(position)
        except OSError as exc:
            raise SourceUnavailableError(
                f"Failed to get byte count for {self.path}: {exc.strerror or exc}",
                path=str(self.path),
            ) from exc
        return end

    def _require_handle(self) -> BinaryIO:
        if self._handle is None:
            raise SourceUnavailableError(f"{self.path} is not open", path=str(self.path))
        return self._handle


class MemoryByteSource:
    """In-memory source with optionally scripted chunk sizes.

    ``chunk_sizes`` caps the length of successive reads; once it runs out,
    reads are only bounded by ``max_bytes``.
    """

    def __init__(self, data: bytes, chunk_sizes: Optional[Sequence[int]] = None) -> None:
        sizes = list(chunk_sizes or [])
        if any(size <= 0 for size in sizes):
            raise ValueError("chunk sizes must be greater than zero")
        self.data = bytes(data)
        self.reads = 0
        self._offset = 0
        self._sizes: Iterator[int] = iter(sizes)

    def read_chunk(self, max_bytes: int) -> bytes:
        if max_bytes <= 0:
            raise ValueError("max_bytes must be greater than zero")
        if self._offset >= len(self.data):
            return b""
        limit = min(max_bytes, next(self._sizes, max_bytes))
        chunk = self.data[self._offset : self._offset + limit]
        self._offset += len(chunk)
        self.reads += 1
        return chunk

    def total_size(self) -> int:
        return len(self.data)
