"""Decode session: the state a character count carries from one chunk to the next."""
from __future__ import annotations

from common.errors import (
    BackendError,
    ErrorCode,
    MalformedSequenceError,
    TruncatedInputError,
)
from common.models import Encoding
from .utf8 import UTF8_BOM, incomplete_tail_length, is_valid_prefix


class DecodeSession:
    """Accumulates a codepoint count over chunks fed in arrival order.

    ``pending_tail`` holds the start of a multi-byte sequence cut off by a chunk
    boundary. While ``is_first_chunk`` is set the BOM decision is still open;
    it is made on the first three bytes of the stream, however they were chunked.
    A session is single-use: any error or :meth:`finish` closes it.
    """

    def __init__(self, encoding: Encoding | str = Encoding.UTF8, *, keep_bom: bool = False) -> None:
        self.encoding = Encoding.parse(encoding)
        self.keep_bom = keep_bom
        self.pending_tail = b""
        self.codepoint_count = 0
        self.is_first_chunk = True
        self.bom_skipped = False
        self.bytes_fed = 0
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def feed(self, chunk: bytes) -> int:
        """Count the codepoints completed by ``chunk`` and return how many were added."""

        self._ensure_open()
        if not chunk:
            return 0
        origin = self.bytes_fed - len(self.pending_tail)
        buffer = self.pending_tail + bytes(chunk)
        self.pending_tail = b""
        self.bytes_fed += len(chunk)
        try:
            if self.encoding is Encoding.UTF8:
                added = self._feed_utf8(buffer, origin)
            elif self.encoding is Encoding.ASCII:
                added = self._feed_ascii(buffer, origin)
            else:  # pragma: no cover - Encoding is closed
                raise BackendError(ErrorCode.STATE_ERROR, f"No decoder for {self.encoding!r}")
        except BackendError:
            self._closed = True
            raise
        self.codepoint_count += added
        return added

    def finish(self) -> int:
        """Close the session at end-of-stream and return the total count."""

        self._ensure_open()
        self._closed = True
        self.is_first_chunk = False
        if self.pending_tail:
            raise TruncatedInputError(
                offset=self.bytes_fed - len(self.pending_tail),
                pending=self.pending_tail,
            )
        return self.codepoint_count

    def _feed_utf8(self, buffer: bytes, origin: int) -> int:
        start = 0
        if self.is_first_chunk:
            if len(buffer) < len(UTF8_BOM) and UTF8_BOM.startswith(buffer):
                self.pending_tail = buffer
                return 0
            self.is_first_chunk = False
            if buffer.startswith(UTF8_BOM) and not self.keep_bom:
                start = len(UTF8_BOM)
                self.bom_skipped = True

        split = len(buffer) - incomplete_tail_length(buffer, start)
        counted = _count_decoded(buffer[start:split], "utf-8", origin + start, self.encoding)
        tail = buffer[split:]
        if not is_valid_prefix(tail):
            raise MalformedSequenceError(
                offset=origin + split,
                data=tail,
                encoding=self.encoding.value,
                reason="invalid continuation byte",
            )
        self.pending_tail = tail
        return counted

    def _feed_ascii(self, buffer: bytes, origin: int) -> int:
        self.is_first_chunk = False
        return _count_decoded(buffer, "ascii", origin, self.encoding)

    def _ensure_open(self) -> None:
        if self._closed:
            raise BackendError(ErrorCode.STATE_ERROR, "Decode session is already closed")


def _count_decoded(data: bytes, codec: str, offset: int, encoding: Encoding) -> int:
    if not data:
        return 0
    try:
        return len(data.decode(codec))
    except UnicodeDecodeError as exc:
        raise MalformedSequenceError(
            offset=offset + exc.start,
            data=data[exc.start : exc.end],
            encoding=encoding.value,
            reason=exc.reason,
        ) from None
