"""Shared error codes and exceptions for the counting engine and CLI."""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    CONFIG_ERROR = "CONFIG_ERROR"
    USAGE_ERROR = "USAGE_ERROR"
    IO_ERROR = "IO_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    TRUNCATED_INPUT = "TRUNCATED_INPUT"
    STATE_ERROR = "STATE_ERROR"


class BackendError(RuntimeError):
    """Exception carrying a structured error code for the CLI/GUI."""

    def __init__(self, code: ErrorCode, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.code = code
        self.context = context or {}

    def __str__(self) -> str:  # pragma: no cover - formatting sugar
        base = super().__str__()
        return f"[{self.code.value}] {base}" if base else self.code.value


class SourceUnavailableError(BackendError):
    """The byte source could not be opened, read or measured."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(ErrorCode.IO_ERROR, message, context={"path": path} if path else None)
        self.path = path


class MalformedSequenceError(BackendError):
    """Bytes that do not encode a Unicode scalar value in the declared encoding."""

    def __init__(self, *, offset: int, data: bytes, encoding: str, reason: str) -> None:
        super().__init__(
            ErrorCode.DECODE_ERROR,
            f"Malformed {encoding} sequence {data.hex(' ')} at byte {offset}: {reason}",
            context={"offset": offset, "bytes": data.hex(), "encoding": encoding},
        )
        self.offset = offset
        self.data = data


class TruncatedInputError(BackendError):
    """End-of-stream reached while a multi-byte sequence was still incomplete."""

    def __init__(self, *, offset: int, pending: bytes) -> None:
        super().__init__(
            ErrorCode.TRUNCATED_INPUT,
            f"Input ends inside a multi-byte sequence {pending.hex(' ')} starting at byte {offset}",
            context={"offset": offset, "bytes": pending.hex()},
        )
        self.offset = offset
        self.pending = pending
