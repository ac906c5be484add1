"""Data models shared across UI, core engine, and progress logging."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

DEFAULT_CHUNK_SIZE = 4096


class Encoding(str, Enum):
    """Closed set of encodings the character counter understands."""

    UTF8 = "utf8"
    ASCII = "ascii"

    @classmethod
    def parse(cls, value: "str | Encoding") -> "Encoding":
        if isinstance(value, Encoding):
            return value
        normalized = value.strip().lower().replace("-", "").replace("_", "")
        try:
            return cls(normalized)
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValueError(f"Unsupported encoding '{value}'. Allowed: {allowed}") from None


@dataclass(slots=True)
class GlobalSettings:
    """Global knobs that apply across profiles."""

    encoding: Encoding = Encoding.UTF8
    keep_bom: bool = False


@dataclass(slots=True)
class ProfileSettings:
    """Profile-specific read tuning."""

    description: str
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass(slots=True)
class RuntimeConfig:
    """Resolved configuration for a single run."""

    global_settings: GlobalSettings
    profile: ProfileSettings


@dataclass(slots=True)
class CountProgress:
    """Progress payload reported once per finished count operation."""

    file_path: Path
    operation: str  # bytes | chars
    status: str  # ok | failed
    value: Optional[int] = None
    error_code: Optional[str] = None
    bytes_read: Optional[int] = None
    elapsed_seconds: Optional[float] = None


@dataclass(slots=True)
class CountReport:
    """Outcome of counting a single file.

    ``byte_count``/``char_count`` stay ``None`` when the mode was not requested
    or failed; a failure is described by ``error``.
    """

    file_path: Path
    byte_count: Optional[int] = None
    char_count: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
