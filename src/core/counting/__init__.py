"""Streaming character counting: decode sessions and file counters."""

from .counter import CharacterCounter, count_bytes, count_characters
from .session import DecodeSession
from .utf8 import UTF8_BOM

__all__ = ["CharacterCounter", "DecodeSession", "UTF8_BOM", "count_bytes", "count_characters"]
