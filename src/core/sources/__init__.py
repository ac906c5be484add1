"""Byte sources: file-backed and in-memory chunk readers."""

from .byte_source import ByteSource, FileByteSource, MemoryByteSource

__all__ = ["ByteSource", "FileByteSource", "MemoryByteSource"]
