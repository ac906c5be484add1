"""Backend workflow shared by the CLI and the DearPyGui front-end."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Optional

from common.errors import BackendError
from common.models import DEFAULT_CHUNK_SIZE, CountProgress, CountReport, Encoding
from core.counting import count_bytes, count_characters
from core.sources import FileByteSource

ProgressCallback = Optional[Callable[[CountProgress], None]]


def count_file(
    path: Path,
    *,
    want_bytes: bool = True,
    want_chars: bool = True,
    encoding: Encoding | str = Encoding.UTF8,
    keep_bom: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    progress_callback: ProgressCallback = None,
    on_report_update: Optional[Callable[[CountReport], None]] = None,
) -> CountReport:
    """Count bytes and/or characters of one file.

    Backend errors end up on the report instead of propagating, so a byte
    count survives a failed character count. The byte count is taken first,
    and ``on_report_update`` sees it before character counting starts.
    """

    path = Path(path)
    report = CountReport(file_path=path)
    encoding = Encoding.parse(encoding)
    try:
        with FileByteSource(path) as source:
            if want_bytes:
                start = time.perf_counter()
                try:
                    report.byte_count = count_bytes(source)
                except BackendError as exc:
                    _emit(progress_callback, path, "bytes", start, error=exc)
                    raise
                _emit(progress_callback, path, "bytes", start, value=report.byte_count)
                if on_report_update:
                    on_report_update(report)
            if want_chars:
                start = time.perf_counter()
                try:
                    report.char_count = count_characters(
                        source, encoding, keep_bom, chunk_size=chunk_size
                    )
                except BackendError as exc:
                    _emit(progress_callback, path, "chars", start, error=exc, bytes_read=source.bytes_read)
                    raise
                _emit(
                    progress_callback,
                    path,
                    "chars",
                    start,
                    value=report.char_count,
                    bytes_read=source.bytes_read,
                )
    except BackendError as exc:
        report.error = exc
    return report


def _emit(
    callback: ProgressCallback,
    path: Path,
    operation: str,
    start: float,
    *,
    value: Optional[int] = None,
    error: Optional[BackendError] = None,
    bytes_read: Optional[int] = None,
) -> None:
    if not callback:
        return
    callback(
        CountProgress(
            file_path=path,
            operation=operation,
            status="failed" if error else "ok",
            value=value,
            error_code=error.code.value if error else None,
            bytes_read=bytes_read,
            elapsed_seconds=time.perf_counter() - start,
        )
    )
