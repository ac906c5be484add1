"""CLI shell: print byte and character counts for a single file."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

from common.config import DEFAULT_PROFILE, load_runtime_config
from common.errors import BackendError, ErrorCode
from common.models import CountReport, Encoding
from common.progress import ProgressLogger
from common.versioning import TOOL_VERSION
from ui.workflow_backend import count_file

PROG = "charwc"

EXIT_OK = 0
EXIT_CODES = {
    ErrorCode.CONFIG_ERROR: 1,
    ErrorCode.USAGE_ERROR: 1,
    ErrorCode.IO_ERROR: 2,
    ErrorCode.DECODE_ERROR: 3,
    ErrorCode.TRUNCATED_INPUT: 3,
    ErrorCode.STATE_ERROR: 4,
}


def exit_code_for(error: BaseException) -> int:
    if isinstance(error, BackendError):
        return EXIT_CODES.get(error.code, 1)
    return 1


def render_byte_count(report: CountReport) -> None:
    if report.byte_count is not None:
        print(f"bytes: {report.byte_count}", flush=True)


def render_char_count(report: CountReport) -> None:
    if report.char_count is not None:
        print(f"chars: {report.char_count}")


def command_count(args: argparse.Namespace) -> int:
    if not args.file:
        raise BackendError(ErrorCode.USAGE_ERROR, "<FILE> is required!")

    runtime = load_runtime_config(
        profile=args.profile,
        config_path=Path(args.config) if args.config else None,
        overrides=build_overrides(args),
    )
    want_bytes, want_chars = args.bytes, args.chars
    if not want_bytes and not want_chars:
        want_bytes = want_chars = True

    progress_logger = ProgressLogger(Path(args.progress_log)) if args.progress_log else None
    report = count_file(
        Path(args.file),
        want_bytes=want_bytes,
        want_chars=want_chars,
        encoding=runtime.global_settings.encoding,
        keep_bom=runtime.global_settings.keep_bom,
        chunk_size=runtime.profile.chunk_size,
        progress_callback=progress_logger.emit if progress_logger else None,
        on_report_update=render_byte_count,
    )
    render_char_count(report)
    if report.error is not None:
        print(f"{PROG}: {args.file}: {report.error}", file=sys.stderr)
        return exit_code_for(report.error)
    return EXIT_OK


def build_overrides(args: argparse.Namespace) -> Dict[str, Dict[str, Any]]:
    """CLI flags win over the config file; unset flags leave it alone."""

    global_overrides: Dict[str, Any] = {}
    if args.encoding is not None:
        global_overrides["encoding"] = args.encoding
    if args.keep_bom:
        global_overrides["keep_bom"] = True
    profile_overrides: Dict[str, Any] = {}
    if args.chunk_size is not None:
        profile_overrides["chunk_size"] = args.chunk_size
    return {"global": global_overrides, "profile": profile_overrides}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Print byte and character counts for FILE. With neither -c nor -m, print both.",
    )
    parser.add_argument("file", metavar="FILE", nargs="?", help="File to count")
    parser.add_argument("-c", "--bytes", action="store_true", help="print the byte count")
    parser.add_argument("-m", "--chars", action="store_true", help="print the character counts")
    parser.add_argument(
        "--encoding",
        choices=[member.value for member in Encoding],
        help="Encoding used for character counts (default: utf8, or the config value)",
    )
    parser.add_argument(
        "--keep-bom",
        action="store_true",
        help="Count a leading UTF-8 byte-order mark as a character",
    )
    parser.add_argument(
        "--profile",
        default=DEFAULT_PROFILE,
        help="Profile from config/defaults.json (e.g., default, large_files)",
    )
    parser.add_argument("--config", help="Path to an alternative configuration JSON")
    parser.add_argument(
        "--chunk-size",
        type=int,
        help="Bytes per read; overrides the profile value",
    )
    parser.add_argument(
        "--progress-log",
        help="Path to JSONL file for structured progress events",
    )
    parser.add_argument("--version", action="version", version=TOOL_VERSION)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return command_count(args)
    except BackendError as exc:
        print(f"{PROG}: {exc}", file=sys.stderr)
        return exit_code_for(exc)


if __name__ == "__main__":
    raise SystemExit(main())
