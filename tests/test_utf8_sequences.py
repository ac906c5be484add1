from __future__ import annotations

import pytest

from core.counting.utf8 import (
    UTF8_BOM,
    incomplete_tail_length,
    is_continuation,
    is_valid_prefix,
    sequence_length,
)


@pytest.mark.parametrize(
    ("lead", "expected"),
    [
        (0x41, 1),
        (0x7F, 1),
        (0x80, 0),
        (0xC1, 0),
        (0xC2, 2),
        (0xDF, 2),
        (0xE0, 3),
        (0xEF, 3),
        (0xF0, 4),
        (0xF4, 4),
        (0xF5, 0),
        (0xFF, 0),
    ],
)
def test_sequence_length_from_lead_byte(lead: int, expected: int) -> None:
    assert sequence_length(lead) == expected


def test_continuation_range() -> None:
    assert is_continuation(0x80)
    assert is_continuation(0xBF)
    assert not is_continuation(0x7F)
    assert not is_continuation(0xC0)


@pytest.mark.parametrize(
    "data",
    [b"", b"\xc3", b"\xe2\x82", b"\xf0\x9f\x98", b"\xe2\x82\xac", UTF8_BOM[:2]],
)
def test_valid_prefixes(data: bytes) -> None:
    assert is_valid_prefix(data)


@pytest.mark.parametrize(
    "data",
    [
        b"\x80",  # lone continuation
        b"\xe0\x80",  # overlong 3-byte form
        b"\xed\xa0",  # surrogate half
        b"\xf0\x80",  # overlong 4-byte form
        b"\xf4\x90",  # above U+10FFFF
        b"\xc3A",  # lead followed by ASCII
        b"\xc3\xa9\x80",  # longer than the lead allows
    ],
)
def test_invalid_prefixes(data: bytes) -> None:
    assert not is_valid_prefix(data)


def test_incomplete_tail_length_detects_cut_sequences() -> None:
    assert incomplete_tail_length(b"ab\xc3") == 1
    assert incomplete_tail_length(b"a\xe2\x82") == 2
    assert incomplete_tail_length(b"a\xf0\x9f\x98") == 3


def test_incomplete_tail_length_ignores_complete_input() -> None:
    assert incomplete_tail_length(b"abc") == 0
    assert incomplete_tail_length(b"\xc3\xa9") == 0
    assert incomplete_tail_length(b"\xe2\x82\xac") == 0
    assert incomplete_tail_length(b"a\xf0\x9f\x98\x80") == 0
    assert incomplete_tail_length(b"") == 0


def test_incomplete_tail_length_respects_start_offset() -> None:
    assert incomplete_tail_length(UTF8_BOM, start=3) == 0
    assert incomplete_tail_length(UTF8_BOM + b"\xc3", start=3) == 1
