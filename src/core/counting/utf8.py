"""UTF-8 sequence helpers used to split chunks at codepoint boundaries."""
from __future__ import annotations

from typing import Dict, Tuple

UTF8_BOM = b"\xef\xbb\xbf"
MAX_SEQUENCE_LENGTH = 4

_CONTINUATION_RANGE = (0x80, 0xBF)
# Lead bytes whose second byte is narrower than the plain continuation range
# (overlong forms, surrogates, values above U+10FFFF).
_SECOND_BYTE_RANGES: Dict[int, Tuple[int, int]] = {
    0xE0: (0xA0, 0xBF),
    0xED: (0x80, 0x9F),
    0xF0: (0x90, 0xBF),
    0xF4: (0x80, 0x8F),
}


def sequence_length(lead: int) -> int:
    """Expected byte length of the sequence started by ``lead``, or 0 if it cannot start one."""

    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def is_continuation(byte: int) -> bool:
    return _CONTINUATION_RANGE[0] <= byte <= _CONTINUATION_RANGE[1]


def is_valid_prefix(data: bytes) -> bool:
    """True when ``data`` is a well-formed sequence or can still be completed into one."""

    if not data:
        return True
    expected = sequence_length(data[0])
    if expected == 0 or len(data) > expected:
        return False
    for index in range(1, len(data)):
        low, high = _CONTINUATION_RANGE
        if index == 1:
            low, high = _SECOND_BYTE_RANGES.get(data[0], _CONTINUATION_RANGE)
        if not low <= data[index] <= high:
            return False
    return True


def incomplete_tail_length(buffer: bytes, start: int = 0) -> int:
    """Number of trailing bytes of ``buffer[start:]`` that begin an unfinished sequence.

    Only the last ``MAX_SEQUENCE_LENGTH - 1`` bytes can hold such a prefix. Invalid
    lead bytes yield 0 so that validation reports them where they occur.
    """

    end = len(buffer)
    for back in range(1, min(MAX_SEQUENCE_LENGTH - 1, end - start) + 1):
        byte = buffer[end - back]
        if is_continuation(byte):
            continue
        return back if sequence_length(byte) > back else 0
    return 0
