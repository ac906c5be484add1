from __future__ import annotations

from pathlib import Path

import pytest

from common.errors import MalformedSequenceError, TruncatedInputError
from common.models import Encoding
from core.counting import UTF8_BOM, CharacterCounter, count_bytes, count_characters
from core.sources import FileByteSource, MemoryByteSource

SAMPLE_TEXT = "aé€\U0001F600b\n" * 3
SAMPLE = SAMPLE_TEXT.encode("utf-8")


def chars(data: bytes, encoding: Encoding = Encoding.UTF8, keep_bom: bool = False, **kwargs) -> int:
    return count_characters(MemoryByteSource(data), encoding, keep_bom, **kwargs)


def test_empty_input_counts_zero() -> None:
    assert chars(b"") == 0
    assert chars(b"", Encoding.ASCII) == 0


def test_emoji_between_ascii_counts_three() -> None:
    assert chars(b"a" + "\U0001F600".encode("utf-8") + b"b") == 3


@pytest.mark.parametrize("encoding", [Encoding.UTF8, Encoding.ASCII])
def test_ascii_input_counts_bytes(encoding: Encoding) -> None:
    data = bytes(range(0x80)) * 40
    assert chars(data, encoding, chunk_size=97) == len(data)


def test_count_invariant_to_every_split_point() -> None:
    expected = len(SAMPLE_TEXT)
    for split in range(1, len(SAMPLE)):
        source = MemoryByteSource(SAMPLE, chunk_sizes=[split])
        assert count_characters(source) == expected, split


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 5, 7, 4096])
def test_count_invariant_to_chunk_size(chunk_size: int) -> None:
    assert chars(SAMPLE, chunk_size=chunk_size) == len(SAMPLE_TEXT)


@pytest.mark.parametrize("chunk_size", [1, 2, 4096])
def test_bom_excluded_by_default(chunk_size: int) -> None:
    assert chars(UTF8_BOM + SAMPLE, chunk_size=chunk_size) == chars(SAMPLE)


@pytest.mark.parametrize("chunk_size", [1, 2, 4096])
def test_bom_counted_when_kept(chunk_size: int) -> None:
    assert chars(UTF8_BOM + SAMPLE, keep_bom=True, chunk_size=chunk_size) == 1 + chars(SAMPLE)


def test_lone_lead_byte_at_end_is_truncated() -> None:
    with pytest.raises(TruncatedInputError) as exc:
        chars(b"\xc2")
    assert exc.value.offset == 0


def test_sequence_cut_by_end_of_stream_is_truncated() -> None:
    data = SAMPLE + "€".encode("utf-8")[:2]
    with pytest.raises(TruncatedInputError) as exc:
        chars(data, chunk_size=4)
    assert exc.value.offset == len(SAMPLE)


def test_malformed_byte_aborts_count() -> None:
    with pytest.raises(MalformedSequenceError) as exc:
        chars(SAMPLE + b"\xff" + SAMPLE, chunk_size=16)
    assert exc.value.offset == len(SAMPLE)


def test_ascii_mode_rejects_multibyte_text() -> None:
    with pytest.raises(MalformedSequenceError) as exc:
        chars(SAMPLE, Encoding.ASCII)
    assert exc.value.offset == 1


def test_invalid_chunk_size_rejected() -> None:
    with pytest.raises(ValueError):
        chars(b"abc", chunk_size=0)


def test_count_bytes_uses_total_length() -> None:
    source = MemoryByteSource(SAMPLE)
    assert count_bytes(source) == len(SAMPLE)
    assert source.reads == 0
    assert count_bytes(MemoryByteSource(b"")) == 0


def test_count_bytes_and_chars_on_same_file(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_bytes(UTF8_BOM + SAMPLE)
    with FileByteSource(path) as source:
        assert count_bytes(source) == len(SAMPLE) + 3
        assert count_characters(source, chunk_size=3) == len(SAMPLE_TEXT)


def test_character_counter_reads_files(tmp_path: Path) -> None:
    path = tmp_path / "sample.txt"
    path.write_bytes(SAMPLE)
    assert CharacterCounter(chunk_size=1).count(path) == len(SAMPLE_TEXT)


@pytest.mark.parametrize("chunk_size", [0, -1])
def test_character_counter_rejects_bad_chunk_size(chunk_size: int) -> None:
    with pytest.raises(ValueError):
        CharacterCounter(chunk_size=chunk_size)


def test_character_counter_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert CharacterCounter().count(path) == 0
