"""Tests for bit counting and verdict classification."""

from __future__ import annotations

import os

import pytest

from qcoin.bits import classify, count_bits, tally
from qcoin.types import FlipResult, Verdict


class TestCountBits:
    """Tests for count_bits()."""

    def test_empty_input(self) -> None:
        assert count_bits(b"") == (0, 0)

    def test_single_byte_patterns(self) -> None:
        assert count_bits(b"\x00") == (0, 8)
        assert count_bits(b"\xff") == (8, 0)
        assert count_bits(b"\x01") == (1, 7)
        assert count_bits(b"\x80") == (1, 7)
        assert count_bits(b"\xaa") == (4, 4)

    def test_all_zero_block(self, zero_block: bytes) -> None:
        assert count_bits(zero_block) == (0, 8192)

    def test_all_ones_block(self, ones_block: bytes) -> None:
        assert count_bits(ones_block) == (8192, 0)

    @pytest.mark.parametrize("n", [1, 7, 100, 1024, 4096])
    def test_total_is_eight_bits_per_byte(self, n: int) -> None:
        ones, zeros = count_bits(os.urandom(n))
        assert ones + zeros == 8 * n

    def test_accepts_integer_sequences(self) -> None:
        assert count_bits([0, 255, 15]) == (12, 12)

    def test_accepts_bytearray_and_memoryview(self) -> None:
        data = bytearray(b"\x03\x07")
        assert count_bits(data) == (5, 11)
        assert count_bits(memoryview(data)) == (5, 11)

    def test_matches_per_bit_reference(self) -> None:
        data = os.urandom(257)
        expected = sum(bin(b).count("1") for b in data)
        assert count_bits(data) == (expected, 8 * len(data) - expected)


class TestClassify:
    """Tests for classify()."""

    def test_ones_win(self) -> None:
        assert classify(5, 3) is Verdict.ONES

    def test_zeros_win(self) -> None:
        assert classify(3, 5) is Verdict.ZEROS

    def test_tie(self) -> None:
        assert classify(4096, 4096) is Verdict.TIE

    def test_empty_is_tie(self) -> None:
        assert classify(0, 0) is Verdict.TIE


class TestTally:
    """Tests for tally() and FlipResult construction."""

    def test_zero_block_is_zeros(self, zero_block: bytes) -> None:
        assert tally(zero_block) == FlipResult(ones=0, zeros=8192, verdict=Verdict.ZEROS)

    def test_ones_block_is_ones(self, ones_block: bytes) -> None:
        assert tally(ones_block) == FlipResult(ones=8192, zeros=0, verdict=Verdict.ONES)

    def test_balanced_block_is_tie(self, tie_block: bytes) -> None:
        result = tally(tie_block)
        assert (result.ones, result.zeros) == (4096, 4096)
        assert result.verdict is Verdict.TIE

    def test_total_bits(self, tie_block: bytes) -> None:
        assert tally(tie_block).total_bits == 8192

    def test_from_counts_derives_verdict(self) -> None:
        assert FlipResult.from_counts(10, 2).verdict is Verdict.ONES
        assert FlipResult.from_counts(2, 10).verdict is Verdict.ZEROS
        assert FlipResult.from_counts(6, 6).verdict is Verdict.TIE

    def test_result_is_frozen(self) -> None:
        result = FlipResult.from_counts(1, 2)
        with pytest.raises(AttributeError):
            result.ones = 5  # type: ignore[misc]
