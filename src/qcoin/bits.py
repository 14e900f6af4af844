"""Bit counting and verdict classification for entropy blocks.

The whole block is unpacked into individual bits with numpy, so a 1024-byte
block is tallied in a single vectorised pass. Counting is pure and cannot
fail: every byte contributes exactly eight bits.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from qcoin.types import FlipResult, Verdict

BITS_PER_BYTE = 8


def _as_uint8(data: bytes | bytearray | memoryview | Iterable[int]) -> np.ndarray:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    return np.fromiter(data, dtype=np.uint8)


def count_bits(data: bytes | bytearray | memoryview | Iterable[int]) -> tuple[int, int]:
    """Count set and unset bits over every byte of *data*.

    Args:
        data: The entropy block. Empty input is allowed.

    Returns:
        Tuple of ``(ones, zeros)`` with ``ones + zeros == 8 * len(data)``.
    """
    arr = _as_uint8(data)
    if arr.size == 0:
        return 0, 0
    ones = int(np.unpackbits(arr).sum())
    return ones, arr.size * BITS_PER_BYTE - ones


def classify(ones: int, zeros: int) -> Verdict:
    """Return ONES or ZEROS for the larger count, TIE when they are equal."""
    if ones > zeros:
        return Verdict.ONES
    if zeros > ones:
        return Verdict.ZEROS
    return Verdict.TIE


def tally(data: bytes | bytearray | memoryview | Iterable[int]) -> FlipResult:
    """Count the bits of *data* and classify the result."""
    ones, zeros = count_bits(data)
    return FlipResult(ones=ones, zeros=zeros, verdict=classify(ones, zeros))
