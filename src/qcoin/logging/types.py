"""Data types for the flip logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FlipRecord:
    """Immutable record of a single successful flip.

    Attributes:
        timestamp_ns: Wall-clock time of the flip (nanoseconds since epoch).
        entropy_fetch_ms: Time spent fetching the entropy block (milliseconds).
        source: Selector name of the source that delivered the block.
        byte_count: Size of the entropy block.
        ones: Number of set bits.
        zeros: Number of unset bits.
        verdict: ``"ONES"``, ``"ZEROS"`` or ``"TIE"``.
    """

    timestamp_ns: int
    entropy_fetch_ms: float
    source: str
    byte_count: int
    ones: int
    zeros: int
    verdict: str
