"""Core value types shared by the flip engine and the session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# Literal text shown for a tie. Not customizable.
TIE_LABEL = "TIE"

DEFAULT_ONES_LABEL = "ONES"
DEFAULT_ZEROS_LABEL = "ZEROS"


class Verdict(Enum):
    """Classified outcome of a flip."""

    ONES = "ONES"
    ZEROS = "ZEROS"
    TIE = "TIE"


class SourceSelector(str, Enum):
    """The two remote providers the interactive session toggles between."""

    QR = "qr"
    ANU = "anu"

    def toggled(self) -> SourceSelector:
        """Return the other provider."""
        return SourceSelector.ANU if self is SourceSelector.QR else SourceSelector.QR


DEFAULT_SOURCE = SourceSelector.QR.value


def toggle_source(name: str) -> str:
    """Return the provider that follows *name* in the ``qr <-> anu`` cycle.

    Names outside the cycle (for example ``"system"``) go back to ``qr``.
    """
    try:
        return SourceSelector(name).toggled().value
    except ValueError:
        return DEFAULT_SOURCE


@dataclass(frozen=True, slots=True)
class FlipResult:
    """Bit tally of one entropy block and its verdict.

    Attributes:
        ones: Number of set bits.
        zeros: Number of unset bits.
        verdict: ONES, ZEROS or TIE, derived from the two counts.
    """

    ones: int
    zeros: int
    verdict: Verdict

    @classmethod
    def from_counts(cls, ones: int, zeros: int) -> FlipResult:
        """Build a result whose verdict is consistent with the counts."""
        # Local import keeps types.py free of the numpy dependency.
        from qcoin.bits import classify

        return cls(ones=ones, zeros=zeros, verdict=classify(ones, zeros))

    @property
    def total_bits(self) -> int:
        return self.ones + self.zeros


@dataclass(frozen=True, slots=True)
class LabelSet:
    """User-customizable text substituted for the ONES and ZEROS verdicts."""

    ones_label: str = DEFAULT_ONES_LABEL
    zeros_label: str = DEFAULT_ZEROS_LABEL

    def label_for(self, verdict: Verdict) -> str:
        if verdict is Verdict.ONES:
            return self.ones_label
        if verdict is Verdict.ZEROS:
            return self.zeros_label
        return TIE_LABEL
