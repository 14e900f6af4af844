"""qcoin: a coin flip decided by the bits of a quantum random block.

Fetches 1024 bytes from a remote quantum random number generator
(qrandom.io or the ANU QRNG), counts set against unset bits and reports
ONES, ZEROS or TIE. Ships a one-shot command and an interactive terminal
mode that keeps a history of flips.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("qcoin")
except PackageNotFoundError:
    __version__ = "0.0.0"

from qcoin.bits import classify, count_bits, tally
from qcoin.client import RandomSourceClient
from qcoin.config import QCoinConfig, load_config
from qcoin.engine import FlipEngine
from qcoin.exceptions import (
    ConfigValidationError,
    EntropyUnavailableError,
    HexDumpError,
    ProtocolError,
    QCoinError,
    TransportError,
    UnknownSourceError,
)
from qcoin.types import FlipResult, LabelSet, SourceSelector, Verdict

__all__ = [
    "ConfigValidationError",
    "EntropyUnavailableError",
    "FlipEngine",
    "FlipResult",
    "HexDumpError",
    "LabelSet",
    "ProtocolError",
    "QCoinConfig",
    "QCoinError",
    "RandomSourceClient",
    "SourceSelector",
    "TransportError",
    "UnknownSourceError",
    "Verdict",
    "__version__",
    "classify",
    "count_bits",
    "load_config",
    "tally",
]
