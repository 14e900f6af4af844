"""Diagnostic logging subsystem for qcoin.

Provides immutable per-flip records and a configurable logger that supports
none/summary/full verbosity and in-memory diagnostic mode.
"""

from qcoin.logging.logger import FlipLogger
from qcoin.logging.types import FlipRecord

__all__ = [
    "FlipLogger",
    "FlipRecord",
]
