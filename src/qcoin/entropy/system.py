"""System random source using ``os.urandom()``.

Always available and needs no network. It does not use quantum randomness,
which makes it the source of choice for offline runs and demos.
"""

from __future__ import annotations

import os

from qcoin.entropy.base import DEFAULT_TIMEOUT_S, RandomSource
from qcoin.entropy.registry import register_random_source


@register_random_source("system")
class SystemRandomSource(RandomSource):
    """``os.urandom()`` wrapper, cryptographically secure but not quantum."""

    @property
    def name(self) -> str:
        """Return ``'system'``."""
        return "system"

    def get_random_bytes(self, n: int, timeout: float = DEFAULT_TIMEOUT_S) -> bytes:
        """Return *n* bytes from the OS CSPRNG. *timeout* is ignored."""
        return os.urandom(n)
