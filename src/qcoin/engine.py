"""Flip engine: one entropy fetch followed by one bit tally.

Orchestrates a single flip::

    source selector -> RandomSourceClient.fetch() -> bits.tally() -> FlipResult

Fetch failures propagate unchanged. Counting cannot fail, so a flip either
fully succeeds or raises before producing anything.
"""

from __future__ import annotations

import logging
import time

from qcoin.bits import tally
from qcoin.client import RandomSourceClient
from qcoin.logging.logger import FlipLogger
from qcoin.logging.types import FlipRecord
from qcoin.types import FlipResult, SourceSelector

logger = logging.getLogger("qcoin")

ENTROPY_BLOCK_SIZE = 1024


class FlipEngine:
    """Run flips against a :class:`RandomSourceClient`.

    Args:
        client: Client used to fetch the entropy blocks.
        byte_count: Size of the entropy block per flip.
        timeout: Per-request timeout; ``None`` uses the client's default.
        flip_logger: Receives one :class:`FlipRecord` per successful flip.
    """

    def __init__(
        self,
        client: RandomSourceClient,
        byte_count: int = ENTROPY_BLOCK_SIZE,
        timeout: float | None = None,
        flip_logger: FlipLogger | None = None,
    ) -> None:
        self._client = client
        self._byte_count = byte_count
        self._timeout = timeout
        self._flip_logger = flip_logger or FlipLogger(log_level="none")

    @property
    def byte_count(self) -> int:
        return self._byte_count

    @property
    def flip_logger(self) -> FlipLogger:
        return self._flip_logger

    def flip(self, selector: str | SourceSelector) -> FlipResult:
        """Fetch one entropy block from *selector* and classify it.

        Raises:
            UnknownSourceError: If *selector* is not registered.
            EntropyUnavailableError: If the fetch fails.
        """
        _, result = self.flip_with_entropy(selector)
        return result

    def flip_with_entropy(self, selector: str | SourceSelector) -> tuple[bytes, FlipResult]:
        """Like :meth:`flip`, but also return the raw entropy block."""
        name = selector.value if isinstance(selector, SourceSelector) else selector
        t0 = time.perf_counter()
        data = self._client.fetch(name, self._byte_count, self._timeout)
        fetch_ms = (time.perf_counter() - t0) * 1000.0

        result = tally(data)
        self._flip_logger.log_flip(
            FlipRecord(
                timestamp_ns=time.time_ns(),
                entropy_fetch_ms=fetch_ms,
                source=name,
                byte_count=len(data),
                ones=result.ones,
                zeros=result.zeros,
                verdict=result.verdict.value,
            )
        )
        logger.debug("Flip against %s: %s (%.1fms)", name, result.verdict.value, fetch_ms)
        return data, result
