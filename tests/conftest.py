"""Shared pytest fixtures for qcoin tests.

Provides canned entropy blocks, flip results, and a factory wiring an
``httpx.Client`` to an in-process ``httpx.MockTransport`` so no test
touches the network.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from qcoin.types import FlipResult

BLOCK_SIZE = 1024

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def zero_block() -> bytes:
    """1024 bytes with no bit set."""
    return bytes(BLOCK_SIZE)


@pytest.fixture
def ones_block() -> bytes:
    """1024 bytes with every bit set."""
    return b"\xff" * BLOCK_SIZE


@pytest.fixture
def tie_block() -> bytes:
    """1024 bytes with exactly 4096 set bits (0x0F has four of eight)."""
    return b"\x0f" * BLOCK_SIZE


@pytest.fixture
def mock_http() -> Callable[[Handler], httpx.Client]:
    """Return a factory building clients answered by a handler function."""

    def factory(handler: Handler) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def anu_ok(ones_block: bytes) -> Handler:
    """Handler answering like a healthy ANU QRNG with an all-ones block."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"data": list(ones_block), "success": True})

    return handler


@pytest.fixture
def sample_results() -> list[FlipResult]:
    """Five results with distinct tallies, in chronological order."""
    return [FlipResult.from_counts(4096 + i, 4096 - i) for i in range(-2, 3)]
