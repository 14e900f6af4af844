"""qrandom.io provider (selector ``"qr"``).

Two-phase protocol: the first GET returns a JSON descriptor
``{"binaryURL": "..."}``, the second GET downloads the raw entropy block
from that URL. The body of the second response is used as-is.
"""

from __future__ import annotations

import logging

import httpx

from qcoin.entropy.base import DEFAULT_TIMEOUT_S, HttpRandomSource
from qcoin.entropy.registry import register_random_source
from qcoin.exceptions import ProtocolError, TransportError

logger = logging.getLogger("qcoin")


@register_random_source("qr")
class QRandomSource(HttpRandomSource):
    """Binary payload download from qrandom.io.

    Args:
        http: Shared HTTP client.
        base_url: Override of ``https://qrandom.io``.
        strict_length: When ``True`` (default) a payload whose length differs
            from the requested count is rejected. When ``False`` the payload
            is returned as delivered and the mismatch is only logged.
    """

    default_base_url = "https://qrandom.io"
    display_name = "qrandom.io"

    def __init__(
        self,
        http: httpx.Client,
        base_url: str | None = None,
        strict_length: bool = True,
    ) -> None:
        super().__init__(http, base_url)
        self._strict_length = strict_length

    @property
    def name(self) -> str:
        """Return ``'qr'``."""
        return "qr"

    def get_random_bytes(self, n: int, timeout: float = DEFAULT_TIMEOUT_S) -> bytes:
        descriptor_response = self._get(
            f"{self._base_url}/api/random/binary",
            params={"bytes": n},
            timeout=timeout,
            transport_cause="request-failed",
        )
        descriptor = self._decode_json(descriptor_response)
        binary_url = descriptor.get("binaryURL") if isinstance(descriptor, dict) else None
        if not isinstance(binary_url, str) or not binary_url:
            raise ProtocolError(
                "qrandom.io response does not contain a binaryURL", cause="decode-failed"
            )

        # Relative URLs resolve against the descriptor request.
        try:
            target = str(descriptor_response.url.join(binary_url))
        except httpx.InvalidURL as exc:
            raise TransportError(
                f"qrandom.io binary fetch failed: invalid binaryURL {binary_url!r}: {exc}",
                cause="fetch-failed",
            ) from exc
        payload = self._get(
            target,
            timeout=timeout,
            transport_cause="fetch-failed",
            label="binary fetch",
        ).content

        if len(payload) != n:
            if self._strict_length:
                raise ProtocolError(
                    f"expected {n} bytes, got {len(payload)}", cause="length-mismatch"
                )
            logger.warning("qrandom.io delivered %d bytes, expected %d", len(payload), n)
        return payload

    def health_check(self) -> dict[str, object]:
        status = super().health_check()
        status["strict_length"] = self._strict_length
        return status
