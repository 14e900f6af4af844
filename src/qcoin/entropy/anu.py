"""ANU QRNG provider (selector ``"anu"``).

Single GET against the JSON API with the byte count in the ``length`` query
parameter. The answer carries an explicit ``success`` flag and the bytes as
a list of integers, which must contain exactly the requested count.
"""

from __future__ import annotations

from qcoin.entropy.base import DEFAULT_TIMEOUT_S, HttpRandomSource
from qcoin.entropy.registry import register_random_source
from qcoin.exceptions import ProtocolError


@register_random_source("anu")
class AnuQrngSource(HttpRandomSource):
    """uint8 arrays from the ANU quantum random number generator."""

    default_base_url = "https://qrng.anu.edu.au"
    display_name = "ANU QRNG"

    @property
    def name(self) -> str:
        """Return ``'anu'``."""
        return "anu"

    def get_random_bytes(self, n: int, timeout: float = DEFAULT_TIMEOUT_S) -> bytes:
        response = self._get(
            f"{self._base_url}/API/jsonI.php",
            params={"length": n, "type": "uint8"},
            timeout=timeout,
        )
        payload = self._decode_json(response)
        if not isinstance(payload, dict):
            raise ProtocolError("ANU QRNG response is not a JSON object", cause="decode-failed")

        # The success flag is checked before the payload is even looked at.
        if payload.get("success") is not True:
            raise ProtocolError("ANU QRNG API returned success=false", cause="success-false")

        data = payload.get("data")
        if not isinstance(data, list):
            raise ProtocolError("ANU QRNG response has no data array", cause="decode-failed")
        if len(data) != n:
            raise ProtocolError(f"expected {n} bytes, got {len(data)}", cause="length-mismatch")

        try:
            return bytes(data)
        except (TypeError, ValueError) as exc:
            raise ProtocolError(
                f"ANU QRNG data is not a uint8 array: {exc}", cause="decode-failed"
            ) from exc
