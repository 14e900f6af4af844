"""Abstract base classes for all random sources.

Every source, remote provider or local fallback, implements
:class:`RandomSource`. Sources that speak HTTP derive from
:class:`HttpRandomSource`, which shares one ``httpx.Client`` with the rest of
the process and translates transport and status failures into the qcoin
exception hierarchy.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from qcoin.exceptions import ProtocolError, TransportError

logger = logging.getLogger("qcoin")

DEFAULT_TIMEOUT_S = 30.0


class RandomSource(ABC):
    """Abstract base for all random sources.

    ``get_random_bytes()`` performs a fresh fetch on every call. Sources keep
    no entropy between calls and never retry on their own.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Selector name of the source (e.g., ``'qr'``, ``'anu'``)."""

    @abstractmethod
    def get_random_bytes(self, n: int, timeout: float = DEFAULT_TIMEOUT_S) -> bytes:
        """Return exactly *n* random bytes.

        Args:
            n: Number of random bytes to fetch.
            timeout: Upper bound in seconds for every request the fetch makes.

        Returns:
            Exactly *n* bytes of entropy.

        Raises:
            TransportError: If the provider cannot be reached in time.
            ProtocolError: If the provider's answer is not a usable block.
        """

    def close(self) -> None:
        """Release resources held by the source. No-op by default."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source."""
        return {"source": self.name}


class HttpRandomSource(RandomSource):
    """Base for providers reached over HTTP.

    Args:
        http: Shared client used for every request. The source does not own
            it and never closes it.
        base_url: Override of the provider's :attr:`default_base_url`.
    """

    default_base_url: str = ""
    display_name: str = "provider"

    def __init__(self, http: httpx.Client, base_url: str | None = None) -> None:
        self._http = http
        self._base_url = (base_url or self.default_base_url).rstrip("/")

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get(
        self,
        url: str,
        *,
        timeout: float,
        params: dict[str, Any] | None = None,
        transport_cause: str = "request-failed",
        label: str | None = None,
    ) -> httpx.Response:
        """Issue a GET and return the response only if its status is 2xx.

        Raises:
            TransportError: On connection errors and timeouts, tagged with
                *transport_cause*.
            ProtocolError: On a non-2xx status (cause ``"bad-status"``).
        """
        label = label or self.display_name
        logger.debug("GET %s params=%s timeout=%.1fs", url, params, timeout)
        try:
            response = self._http.get(url, params=params, timeout=timeout)
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"{label} request timed out after {timeout:g}s", cause=transport_cause
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"{label} request failed: {exc}", cause=transport_cause) from exc

        if not response.is_success:
            raise ProtocolError(
                f"{label} returned status {response.status_code}", cause="bad-status"
            )
        return response

    def _decode_json(self, response: httpx.Response, label: str | None = None) -> Any:
        """Parse a JSON body, mapping decode errors to ``ProtocolError``."""
        try:
            return response.json()
        except ValueError as exc:
            raise ProtocolError(
                f"failed to parse {label or self.display_name} response: {exc}",
                cause="decode-failed",
            ) from exc

    def health_check(self) -> dict[str, Any]:
        return {"source": self.name, "base_url": self._base_url}
