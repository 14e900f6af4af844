"""Client that fetches entropy blocks from any registered random source.

The client owns one ``httpx.Client`` connection pool shared by every HTTP
provider and builds source instances on demand from the registry. It keeps
no entropy between calls and performs no retries: a failed fetch surfaces
immediately as a :class:`~qcoin.exceptions.EntropyUnavailableError`.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

import httpx

from qcoin.entropy.base import DEFAULT_TIMEOUT_S, HttpRandomSource, RandomSource
from qcoin.entropy.registry import RandomSourceRegistry
from qcoin.types import SourceSelector

if TYPE_CHECKING:
    from qcoin.config import QCoinConfig

logger = logging.getLogger("qcoin")

_USER_AGENT = "qcoin (+https://github.com/qcoin/qcoin)"


class RandomSourceClient:
    """Fetch fixed-size entropy blocks by selector name.

    Args:
        http: HTTP client to share with the providers. When omitted the
            client creates one and closes it in :meth:`close`.
        timeout: Default per-request timeout in seconds.
        source_options: Extra constructor arguments per selector name, e.g.
            ``{"qr": {"base_url": "...", "strict_length": False}}``.
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
        source_options: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self._owns_http = http is None
        self._http = http or httpx.Client(
            headers={"User-Agent": _USER_AGENT},
            follow_redirects=True,
        )
        self._timeout = timeout
        self._source_options = source_options or {}
        self._sources: dict[str, RandomSource] = {}

    @classmethod
    def from_config(cls, config: QCoinConfig, http: httpx.Client | None = None) -> RandomSourceClient:
        """Build a client with the provider URLs and limits from *config*."""
        return cls(
            http,
            timeout=config.timeout_s,
            source_options={
                "qr": {
                    "base_url": config.qrandom_base_url,
                    "strict_length": config.strict_length,
                },
                "anu": {"base_url": config.anu_base_url},
            },
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    def source(self, selector: str | SourceSelector) -> RandomSource:
        """Return the source instance for *selector*, building it on first use.

        Raises:
            UnknownSourceError: If no source is registered under the name.
        """
        name = selector.value if isinstance(selector, SourceSelector) else selector
        if name not in self._sources:
            source_cls = RandomSourceRegistry.get(name)
            options = self._source_options.get(name, {})
            # Only HTTP providers take the shared client.
            if issubclass(source_cls, HttpRandomSource):
                self._sources[name] = source_cls(self._http, **options)  # type: ignore[call-arg]
            else:
                self._sources[name] = source_cls(**options)
        return self._sources[name]

    def fetch(
        self,
        selector: str | SourceSelector,
        byte_count: int,
        timeout: float | None = None,
    ) -> bytes:
        """Fetch exactly *byte_count* bytes from the source named *selector*.

        Args:
            selector: Registered source name or a :class:`SourceSelector`.
            byte_count: Size of the entropy block.
            timeout: Per-request timeout; defaults to the client's timeout.

        Returns:
            The entropy block.

        Raises:
            UnknownSourceError: If *selector* is not registered.
            TransportError: On connection failures and timeouts.
            ProtocolError: On unusable provider answers.
        """
        source = self.source(selector)
        effective_timeout = self._timeout if timeout is None else timeout
        t0 = time.perf_counter()
        data = source.get_random_bytes(byte_count, effective_timeout)
        logger.debug(
            "Fetched %d bytes from %s in %.1fms",
            len(data),
            source.name,
            (time.perf_counter() - t0) * 1000.0,
        )
        return data

    def close(self) -> None:
        """Close every built source and the HTTP client if owned."""
        for source in self._sources.values():
            source.close()
        self._sources.clear()
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> RandomSourceClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
