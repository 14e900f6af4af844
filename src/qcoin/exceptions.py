"""Exception hierarchy for qcoin.

All exceptions derive from QCoinError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""

from __future__ import annotations


class QCoinError(Exception):
    """Base exception for all qcoin errors."""


class EntropyUnavailableError(QCoinError):
    """A random source could not provide an entropy block.

    Every fetch failure carries a short ``cause`` tag (``"request-failed"``,
    ``"bad-status"``, ``"decode-failed"``, ``"fetch-failed"`` ...) so callers
    can tell failure modes apart without parsing the message.
    """

    cause: str = "unavailable"

    def __init__(self, message: str, cause: str | None = None) -> None:
        super().__init__(message)
        if cause is not None:
            self.cause = cause


class TransportError(EntropyUnavailableError):
    """Connection failure or timeout while talking to a provider."""

    cause = "request-failed"


class ProtocolError(EntropyUnavailableError):
    """The provider answered, but not with a usable entropy block.

    Raised for non-2xx statuses, malformed JSON, a missing or false success
    flag, and payloads whose length differs from the requested byte count.
    """

    cause = "bad-status"


class UnknownSourceError(QCoinError):
    """The selector does not name a registered random source."""


class ConfigValidationError(QCoinError):
    """Configuration field validation failed."""


class HexDumpError(QCoinError):
    """A saved entropy block could not be read or written."""
