"""Selector name to random source class mapping.

Sources register themselves at import time with ``@register_random_source``.
Importing :mod:`qcoin.entropy` therefore makes ``qr``, ``anu`` and
``system`` available; nothing is discovered at run time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from qcoin.exceptions import UnknownSourceError

if TYPE_CHECKING:
    from collections.abc import Callable

    from qcoin.entropy.base import RandomSource

logger = logging.getLogger("qcoin")


class RandomSourceRegistry:
    """Class-level table of the selectable random sources."""

    _sources: ClassVar[dict[str, type[RandomSource]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[RandomSource]], type[RandomSource]]:
        """Decorator registering a source class under the selector *name*.

        Raises:
            ValueError: If *name* already belongs to a different class.
        """

        def decorator(source_cls: type[RandomSource]) -> type[RandomSource]:
            existing = cls._sources.get(name)
            if existing is not None and existing is not source_cls:
                raise ValueError(
                    f"source {name!r} is already registered to {existing.__name__}"
                )
            cls._sources[name] = source_cls
            logger.debug("Registered random source %r -> %s", name, source_cls.__name__)
            return source_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[RandomSource]:
        """Return the class registered under *name*.

        Raises:
            UnknownSourceError: If no source uses that selector.
        """
        try:
            return cls._sources[name]
        except KeyError:
            available = ", ".join(cls.list_available()) or "(none)"
            raise UnknownSourceError(
                f"unknown source: {name!r} (available: {available})"
            ) from None

    @classmethod
    def list_available(cls) -> list[str]:
        """Selector names in alphabetical order."""
        return sorted(cls._sources)


register_random_source = RandomSourceRegistry.register
