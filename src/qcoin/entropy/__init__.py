"""Random source subsystem for qcoin.

Importing this package registers the built-in sources::

    from qcoin.entropy import RandomSourceRegistry
    RandomSourceRegistry.list_available()  # ['anu', 'qr', 'system']
"""

from qcoin.entropy.anu import AnuQrngSource
from qcoin.entropy.base import DEFAULT_TIMEOUT_S, HttpRandomSource, RandomSource
from qcoin.entropy.qrandom import QRandomSource
from qcoin.entropy.registry import RandomSourceRegistry, register_random_source
from qcoin.entropy.system import SystemRandomSource

__all__ = [
    "DEFAULT_TIMEOUT_S",
    "AnuQrngSource",
    "HttpRandomSource",
    "QRandomSource",
    "RandomSource",
    "RandomSourceRegistry",
    "SystemRandomSource",
    "register_random_source",
]
