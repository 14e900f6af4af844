"""Tests for RandomSourceRegistry."""

from __future__ import annotations

import pytest

from qcoin.entropy import AnuQrngSource, QRandomSource, SystemRandomSource
from qcoin.entropy.base import RandomSource
from qcoin.entropy.registry import RandomSourceRegistry
from qcoin.exceptions import UnknownSourceError


class _ZeroSource(RandomSource):
    """Source returning zero bytes, for registration tests."""

    @property
    def name(self) -> str:
        return "zero"

    def get_random_bytes(self, n: int, timeout: float = 30.0) -> bytes:
        return bytes(n)


@pytest.fixture(autouse=True)
def _restore_registry():
    saved = dict(RandomSourceRegistry._sources)
    yield
    RandomSourceRegistry._sources = saved


class TestRandomSourceRegistry:
    """Tests for selector lookup and decorator registration."""

    def test_builtin_sources_registered(self) -> None:
        assert RandomSourceRegistry.get("qr") is QRandomSource
        assert RandomSourceRegistry.get("anu") is AnuQrngSource
        assert RandomSourceRegistry.get("system") is SystemRandomSource

    def test_builtin_selectors_listed(self) -> None:
        assert RandomSourceRegistry.list_available() == ["anu", "qr", "system"]

    def test_register_and_get(self) -> None:
        RandomSourceRegistry.register("zero")(_ZeroSource)
        assert RandomSourceRegistry.get("zero") is _ZeroSource

    def test_reregistering_same_class_is_allowed(self) -> None:
        RandomSourceRegistry.register("zero")(_ZeroSource)
        assert RandomSourceRegistry.register("zero")(_ZeroSource) is _ZeroSource

    def test_selector_cannot_be_taken_over(self) -> None:
        with pytest.raises(ValueError, match="already registered to QRandomSource"):
            RandomSourceRegistry.register("qr")(_ZeroSource)
        assert RandomSourceRegistry.get("qr") is QRandomSource

    def test_unknown_source_lists_available(self) -> None:
        with pytest.raises(UnknownSourceError, match=r"'bogus' \(available: anu, qr, system\)"):
            RandomSourceRegistry.get("bogus")

    def test_list_available_is_sorted(self) -> None:
        RandomSourceRegistry.register("zzz")(_ZeroSource)
        RandomSourceRegistry.register("aaa")(_ZeroSource)
        available = RandomSourceRegistry.list_available()
        assert available == sorted(available)
        assert {"aaa", "zzz", "qr", "anu"} <= set(available)
