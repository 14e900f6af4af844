"""Tests for qcoin.config.

Covers:
- Default values
- Environment variable loading (monkeypatch)
- Init kwargs take precedence over the environment
- load_config() drops None overrides and wraps validation errors
"""

from __future__ import annotations

import os

import pytest

from qcoin.config import QCoinConfig, load_config
from qcoin.exceptions import ConfigValidationError


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep QCOIN_* variables and any .env file out of these tests."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("QCOIN_"):
            monkeypatch.delenv(key)


class TestQCoinConfigDefaults:
    def test_source_defaults(self) -> None:
        cfg = QCoinConfig()
        assert cfg.source == "qr"
        assert cfg.byte_count == 1024
        assert cfg.timeout_s == 30.0
        assert cfg.strict_length is True

    def test_provider_urls(self) -> None:
        cfg = QCoinConfig()
        assert cfg.qrandom_base_url == "https://qrandom.io"
        assert cfg.anu_base_url == "https://qrng.anu.edu.au"

    def test_display_defaults(self) -> None:
        cfg = QCoinConfig()
        assert cfg.card_width == 14
        assert cfg.edge_margin == 8
        assert cfg.poll_interval_s == 0.1

    def test_logging_defaults(self) -> None:
        cfg = QCoinConfig()
        assert cfg.log_level == "summary"
        assert cfg.diagnostic_mode is False
        assert cfg.log_file == ""


class TestEnvironment:
    def test_env_overrides_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QCOIN_SOURCE", "anu")
        monkeypatch.setenv("QCOIN_TIMEOUT_S", "5")
        monkeypatch.setenv("QCOIN_STRICT_LENGTH", "false")
        cfg = QCoinConfig()
        assert cfg.source == "anu"
        assert cfg.timeout_s == 5.0
        assert cfg.strict_length is False

    def test_kwargs_override_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QCOIN_SOURCE", "anu")
        assert QCoinConfig(source="system").source == "system"

    def test_dotenv_file(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("QCOIN_BYTE_COUNT=64\n", encoding="utf-8")
        assert QCoinConfig().byte_count == 64


class TestLoadConfig:
    def test_none_overrides_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QCOIN_SOURCE", "anu")
        cfg = load_config(source=None, timeout_s=None)
        assert cfg.source == "anu"
        assert cfg.timeout_s == 30.0

    def test_overrides_apply(self) -> None:
        cfg = load_config(source="system", timeout_s=2.5)
        assert cfg.source == "system"
        assert cfg.timeout_s == 2.5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"byte_count": 0},
            {"timeout_s": -1},
            {"log_level": "verbose"},
            {"card_width": 5},
        ],
    )
    def test_invalid_values_raise(self, overrides: dict) -> None:
        with pytest.raises(ConfigValidationError):
            load_config(**overrides)
