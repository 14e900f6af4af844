"""Configuration system for qcoin.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (QCOIN_*) -> .env file -> field defaults.

The configuration is read once at the command-line boundary. The entropy
layer, the flip engine and the session receive plain constructor arguments
built from it, so none of them touch the environment themselves.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from qcoin.exceptions import ConfigValidationError


class QCoinConfig(BaseSettings):
    """Configuration for qcoin.

    Resolution order: init kwargs -> env vars (QCOIN_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="QCOIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # --- Entropy sources ---

    source: str = Field(
        default="qr",
        description="Initial random source: 'qr', 'anu' or 'system'",
    )
    byte_count: int = Field(
        default=1024,
        gt=0,
        description="Number of entropy bytes fetched per flip",
    )
    timeout_s: float = Field(
        default=30.0,
        gt=0,
        description="Per-request HTTP timeout in seconds",
    )
    qrandom_base_url: str = Field(
        default="https://qrandom.io",
        description="Base URL of the qrandom.io binary API",
    )
    anu_base_url: str = Field(
        default="https://qrng.anu.edu.au",
        description="Base URL of the ANU QRNG JSON API",
    )
    strict_length: bool = Field(
        default=True,
        description="Reject qrandom.io payloads whose length differs from byte_count",
    )

    # --- Interactive display ---

    card_width: int = Field(
        default=14,
        ge=14,
        description="Columns taken by one result card including border and margin",
    )
    edge_margin: int = Field(
        default=8,
        ge=0,
        description="Columns reserved around the card row",
    )
    poll_interval_s: float = Field(
        default=0.1,
        gt=0,
        description="Keyboard poll timeout of the interactive loop",
    )

    # --- Logging ---

    log_level: Literal["none", "summary", "full"] = Field(
        default="summary",
        description="Per-flip logging verbosity: 'none', 'summary', 'full'",
    )
    diagnostic_mode: bool = Field(
        default=False,
        description="Keep every flip record in memory for summary statistics",
    )
    log_file: str = Field(
        default="",
        description="Log file used in interactive mode (empty disables logging there)",
    )


def load_config(**overrides: Any) -> QCoinConfig:
    """Build a config from the environment plus explicit overrides.

    Overrides whose value is ``None`` are dropped so unset command-line
    options fall through to the environment and the defaults.

    Raises:
        ConfigValidationError: If any field fails validation.
    """
    kwargs = {key: value for key, value in overrides.items() if value is not None}
    try:
        return QCoinConfig(**kwargs)
    except ValidationError as exc:
        raise ConfigValidationError(f"Invalid qcoin configuration: {exc}") from exc
