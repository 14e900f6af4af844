"""Diagnostic logger for per-flip events.

Uses the standard ``logging`` module with the ``"qcoin"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import Any

from qcoin.logging.types import FlipRecord

logger = logging.getLogger("qcoin")

LOG_LEVELS = ("none", "summary", "full")


class FlipLogger:
    """Per-flip diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per flip with source, tally and timing.

        ``"full"``: Full JSON dump of the record.
    """

    def __init__(self, log_level: str = "summary", diagnostic_mode: bool = False) -> None:
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {log_level!r}, expected one of {LOG_LEVELS}")
        self._log_level = log_level
        self._diagnostic_mode = diagnostic_mode
        self._records: list[FlipRecord] = []

    def log_flip(self, record: FlipRecord) -> None:
        """Log a single flip."""
        if self._diagnostic_mode:
            self._records.append(record)

        if self._log_level == "summary":
            logger.info(
                "flip source=%s ones=%d zeros=%d verdict=%s fetch=%.2fms",
                record.source,
                record.ones,
                record.zeros,
                record.verdict,
                record.entropy_fetch_ms,
            )
        elif self._log_level == "full":
            logger.info("flip_record: %s", json.dumps(asdict(record)))

    def get_diagnostic_data(self) -> list[FlipRecord]:
        """Return all stored records (empty unless ``diagnostic_mode=True``)."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Compute summary statistics over all stored records.

        Returns:
            Dictionary with aggregate stats, or empty dict if no records.
        """
        if not self._records:
            return {}

        n = len(self._records)
        ones_total = sum(r.ones for r in self._records)
        bits_total = sum(r.ones + r.zeros for r in self._records)
        fetch_times = [r.entropy_fetch_ms for r in self._records]
        return {
            "total_flips": n,
            "ones_wins": sum(1 for r in self._records if r.verdict == "ONES"),
            "zeros_wins": sum(1 for r in self._records if r.verdict == "ZEROS"),
            "ties": sum(1 for r in self._records if r.verdict == "TIE"),
            "ones_fraction": ones_total / bits_total if bits_total else 0.0,
            "mean_fetch_ms": sum(fetch_times) / n,
            "max_fetch_ms": max(fetch_times),
        }
