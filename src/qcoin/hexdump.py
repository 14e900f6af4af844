"""Hex persistence of entropy blocks.

A block is stored as one line of lowercase hexadecimal, so it can be
inspected with any text editor and replayed later without network access.
"""

from __future__ import annotations

import logging
from pathlib import Path

from qcoin.exceptions import HexDumpError

logger = logging.getLogger("qcoin")


def save_hex(data: bytes, path: str | Path) -> Path:
    """Write *data* to *path* as lowercase hex and return the path."""
    target = Path(path)
    try:
        target.write_text(data.hex(), encoding="ascii")
    except OSError as exc:
        raise HexDumpError(f"cannot write {target}: {exc}") from exc
    logger.debug("Saved %d bytes to %s", len(data), target)
    return target


def load_hex(path: str | Path) -> bytes:
    """Read a block written by :func:`save_hex`.

    Surrounding whitespace is ignored.

    Raises:
        HexDumpError: If the file is missing or not valid hex.
    """
    source = Path(path)
    try:
        text = source.read_text(encoding="ascii")
    except (OSError, UnicodeDecodeError) as exc:
        raise HexDumpError(f"cannot read {source}: {exc}") from exc
    try:
        return bytes.fromhex(text.strip())
    except ValueError as exc:
        raise HexDumpError(f"{source} does not contain valid hex: {exc}") from exc
