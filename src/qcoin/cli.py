"""Command-line entry point.

Non-interactive mode performs exactly one flip and prints the tally::

    $ qcoin -s anu
    Ones: 4113
    Zeros: 4079
    Result: ONES

Interactive mode (``-i``) takes over the terminal until the user quits.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from qcoin import __version__
from qcoin.bits import tally
from qcoin.client import RandomSourceClient
from qcoin.config import QCoinConfig, load_config
from qcoin.engine import FlipEngine
from qcoin.entropy.registry import RandomSourceRegistry
from qcoin.exceptions import QCoinError
from qcoin.hexdump import load_hex, save_hex
from qcoin.logging.logger import FlipLogger
from qcoin.session import initial_state
from qcoin.types import FlipResult

logger = logging.getLogger("qcoin")

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qcoin",
        description="Flip a coin decided by the bits of a quantum random block.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  qcoin                     # one flip using qrandom.io
  qcoin -s anu              # one flip using the ANU QRNG
  qcoin -i                  # interactive mode
  qcoin --save-hex blk.hex  # keep the entropy block for later
  qcoin --replay blk.hex    # count a saved block without network access
""",
    )
    parser.add_argument(
        "-s",
        "--source",
        default=None,
        help="Source: qr (qrandom.io), anu (ANU QRNG) or system (os.urandom). Default: qr",
    )
    parser.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Start the interactive terminal mode",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-request timeout in seconds (default: 30)",
    )
    parser.add_argument(
        "--save-hex",
        metavar="PATH",
        help="Write the fetched entropy block to PATH as hex",
    )
    parser.add_argument(
        "--replay",
        metavar="PATH",
        help="Count a block previously written with --save-hex instead of fetching",
    )
    parser.add_argument(
        "--list-sources",
        action="store_true",
        help="List the registered random sources and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(config: QCoinConfig, interactive: bool, verbose: bool) -> None:
    """Route the ``qcoin`` logger for the selected mode.

    The one-shot mode logs to stderr. The interactive mode owns the screen,
    so it only logs when a log file is configured.
    """
    if not interactive:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.WARNING,
            format=_LOG_FORMAT,
            stream=sys.stderr,
        )
        return

    if config.log_file:
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format=_LOG_FORMAT,
            filename=config.log_file,
        )
    else:
        logger.addHandler(logging.NullHandler())
        logger.propagate = False


def print_result(result: FlipResult, out: TextIO | None = None) -> None:
    print(f"Ones: {result.ones}", file=out)
    print(f"Zeros: {result.zeros}", file=out)
    print(f"Result: {result.verdict.value}", file=out)


def build_engine(config: QCoinConfig, client: RandomSourceClient) -> FlipEngine:
    return FlipEngine(
        client,
        byte_count=config.byte_count,
        timeout=config.timeout_s,
        flip_logger=FlipLogger(config.log_level, config.diagnostic_mode),
    )


def run_once(config: QCoinConfig, save_path: str | None = None) -> FlipResult:
    """Fetch one block from the configured source and classify it."""
    with RandomSourceClient.from_config(config) as client:
        data, result = build_engine(config, client).flip_with_entropy(config.source)
    if save_path:
        save_hex(data, save_path)
    return result


def run_replay(path: str) -> FlipResult:
    """Classify a saved block."""
    data = load_hex(path)
    logger.debug("Replaying %d bytes from %s", len(data), path)
    return tally(data)


def run_interactive(config: QCoinConfig) -> int:
    # Imported here so the one-shot mode works where curses is unavailable.
    import curses

    from qcoin.loop import InteractionLoop
    from qcoin.terminal import run_curses

    with RandomSourceClient.from_config(config) as client:
        engine = build_engine(config, client)

        def _main(surface):
            loop = InteractionLoop(
                engine,
                surface,
                initial_state(config.source),
                poll_interval_s=config.poll_interval_s,
                card_width=config.card_width,
                edge_margin=config.edge_margin,
            )
            return loop.run()

        try:
            final = run_curses(_main)
        except curses.error as exc:
            print(f"Error: terminal not usable: {exc}", file=sys.stderr)
            return 1

    logger.info("Session ended after %d flips", final.total_flips)
    stats = engine.flip_logger.get_summary_stats()
    if stats:
        logger.info("Session stats: %s", stats)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, run the selected mode and return the exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config(source=args.source, timeout_s=args.timeout)
    except QCoinError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    configure_logging(config, args.interactive, args.verbose)

    if args.list_sources:
        for name in RandomSourceRegistry.list_available():
            print(name)
        return 0

    try:
        if args.replay:
            print_result(run_replay(args.replay))
            return 0
        # Fail fast on a misspelled source before any I/O.
        RandomSourceRegistry.get(config.source)
        if args.interactive:
            return run_interactive(config)
        print_result(run_once(config, args.save_hex))
    except QCoinError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
