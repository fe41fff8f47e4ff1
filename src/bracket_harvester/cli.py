"""CLI entrypoint for bracket-harvester."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_REQUEST_INTERVAL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RETRY_DELAY,
    SECRET_ENV_VAR,
    ScanConfig,
    load_secret,
)
from .errors import ConfigError, InputError
from .logging_utils import configure_logging, get_logger
from .pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(
        description=(
            "Bracket Harvester - fetch URLs found inside [brackets], one request per "
            "interval, and print one JSON line per page."
        )
    )
    parser.add_argument(
        "input", nargs="?", help="Text file to scan. Reads stdin incrementally when omitted."
    )
    parser.add_argument("--output", default="-", help="Output JSON lines path ('-' for stdout).")
    parser.add_argument(
        "--secret", help=f"Email fingerprint secret (or set {SECRET_ENV_VAR} / .env)."
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_REQUEST_INTERVAL,
        help="Seconds between the start of consecutive fetch cycles.",
    )
    parser.add_argument(
        "--retry-delay",
        type=float,
        default=DEFAULT_RETRY_DELAY,
        help="Seconds to wait before the single retry of a failed fetch.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_REQUEST_TIMEOUT,
        help="Per-request timeout in seconds.",
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Maximum bytes read from stdin per scan.",
    )
    parser.add_argument("--progress", action="store_true", help="Show a tqdm progress bar.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI input."""
    return build_parser().parse_args(argv)


def namespace_to_config(args: argparse.Namespace) -> ScanConfig:
    """Convert CLI args to validated ScanConfig."""
    logger = get_logger()
    secret = args.secret or load_secret()
    if not secret:
        logger.debug("No %s configured; email fingerprints are omitted.", SECRET_ENV_VAR)
    return ScanConfig(
        secret=secret,
        output=args.output,
        request_interval=args.interval,
        retry_delay=args.retry_delay,
        request_timeout=args.timeout,
        chunk_size=args.chunk_size,
        show_progress=args.progress,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    args = parse_args(argv)
    configure_logging(args.verbose)
    logger = get_logger()
    try:
        config = namespace_to_config(args)
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    try:
        run_pipeline(config, source=args.input, stdin=sys.stdin.buffer, logger=logger)
    except InputError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
