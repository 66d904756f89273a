"""Command-line interface for Shade oracle prices."""
from __future__ import annotations

import argparse
import asyncio
import json
import sys

from .config import load_config
from .logging_setup import configure_logging
from .services import PriceService, PriceWatcher


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="shade-prices",
        description="Shade Protocol oracle price client",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    price_parser = sub.add_parser("price", help="Query a single oracle price")
    price_parser.add_argument(
        "key",
        nargs="?",
        default=None,
        help="Oracle key (default: first configured token)",
    )

    batch_parser = sub.add_parser("batch", help="Query several prices at once")
    batch_parser.add_argument(
        "keys",
        nargs="*",
        help="Oracle keys (default: configured tokens)",
    )
    batch_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the prices as a JSON object",
    )

    watch_parser = sub.add_parser("watch", help="Refresh prices continuously")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=_positive_int,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )

    return parser


async def _run(args: argparse.Namespace) -> int:
    """Execute the selected command and return the exit code."""
    configure_logging(args.log_level)
    config = load_config(args.config)
    service = PriceService.from_config(config)

    if args.command == "price":
        value = await service.fetch_single_display(args.key)
        if value is None:
            return 1
        print(value)
        return 0

    if args.command == "batch":
        prices = await service.fetch_batch_display(args.keys or None)
        if args.json:
            print(json.dumps(prices, indent=2))
        else:
            for key, value in prices.items():
                print(f"{key}: {value}")
        return 0 if prices else 1

    if args.command == "watch":
        await PriceWatcher(service, config).run_continuous(args.interval)
        return 0

    build_parser().print_help()
    return 1


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(asyncio.run(_run(args)))
