# main.py

"""Entry point for the weather_store application (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.models.product import Category, WeatherAffinity

logger = logging.getLogger("weather_store.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="weather_store",
        description="Weather-driven tech storefront.",
    )
    parser.add_argument(
        "city",
        nargs="?",
        default=None,
        help="City to shop for. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-a",
        "--add",
        type=int,
        action="append",
        default=None,
        dest="add_ids",
        metavar="ID",
        help="Add a product id to the cart (repeatable).",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        default=False,
        dest="list_products",
        help="List the catalog instead of querying a city.",
    )
    parser.add_argument(
        "--category",
        choices=[c.value for c in Category],
        default=None,
        help="With --list: only this category.",
    )
    parser.add_argument(
        "--weather",
        choices=[w.value for w in WeatherAffinity],
        default=None,
        help="With --list: this weather tag (universal products included).",
    )
    parser.add_argument(
        "--min-price",
        type=float,
        default=None,
        help="With --list: lowest price.",
    )
    parser.add_argument(
        "--max-price",
        type=float,
        default=None,
        help="With --list: highest price.",
    )
    parser.add_argument(
        "--news",
        default=None,
        metavar="QUERY",
        help="Search tech news for QUERY instead of querying a city.",
    )
    parser.add_argument(
        "--rates",
        default=None,
        metavar="BASE",
        help="Print conversion rates for the BASE currency.",
    )
    parser.add_argument(
        "--only",
        action="append",
        default=None,
        metavar="CODE",
        help="With --rates: only this currency (repeatable).",
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        default=False,
        help="Reset the catalog store to the built-in products.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on all providers.",
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual TUI."""
    from src.ui.app import WeatherStoreApp

    try:
        app = WeatherStoreApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("weather_store TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run a headless city query and exit."""
    from src.cli.runner import cli_query

    exit_code = asyncio.run(
        cli_query(
            city=args.city,
            output_format=args.output_format,
            add_ids=args.add_ids,
        )
    )
    sys.exit(exit_code)


def _run_list(args: argparse.Namespace) -> None:
    """Print the filtered catalog."""
    from src.cli.runner import run_list_products

    sys.exit(
        run_list_products(
            category=args.category,
            weather=args.weather,
            min_price=args.min_price,
            max_price=args.max_price,
        )
    )


def _run_news(query: str) -> None:
    """Print a news search."""
    from src.cli.runner import run_news_search

    sys.exit(run_news_search(query))


def _run_rates(base: str, codes: list[str] | None) -> None:
    """Print the rate table for a base currency."""
    from src.cli.runner import run_rates

    sys.exit(run_rates(base, codes))


def _run_seed() -> None:
    """Seed the catalog store."""
    from src.cli.runner import run_seed

    sys.exit(run_seed())


def _run_health_check() -> None:
    """Run provider connectivity health check."""
    from src.cli.runner import run_health_check

    exit_code = asyncio.run(run_health_check())
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no args) or headless CLI (city provided)."""
    log_file = setup_logging()
    logger.info("weather_store starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()

    if args.seed:
        _run_seed()
    elif args.list_products:
        _run_list(args)
    elif args.news:
        _run_news(args.news)
    elif args.rates:
        _run_rates(args.rates, args.only)
    elif args.health:
        _run_health_check()
    elif args.city is None:
        _run_tui()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
