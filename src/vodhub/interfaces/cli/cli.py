from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import structlog
from pydantic import ValidationError

from vodhub.domain.entities.video import VodError
from vodhub.infrastructure.config import AppConfig, load_config
from vodhub.infrastructure.logging.setup import configure_logging
from vodhub.interfaces.composition import build_services

log = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_LOOKUP_FAILED = 1
EXIT_USAGE = 2


def _parse_args(argv: Iterable[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="vodhub")

    # Config wiring flags (no business logic)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML config file.",
    )
    parser.add_argument(
        "--dotenv",
        default=None,
        help="Path to .env file.",
    )
    parser.add_argument(
        "--max-pages",
        default=None,
        type=int,
        help="Override search.max_pages.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override log level.",
    )
    parser.add_argument(
        "--log-format",
        default=None,
        choices=["json", "console"],
        help="Override log format.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search all configured sources.")
    search.add_argument("query", help="Free-text title query.")

    detail = sub.add_parser("detail", help="Fetch detail for one item.")
    detail.add_argument("source", help="Source key.")
    detail.add_argument("id", help="Item id on that source.")

    sub.add_parser("sources", help="List configured sources.")

    return parser.parse_args(argv)


def _emit(payload: Any, out: TextIO) -> None:
    out.write(json.dumps(payload, ensure_ascii=False, indent=2))
    out.write("\n")


async def _run(args: argparse.Namespace, config: AppConfig, out: TextIO) -> int:
    async with build_services(config) as services:
        if args.command == "search":
            response = await services.search.execute(args.query)
            _emit(response.to_dict(), out)
            return EXIT_OK

        if args.command == "detail":
            try:
                detail = await services.detail.execute(args.source, args.id)
            except VodError as exc:
                _emit({"error": str(exc)}, out)
                return EXIT_LOOKUP_FAILED
            _emit(detail.to_dict(), out)
            return EXIT_OK

        _emit(
            {
                "sources": [
                    {
                        "key": s.key,
                        "name": s.name,
                        "api": s.api,
                        "detail": s.detail,
                        "html_detail": s.uses_html_detail,
                    }
                    for s in services.provider.list_sources()
                ],
                "cache_time": services.provider.cache_time(),
            },
            out,
        )
        return EXIT_OK


def start(argv: Iterable[str] | None = None, out: TextIO | None = None) -> int:
    """
    Process entrypoint.

    Loads config exactly once, configures logging, then runs one command.
    """
    if argv is None:
        argv = sys.argv[1:]
    out = out or sys.stdout

    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    dotenv_path = Path(args.dotenv) if args.dotenv else None

    cli_overrides: dict[str, Any] = {}
    if args.max_pages is not None:
        cli_overrides["max_search_pages"] = args.max_pages
    if args.log_level:
        cli_overrides["log_level"] = args.log_level
    if args.log_format:
        cli_overrides["log_format"] = args.log_format

    try:
        config = load_config(
            config_path=config_path,
            dotenv_path=dotenv_path,
            cli_overrides=cli_overrides,
        )
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        print(f"vodhub: invalid configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(config)

    return asyncio.run(_run(args, config, out))


if __name__ == "__main__":
    raise SystemExit(start())
