"""Command-line entry point for the CDN cache audit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .auditor import run_audit
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_CATALOG_URL,
    DEFAULT_CONCURRENCY,
    AuditConfig,
)
from .errors import AuthenticationRequiredError, CatalogError
from .models import CheckMode
from .report import render_report

logger = logging.getLogger("cdn_audit.cli")

EXIT_NOT_AUTHENTICATED = 1
EXIT_CATALOG_FAILED = 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Check whether catalog files are served from the CDN cache.",
    )
    parser.add_argument(
        "check_type",
        nargs="?",
        default=CheckMode.ALL.value,
        choices=[mode.value for mode in CheckMode],
        help="Which file variants to check (default: all)",
    )
    parser.add_argument(
        "-c",
        "--cookie",
        default=None,
        help="Cookie header sent with every request, needed off-campus",
    )
    parser.add_argument(
        "--concurrency",
        type=_positive_int,
        default=DEFAULT_CONCURRENCY,
        help="Maximum number of requests in flight",
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        type=Path,
        help="Directory where unexpected HTML pages are saved",
    )
    parser.add_argument(
        "--catalog-url",
        default=DEFAULT_CATALOG_URL,
        help="URL of the catalog metadata JSON",
    )
    parser.add_argument(
        "--base-url",
        default=DEFAULT_BASE_URL,
        help="Origin serving /files/<name>",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = AuditConfig(
        output_dir=Path(args.output_dir).resolve(),
        mode=CheckMode(args.check_type),
        cookie=args.cookie,
        catalog_url=args.catalog_url,
        base_url=args.base_url,
        concurrency=args.concurrency,
    )

    try:
        report = asyncio.run(run_audit(config))
    except CatalogError as exc:
        logger.error("%s", exc)
        return EXIT_CATALOG_FAILED
    except AuthenticationRequiredError as exc:
        logger.debug(
            "Aborted at %s after %d probes", exc.target, len(exc.partial)
        )
        logger.error("Not authenticated: pass your session cookie with --cookie")
        return EXIT_NOT_AUTHENTICATED

    sys.stdout.write(render_report(report))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
