from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .config import settings
from .services import telemetry
from .workflows.exceptions import MissingConfigurationError
from .workflows.models import CrawlOptions
from .workflows.scrape_workflow import load_or_scrape_listings


def setup_logging(log_dir: Optional[str] = None, level: int = logging.INFO) -> logging.Logger:
    """Configure structured logging to both stdout and a rotating file."""

    directory = Path(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    log_file = directory / "listing_scrape.log"

    fmt = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    handlers = [
        RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3, encoding="utf-8"),
        logging.StreamHandler(sys.stdout),
    ]
    logging.basicConfig(level=level, format=fmt, handlers=handlers, force=True)
    # The Firecrawl SDK logs every HTTP request at INFO; keep them quiet unless debugging.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logging.getLogger("listing_scrape")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Scrape a paginated listing site through Firecrawl")
    p.add_argument("--index-url", help="Listing index page (defaults to LISTING_INDEX_URL)")
    p.add_argument("--base-origin", help="Origin used to resolve pagination links")
    p.add_argument("--output", help="Checkpoint / output JSON path (defaults to LISTING_OUTPUT_PATH)")
    p.add_argument("--max-pages", type=int, help="Only scrape the first N discovered pages")
    p.add_argument("--refresh", action="store_true", help="Ignore an existing output file and crawl")
    p.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return p


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    options = CrawlOptions.from_config(
        index_url=args.index_url,
        base_origin=args.base_origin,
        output_path=args.output,
        max_pages=args.max_pages,
    )

    try:
        listings = asyncio.run(load_or_scrape_listings(options, refresh=args.refresh))
    except MissingConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Exiting on CTRL+C")
        return 130
    finally:
        telemetry.force_flush_posthog_logs()

    if not listings:
        logger.warning("No listings collected from %s", options.index_url)
        return 2

    logger.info("Collected %s listings -> %s", len(listings), options.output_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
