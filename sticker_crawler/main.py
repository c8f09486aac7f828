"""Main entry point for the LINE sticker crawler."""

import argparse
import asyncio
import logging
import sys
from enum import Enum
from pathlib import Path

import httpx

from .config import STORE_BASE_URL, CrawlerConfig
from .crawler import StickerCrawler
from .downloader import StickerDownloader
from .fetcher import BrowserPageFetcher, HttpPageFetcher, create_client
from .models import CrawlResult
from .search import SearchPaginator
from .urls import is_absolute_url, looks_like_url

logger = logging.getLogger(__name__)


class TargetKind(str, Enum):
    """How a command-line target is processed."""

    URL = "url"
    QUERY = "query"
    INVALID = "invalid"


def classify_target(value: str) -> TargetKind:
    """Decide whether a target is a seed URL, a search query or unusable."""
    value = value.strip()
    if not value:
        return TargetKind.INVALID
    if is_absolute_url(value):
        return TargetKind.URL
    if looks_like_url(value):
        return TargetKind.INVALID
    return TargetKind.QUERY


async def process_target(
    target: str,
    crawler: StickerCrawler,
    search: SearchPaginator,
) -> CrawlResult:
    """Crawl one target, logging and recording a failure instead of raising."""
    target = target.strip()
    result = CrawlResult(target=target)
    kind = classify_target(target)

    if kind is TargetKind.INVALID:
        result.error = f"{target!r} is not a valid URL"
        logger.error(f"{target!r} is not a valid URL, skipping.")
        return result

    try:
        if kind is TargetKind.URL:
            logger.info(f"Crawling {target}")
            await crawler.crawl(target, result)
        else:
            logger.info(f"Searching for {target!r}")
            await search.crawl_search_query(target, result)
    except Exception as e:
        result.error = str(e) or type(e).__name__
        logger.error(f"Failed to process {target}: {result.error}")

    return result


async def run_crawler(
    targets: list[str],
    config: CrawlerConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[CrawlResult]:
    """Crawl every target one after another.

    Args:
        targets: Seed URLs and search queries
        config: Crawler settings
        transport: Optional HTTP transport, e.g. a mock in tests

    Returns:
        One CrawlResult per target
    """
    results: list[CrawlResult] = []

    async with create_client(config.timeout, transport) as client:
        if config.use_browser:
            fetcher = BrowserPageFetcher(headless=config.headless, timeout=config.timeout)
        else:
            fetcher = HttpPageFetcher(client)

        async with fetcher:
            downloader = StickerDownloader(client, skip_existing=config.skip_existing)
            crawler = StickerCrawler(fetcher, downloader, config)
            search = SearchPaginator(client, crawler, config.base_url, config.page_size)

            for target in targets:
                results.append(await process_target(target, crawler, search))

    total_files = sum(r.files_downloaded for r in results)
    total_products = sum(r.product_pages for r in results)
    logger.info(f"Crawl complete: {total_products} products, {total_files} files")
    return results


def exit_status(targets: list[str]) -> int:
    """Return 1 if any target could not even be attempted, else 0."""
    if any(classify_target(target) is TargetKind.INVALID for target in targets):
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="LINE Sticker Crawler - Download sticker images, animations and sounds"
    )
    parser.add_argument(
        "targets",
        nargs="+",
        help="Sticker product/author page URLs or free-text search queries",
    )
    parser.add_argument(
        "-o", "--output",
        default=".",
        help="Output directory for product folders (default: current directory)"
    )
    parser.add_argument(
        "--base-url",
        default=STORE_BASE_URL,
        help=f"Store base URL used for searches (default: {STORE_BASE_URL})"
    )
    parser.add_argument(
        "--page-size",
        type=int,
        default=36,
        help="Search results requested per call (default: 36)"
    )
    parser.add_argument(
        "-t", "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)"
    )
    parser.add_argument(
        "--no-skip",
        action="store_true",
        help="Re-download files that already exist"
    )
    parser.add_argument(
        "--no-revisit",
        action="store_true",
        help="Fetch each page at most once per target"
    )
    parser.add_argument(
        "--browser",
        action="store_true",
        help="Fetch pages through a Chromium browser (Playwright)"
    )
    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Show browser window (with --browser)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )

    config = CrawlerConfig(
        base_url=args.base_url,
        output_dir=Path(args.output),
        page_size=args.page_size,
        timeout=args.timeout,
        skip_existing=not args.no_skip,
        revisit_pages=not args.no_revisit,
        use_browser=args.browser,
        headless=not args.no_headless,
    )

    try:
        results = asyncio.run(run_crawler(args.targets, config))
    except KeyboardInterrupt:
        logger.info("Crawl interrupted by user")
        return 1

    print(f"\n{'='*50}")
    print("Crawl Complete!")
    print(f"{'='*50}")
    for result in results:
        status = "ok" if result.succeeded else f"failed: {result.error}"
        print(f"{result.target}")
        print(f"  Pages:    {result.pages_fetched} ({result.listing_pages} listing, {result.product_pages} product)")
        print(f"  Files:    {result.files_downloaded} downloaded, {result.files_skipped} skipped")
        print(f"  Status:   {status}")
    print(f"Output Dir: {config.output_dir}")
    print(f"{'='*50}")

    return exit_status(args.targets)


if __name__ == "__main__":
    sys.exit(main())
