"""Crawl driver for LINE STORE listing and product pages."""

import logging
from pathlib import Path
from typing import Protocol

from .config import CrawlerConfig
from .downloader import StickerDownloader
from .errors import InvalidUrl, MissingTitle
from .models import CrawlResult, ProductDownload
from .parser import StickerPageParser
from .urls import is_absolute_url, is_listing_url

logger = logging.getLogger(__name__)


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class StickerCrawler:
    """Depth-first crawler over listing (author) and product pages.

    Pending URLs live on a stack, so the links found on a listing page are
    visited before anything pushed earlier. Unless ``revisit_pages`` is
    turned off, a page reachable by several paths is fetched every time.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        downloader: StickerDownloader,
        config: CrawlerConfig | None = None,
        parser: StickerPageParser | None = None,
    ):
        """Initialize crawler.

        Args:
            fetcher: Page source returning HTML for a URL
            downloader: Asset downloader
            config: Crawler settings
            parser: Markup parser
        """
        self.fetcher = fetcher
        self.downloader = downloader
        self.config = config or CrawlerConfig()
        self.parser = parser or StickerPageParser()

    async def crawl(self, initial_url: str, result: CrawlResult | None = None) -> CrawlResult:
        """Crawl everything reachable from one seed URL.

        The first error aborts the crawl and propagates. Counts recorded on
        ``result`` up to that point are kept.

        Args:
            initial_url: Absolute URL of a listing or product page
            result: Result to record progress on, created if omitted

        Returns:
            CrawlResult of the crawl
        """
        if result is None:
            result = CrawlResult(target=initial_url)
        if not is_absolute_url(initial_url):
            raise InvalidUrl(initial_url)

        frontier: list[str] = [initial_url]
        visited: set[str] = set()

        while frontier:
            url = frontier.pop()
            if not self.config.revisit_pages:
                if url in visited:
                    logger.debug(f"Already visited: {url}")
                    continue
                visited.add(url)

            logger.info(f"Fetching {url}")
            html = await self.fetcher.fetch(url)
            result.pages_fetched += 1

            if is_listing_url(url, self.config.listing_marker):
                links = self.process_listing_page(url, html)
                result.listing_pages += 1
                frontier.extend(sorted(links))
            else:
                await self.process_product_page(url, html, result)

        return result

    def process_listing_page(self, url: str, html: str) -> set[str]:
        """Collect the product and next page links of a listing page."""
        links = self.parser.extract_listing_links(url, html)
        logger.info(f"Found {len(links)} links on {url}")
        return links

    async def process_product_page(self, url: str, html: str, result: CrawlResult) -> ProductDownload:
        """Download the assets of every sticker on a product page."""
        page = self.parser.parse_product(html, url)
        if page.directory_name.strip() in ("", ".", ".."):
            raise MissingTitle(url)
        directory = Path(self.config.output_dir) / page.directory_name

        logger.info(f"Creating dir: {directory}")
        directory.mkdir(parents=True, exist_ok=True)

        product = ProductDownload(
            title=page.title,
            directory=str(directory),
            url=url,
            sticker_count=len(page.stickers),
        )
        result.add_product(product)

        for record in page.stickers.values():
            await self.downloader.download_sticker(record, directory, product, result)

        logger.info(
            f"  Downloaded {len(product.files)} files for '{page.title}'"
            f" ({len(product.skipped)} already present)"
        )
        return product
