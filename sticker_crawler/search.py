"""Keyword search over the LINE STORE sticker search API."""

import logging

import httpx

from .crawler import StickerCrawler
from .models import CrawlResult, SearchPage
from .urls import join_product_url

logger = logging.getLogger(__name__)


class SearchPaginator:
    """Pages through search results and crawls every product found."""

    SEARCH_PATH = "/api/search/sticker"

    def __init__(
        self,
        client: httpx.AsyncClient,
        crawler: StickerCrawler,
        base_url: str,
        page_size: int = 36,
    ):
        """Initialize paginator.

        Args:
            client: HTTP client for the search API
            crawler: Crawler each product URL is handed to
            base_url: Storefront base URL
            page_size: Number of results requested per call
        """
        self._client = client
        self.crawler = crawler
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size

    @property
    def search_url(self) -> str:
        return f"{self.base_url}{self.SEARCH_PATH}"

    async def fetch_page(self, query: str, offset: int) -> SearchPage:
        """Fetch one page of search results.

        Raises:
            httpx.HTTPError: If the request fails
            pydantic.ValidationError: If the response is not a search page
        """
        params = {
            "category": "sticker",
            "type": "ALL",
            "offset": offset,
            "limit": self.page_size,
            "includeFacets": "false",
            "query": query,
        }
        response = await self._client.get(self.search_url, params=params)
        response.raise_for_status()
        return SearchPage.model_validate_json(response.content)

    async def crawl_search_query(self, query: str, result: CrawlResult | None = None) -> CrawlResult:
        """Crawl every product returned by a search query.

        Args:
            query: Free-text search query
            result: Result to record progress on, created if omitted

        Returns:
            CrawlResult accumulated over all products
        """
        if result is None:
            result = CrawlResult(target=query)

        offset = 0
        while True:
            logger.info(f"Searching '{query}' (offset {offset})")
            page = await self.fetch_page(query, offset)
            logger.info(f"Search '{query}': {len(page.items)} items, {page.total_count} total")

            for item in page.items:
                product_url = join_product_url(self.base_url, item.product_url)
                await self.crawler.crawl(product_url, result)

            offset += self.page_size
            if offset >= page.total_count:
                break

        return result
