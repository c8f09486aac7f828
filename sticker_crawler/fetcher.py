"""Page sources: plain HTTP and Playwright browser."""

import logging

import httpx
from playwright.async_api import Browser, Page, Playwright, async_playwright

from .config import USER_AGENT

logger = logging.getLogger(__name__)


def create_client(timeout: float = 30.0, transport: httpx.AsyncBaseTransport | None = None) -> httpx.AsyncClient:
    """Create the HTTP client shared by page fetching, search and downloads.

    Args:
        timeout: Request timeout in seconds
        transport: Optional transport, e.g. a mock in tests

    Returns:
        Configured httpx.AsyncClient
    """
    return httpx.AsyncClient(
        timeout=timeout,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
        transport=transport,
    )


class HttpPageFetcher:
    """Fetches page HTML with a plain HTTP GET."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def __aenter__(self) -> "HttpPageFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        return None

    async def fetch(self, url: str) -> str:
        """Get the HTML of a page.

        Raises:
            httpx.HTTPError: If the request fails or the status is not 2xx
        """
        logger.debug(f"GET {url}")
        response = await self._client.get(url)
        response.raise_for_status()
        return response.text


class BrowserPageFetcher:
    """Fetches page HTML through a Chromium browser driven by Playwright."""

    def __init__(self, headless: bool = True, timeout: float = 30.0):
        """Initialize fetcher.

        Args:
            headless: Run browser in headless mode
            timeout: Navigation timeout in seconds
        """
        self.headless = headless
        self.timeout = timeout
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None

    async def __aenter__(self) -> "BrowserPageFetcher":
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def start(self) -> None:
        """Start the browser."""
        self._playwright = await async_playwright().start()
        try:
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            self._page = await self._browser.new_page()
            self._page.set_default_timeout(self.timeout * 1000)

            await self._page.set_extra_http_headers({"User-Agent": USER_AGENT})
        except Exception:
            await self.close()
            raise
        logger.info("Browser started")

    async def close(self) -> None:
        """Close the browser."""
        if self._browser:
            await self._browser.close()
            self._browser = None
            self._page = None
            logger.info("Browser closed")
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def fetch(self, url: str) -> str:
        """Get the rendered HTML of a page."""
        if not self._page:
            raise RuntimeError("Browser not started. Call start() first.")

        logger.debug(f"Navigating to {url}")
        await self._page.goto(url, wait_until="networkidle")
        return await self._page.content()
