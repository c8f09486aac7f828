"""Crawler configuration."""

from pathlib import Path

from pydantic import BaseModel, Field

STORE_BASE_URL = "https://store.line.me"

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class CrawlerConfig(BaseModel):
    """Settings shared by every crawl target of one run."""

    base_url: str = Field(default=STORE_BASE_URL, description="Storefront base URL for search")
    output_dir: Path = Field(default=Path("."), description="Root directory for product folders")
    page_size: int = Field(default=36, gt=0, description="Search API page size")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")
    skip_existing: bool = Field(default=True, description="Skip assets already on disk")
    revisit_pages: bool = Field(
        default=True,
        description="Fetch a page again when it is reached by another path",
    )
    listing_marker: str = Field(default="/author/", description="Path segment of listing pages")
    use_browser: bool = Field(default=False, description="Fetch pages through Playwright")
    headless: bool = Field(default=True, description="Run the browser in headless mode")
