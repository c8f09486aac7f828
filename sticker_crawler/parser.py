"""HTML parser for LINE STORE product and listing pages."""

import json
import logging
import re
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from pydantic import ValidationError

from .errors import MalformedStickerData, MissingTitle
from .models import StickerRecord
from .urls import resolve

logger = logging.getLogger(__name__)

INVALID_DIRECTORY_CHARS = re.compile(r'[<>:"\\|?*]')


def sanitize_directory_name(name: str) -> str:
    """Turn a product title into a directory name.

    ``/`` becomes ``_`` and the characters ``< > : " \\ | ? *`` are removed.
    Everything else, including non-ASCII text, is kept as is.
    """
    return INVALID_DIRECTORY_CHARS.sub("", name.replace("/", "_"))


@dataclass
class ProductPage:
    """Parsed content of a product page."""

    title: str
    stickers: dict[str, StickerRecord] = field(default_factory=dict)

    @property
    def directory_name(self) -> str:
        return sanitize_directory_name(self.title)


class StickerPageParser:
    """Parser for sticker shop markup."""

    TITLE_SELECTOR = 'p[data-test="sticker-name-title"]'
    STICKER_SELECTOR = "li.FnStickerPreviewItem"
    AUTHOR_ITEM_SELECTOR = 'li[data-test="author-item"]'
    NEXT_PAGE_SELECTOR = 'a[data-test="next-btn"]'
    PREVIEW_ATTRIBUTE = "data-preview"

    def __init__(self, features: str = "html.parser"):
        """Initialize parser.

        Args:
            features: BeautifulSoup tree builder to use
        """
        self.features = features

    def _soup(self, page: BeautifulSoup | str) -> BeautifulSoup:
        if isinstance(page, BeautifulSoup):
            return page
        return BeautifulSoup(page, self.features)

    def parse_product(self, html: str, url: str | None = None) -> ProductPage:
        """Parse title and sticker data of a product page.

        Args:
            html: HTML content
            url: Page URL, used in error messages

        Returns:
            ProductPage

        Raises:
            MissingTitle: If the page has no title element
            MalformedStickerData: If a preview item holds invalid JSON
        """
        soup = self._soup(html)
        try:
            title = self.extract_title(soup)
        except MissingTitle:
            raise MissingTitle(url) from None
        stickers = self.extract_sticker_data(soup)
        return ProductPage(title=title, stickers=stickers)

    def extract_title(self, page: BeautifulSoup | str) -> str:
        """Extract the product title.

        Raises:
            MissingTitle: If the title element is absent
        """
        element = self._soup(page).select_one(self.TITLE_SELECTOR)
        if element is None:
            raise MissingTitle()
        return element.get_text().strip()

    def extract_sticker_data(self, page: BeautifulSoup | str) -> dict[str, StickerRecord]:
        """Extract sticker records keyed by sticker id.

        Items without a data-preview attribute are skipped. One item with
        data that does not decode to a sticker record fails the whole page.

        Raises:
            MalformedStickerData: If a data-preview value is not a valid record
        """
        stickers: dict[str, StickerRecord] = {}

        for item in self._soup(page).select(self.STICKER_SELECTOR):
            raw = item.get(self.PREVIEW_ATTRIBUTE)
            if raw is None:
                continue

            record = self._parse_record(raw)
            if not record.id:
                logger.debug(f"Skipping sticker preview without id: {raw[:80]}")
                continue
            stickers[record.id] = record

        logger.debug(f"Found {len(stickers)} stickers")
        return stickers

    def _parse_record(self, raw: str) -> StickerRecord:
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise MalformedStickerData(raw, str(e)) from e

        if not isinstance(data, dict):
            raise MalformedStickerData(raw, f"expected a JSON object, got {type(data).__name__}")

        try:
            return StickerRecord.model_validate(data)
        except ValidationError as e:
            raise MalformedStickerData(raw, str(e)) from e

    def extract_listing_links(self, page_url: str, page: BeautifulSoup | str) -> set[str]:
        """Extract product links and the next page link of a listing page.

        Args:
            page_url: Absolute URL of the listing page
            page: Listing page markup

        Returns:
            Set of absolute URLs

        Raises:
            InvalidUrl: If page_url is not an absolute URL
        """
        soup = self._soup(page)
        links: set[str] = set()

        for item in soup.select(self.AUTHOR_ITEM_SELECTOR):
            anchor = item.find("a")
            href = anchor.get("href") if anchor is not None else None
            if not href:
                continue
            links.add(resolve(page_url, href))

        next_button = soup.select_one(self.NEXT_PAGE_SELECTOR)
        if next_button is not None and next_button.get("href"):
            links.add(resolve(page_url, next_button["href"]))

        return links
