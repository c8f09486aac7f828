"""Data models for the LINE sticker crawler."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetKind(str, Enum):
    """Kind of downloadable sticker asset."""

    SOUND = "sound"
    ANIMATION = "animation"
    STATIC = "static"


class StickerRecord(BaseModel):
    """Sticker metadata embedded in a preview item's data-preview attribute."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(default="", description="Sticker identifier")
    type: str = Field(default="", description="Sticker type tag, e.g. animation_sound")
    static_url: str = Field(default="", alias="staticUrl")
    fallback_static_url: str = Field(default="", alias="fallbackStaticUrl")
    animation_url: str = Field(default="", alias="animationUrl")
    popup_url: str = Field(default="", alias="popupUrl")
    sound_url: str = Field(default="", alias="soundUrl")

    @field_validator(
        "id",
        "type",
        "static_url",
        "fallback_static_url",
        "animation_url",
        "popup_url",
        "sound_url",
        mode="before",
    )
    @classmethod
    def _null_to_empty(cls, value):
        return "" if value is None else value


class Asset(BaseModel):
    """A single file to download for a sticker."""

    sticker_id: str
    url: str
    kind: AssetKind


def select_assets(record: StickerRecord) -> list[Asset]:
    """Pick the assets to download for a sticker.

    The sound file is independent of the visual one. For the visual file the
    animation wins over the static image.
    """
    assets: list[Asset] = []
    if record.sound_url:
        assets.append(Asset(sticker_id=record.id, url=record.sound_url, kind=AssetKind.SOUND))
    if record.animation_url:
        assets.append(
            Asset(sticker_id=record.id, url=record.animation_url, kind=AssetKind.ANIMATION)
        )
    elif record.static_url:
        assets.append(Asset(sticker_id=record.id, url=record.static_url, kind=AssetKind.STATIC))
    return assets


class SearchItem(BaseModel):
    """One hit of the sticker search API."""

    model_config = ConfigDict(populate_by_name=True)

    product_url: str = Field(alias="productUrl", description="Product path, e.g. /stickershop/product/1/en")


class SearchPage(BaseModel):
    """One page of the sticker search API."""

    model_config = ConfigDict(populate_by_name=True)

    total_count: int = Field(alias="totalCount")
    items: list[SearchItem] = Field(default_factory=list)


class ProductDownload(BaseModel):
    """A product page that was processed during a crawl."""

    title: str = Field(description="Product title as shown on the page")
    directory: str = Field(description="Local directory holding the assets")
    url: str = Field(description="Product page URL")
    sticker_count: int = Field(default=0)
    files: list[str] = Field(default_factory=list, description="Files written")
    skipped: list[str] = Field(default_factory=list, description="Files already present")
    crawled_at: datetime = Field(default_factory=datetime.now)


class CrawlResult(BaseModel):
    """Progress of one crawl target (seed URL or search query)."""

    target: str = Field(description="Seed URL or search query")
    started_at: datetime = Field(default_factory=datetime.now)
    pages_fetched: int = Field(default=0)
    listing_pages: int = Field(default=0)
    product_pages: int = Field(default=0)
    products: list[ProductDownload] = Field(default_factory=list)
    files_downloaded: int = Field(default=0)
    files_skipped: int = Field(default=0)
    error: str | None = Field(default=None, description="Message of the error that stopped the crawl")

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def add_product(self, product: ProductDownload) -> None:
        """Add a product and update counts."""
        self.products.append(product)
        self.product_pages = len(self.products)

    def record_file(self, product: ProductDownload, path: str, skipped: bool = False) -> None:
        """Track a file written (or skipped) for a product already added."""
        if skipped:
            product.skipped.append(path)
            self.files_skipped += 1
        else:
            product.files.append(path)
            self.files_downloaded += 1
