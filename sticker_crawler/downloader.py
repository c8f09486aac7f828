"""Sticker asset downloader."""

import logging
from pathlib import Path
from urllib.parse import urlsplit

import httpx

from .errors import MalformedStickerData, NoExtension
from .models import Asset, CrawlResult, ProductDownload, StickerRecord, select_assets

logger = logging.getLogger(__name__)

UNSAFE_ID_CHARS = ("/", "\\", ":")


def get_extension(url: str) -> str:
    """Infer a file extension from the last segment of a URL path.

    Args:
        url: Asset URL, query string allowed

    Returns:
        Extension without the leading dot

    Raises:
        NoExtension: If the last path segment has no suffix
    """
    segment = urlsplit(url).path.rsplit("/", 1)[-1]
    _, dot, extension = segment.rpartition(".")
    if not dot or not extension:
        raise NoExtension(url)
    return extension


def get_filename(sticker_id: str, url: str) -> str:
    """Generate the file name of a sticker asset.

    Raises:
        MalformedStickerData: If the id would leave the product directory
        NoExtension: If the URL has no file extension
    """
    if not sticker_id or ".." in sticker_id or any(c in sticker_id for c in UNSAFE_ID_CHARS):
        raise MalformedStickerData(sticker_id, f"unsafe sticker id {sticker_id!r}")
    return f"{sticker_id}.{get_extension(url)}"


class StickerDownloader:
    """Downloads sticker assets into product directories."""

    def __init__(self, client: httpx.AsyncClient, skip_existing: bool = True):
        """Initialize downloader.

        Args:
            client: HTTP client used for the downloads
            skip_existing: Skip assets whose file already exists
        """
        self._client = client
        self.skip_existing = skip_existing

    async def download_file(self, url: str, sticker_id: str, directory: Path | str) -> Path:
        """Download a single asset to ``<directory>/<sticker_id>.<ext>``.

        An existing file at that path is overwritten.

        Args:
            url: Asset URL
            sticker_id: Sticker identifier used as file stem
            directory: Destination directory, created if missing

        Returns:
            Path of the written file

        Raises:
            NoExtension: If the URL has no file extension
            httpx.HTTPError: If the request fails
        """
        filename = get_filename(sticker_id, url)
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)

        response = await self._client.get(url)
        response.raise_for_status()

        filepath = directory / filename
        filepath.write_bytes(response.content)
        logger.debug(f"Downloaded: {filepath}")
        return filepath

    async def download_asset(self, asset: Asset, directory: Path) -> tuple[Path, bool]:
        """Download one asset unless its file is already present.

        Returns:
            Tuple of (file path, whether it was skipped)
        """
        filepath = directory / get_filename(asset.sticker_id, asset.url)
        if self.skip_existing and filepath.exists():
            logger.debug(f"Skipping existing: {filepath}")
            return filepath, True

        logger.info(f"Downloading {asset.kind.value} {asset.sticker_id}: {asset.url}")
        return await self.download_file(asset.url, asset.sticker_id, directory), False

    async def download_sticker(
        self,
        record: StickerRecord,
        directory: Path,
        product: ProductDownload | None = None,
        result: CrawlResult | None = None,
    ) -> list[Path]:
        """Download the selected assets of one sticker.

        Args:
            record: Sticker record
            directory: Product directory
            product: Product entry to record files on
            result: Crawl result tracking the product

        Returns:
            Paths of the sticker's asset files, downloaded or skipped
        """
        paths: list[Path] = []
        for asset in select_assets(record):
            filepath, skipped = await self.download_asset(asset, directory)
            if product is not None and result is not None:
                result.record_file(product, str(filepath), skipped=skipped)
            paths.append(filepath)
        return paths
