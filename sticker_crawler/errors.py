"""Exceptions raised by the sticker crawler."""


class StickerCrawlerError(Exception):
    """Base class for crawler errors."""


class InvalidUrl(StickerCrawlerError):
    """A value that must be an absolute URL could not be parsed as one."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid absolute URL: {url!r}")


class MissingTitle(StickerCrawlerError):
    """The page has no sticker title element."""

    def __init__(self, url: str | None = None):
        self.url = url
        message = (
            "Could not find the sticker-name-title in the document. "
            "Please check that the URL points to a valid sticker page."
        )
        if url:
            message = f"{message} ({url})"
        super().__init__(message)


class MalformedStickerData(StickerCrawlerError):
    """A sticker preview item carries data-preview that is not a sticker record."""

    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"Malformed sticker data: {reason}")


class NoExtension(StickerCrawlerError):
    """No file extension can be inferred from an asset URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Could not infer a file extension from {url}")
