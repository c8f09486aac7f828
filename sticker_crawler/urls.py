"""URL helpers for pagination and link rewriting."""

from urllib.parse import SplitResult, urlsplit

from .errors import InvalidUrl

WEB_SCHEMES = ("http", "https")


def _split_absolute(url: str) -> SplitResult:
    try:
        parsed = urlsplit(url)
    except ValueError as e:
        raise InvalidUrl(url) from e
    if parsed.scheme not in WEB_SCHEMES or not parsed.hostname:
        raise InvalidUrl(url)
    return parsed


def is_absolute_url(value: str) -> bool:
    """Check whether a value parses as an absolute http(s) URL."""
    try:
        _split_absolute(value.strip())
    except InvalidUrl:
        return False
    return True


def looks_like_url(value: str) -> bool:
    """Check whether a value was meant as a URL, valid or not."""
    return "://" in value


def resolve(base_url: str, relative: str) -> str:
    """Resolve an href found on a page against the page's own URL.

    The store emits two kinds of relative references: product links are
    absolute paths (``/stickershop/product/1/en``, optionally with a query)
    while "next page" links are bare query strings (``?page=2`` or
    ``page=2``). The base query is always dropped.

    Args:
        base_url: Absolute URL of the page the href was found on
        relative: The href value

    Returns:
        Absolute URL

    Raises:
        InvalidUrl: If base_url is not an absolute URL
    """
    parsed = _split_absolute(base_url)

    if relative.startswith("/"):
        path, sep, query = relative.partition("?")
        resolved = parsed._replace(path=path, query=query if sep else "", fragment="")
    else:
        query = relative[1:] if relative.startswith("?") else relative
        resolved = parsed._replace(query=query, fragment="")

    return resolved.geturl()


def is_listing_url(url: str, marker: str = "/author/") -> bool:
    """Check whether a URL points to a listing (author) page."""
    return marker in urlsplit(url).path


def join_product_url(base_url: str, product_url: str) -> str:
    """Build an absolute product URL from a search API productUrl."""
    if is_absolute_url(product_url):
        return product_url
    return f"{base_url.rstrip('/')}/{product_url.lstrip('/')}"
