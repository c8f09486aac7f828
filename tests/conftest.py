"""Shared fixtures for sticker crawler tests."""

import httpx
import pytest

STICKER_ITEMS_HTML = """
<ul>
    <li class="for_testing"></li>
    <li class="mdCMN09Li FnStickerPreviewItem animation_sound-sticker " data-preview="{ &quot;type&quot; : &quot;animation_sound&quot;, &quot;id&quot; : &quot;20578528&quot;, &quot;staticUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/20578528/iPhone/sticker@2x.png?v=1&quot;, &quot;fallbackStaticUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/20578528/iPhone/sticker@2x.png?v=1&quot;, &quot;animationUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/20578528/iPhone/sticker_animation@2x.png?v=1&quot;, &quot;popupUrl&quot; : &quot;&quot;, &quot;soundUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/20578528/android/sticker_sound.m4a?v=1&quot; }" data-test="sticker-item"></li>
    <li class="for_testing" data-preview="{ &quot;type&quot; : &quot;animation&quot;, &quot;id&quot; : &quot;1&quot;}"></li>
    <li class="mdCMN09Li FnStickerPreviewItem animation-sticker " data-preview="{ &quot;type&quot; : &quot;animation&quot;, &quot;id&quot; : &quot;651763951&quot;, &quot;staticUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/651763951/iPhone/sticker@2x.png?v=2&quot;, &quot;fallbackStaticUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/651763951/iPhone/sticker@2x.png?v=2&quot;, &quot;animationUrl&quot; : &quot;https://stickershop.line-scdn.net/stickershop/v1/sticker/651763951/iPhone/sticker_animation@2x.png?v=2&quot;, &quot;popupUrl&quot; : &quot;&quot;, &quot;soundUrl&quot; : &quot;&quot; }" data-test="sticker-item">
    <li class="for_testing"></li>
</ul>
"""

SOUND_STICKER_ITEM = (
    '<li class="mdCMN09Li FnStickerPreviewItem" data-preview="{ &quot;id&quot; : &quot;20578528&quot;, '
    '&quot;staticUrl&quot; : &quot;https://cdn.example.com/sticker/20578528/iPhone/sticker@2x.png?v=1&quot;, '
    '&quot;animationUrl&quot; : &quot;https://cdn.example.com/sticker/20578528/iPhone/sticker_animation@2x.png?v=1&quot;, '
    '&quot;soundUrl&quot; : &quot;https://cdn.example.com/sticker/20578528/android/sticker_sound.m4a?v=1&quot; }"></li>'
)


def product_page(title: str, items: str = "") -> str:
    """Build a minimal product page."""
    return (
        "<html><body>"
        f'<div class="mdCMN38Item0lHead"><p class="mdCMN38Item01Ttl" data-test="sticker-name-title">{title}</p></div>'
        f"<ul>{items}</ul>"
        "</body></html>"
    )


def listing_page(product_hrefs: list[str], next_href: str | None = None) -> str:
    """Build a minimal author listing page."""
    items = "".join(
        f'<li class="mdCMN02Li" data-test="author-item"><a href="{href}">item</a></li>'
        for href in product_hrefs
    )
    next_button = f'<a data-test="next-btn" href="{next_href}">Next</a>' if next_href else ""
    return f"<html><body><ul>{items}</ul>{next_button}</body></html>"


class FakeSite:
    """Routes requests to canned responses and records every request."""

    def __init__(self):
        self.routes: dict[str, tuple[int, bytes]] = {}
        self.requests: list[httpx.Request] = []

    def add_page(self, url: str, html: str, status: int = 200) -> None:
        self.routes[url] = (status, html.encode("utf-8"))

    def add_file(self, url: str, content: bytes) -> None:
        self.routes[url] = (200, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, content = self.routes.get(str(request.url), (404, b"not found"))
        return httpx.Response(status, content=content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def requested_urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


@pytest.fixture
def site():
    """Create an empty fake site."""
    return FakeSite()
