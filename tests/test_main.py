"""Tests for the command-line entry point."""

import asyncio

import httpx
import pytest

from conftest import product_page
from sticker_crawler.config import CrawlerConfig
from sticker_crawler.main import (
    TargetKind,
    build_parser,
    classify_target,
    exit_status,
    main,
    run_crawler,
)

PRODUCT_URL = "https://store.line.me/stickershop/product/1/en"


class TestClassifyTarget:
    """Tests for target classification."""

    def test_url(self):
        assert classify_target(PRODUCT_URL) is TargetKind.URL

    def test_query(self):
        assert classify_target("brown and cony") is TargetKind.QUERY

    @pytest.mark.parametrize("value", ["", "   ", "https://", "ftp://example.com/file"])
    def test_invalid(self, value):
        assert classify_target(value) is TargetKind.INVALID

    def test_exit_status(self):
        assert exit_status([PRODUCT_URL, "cony"]) == 0
        assert exit_status([PRODUCT_URL, "https://"]) == 1


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args(["cony"])
        assert args.targets == ["cony"]
        assert args.output == "."
        assert args.page_size == 36
        assert not args.no_skip
        assert not args.browser

    def test_requires_target(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestRunCrawler:
    """Tests for processing several targets."""

    def test_failure_does_not_stop_next_target(self, site, tmp_path):
        site.add_page(PRODUCT_URL, product_page("Good"))
        broken = "https://store.line.me/stickershop/product/2/en"
        site.add_page(broken, "<div></div>")
        config = CrawlerConfig(output_dir=tmp_path)

        results = asyncio.run(
            run_crawler([broken, "https://", PRODUCT_URL], config, transport=site.transport)
        )

        assert [r.succeeded for r in results] == [False, False, True]
        assert "sticker-name-title" in results[0].error
        assert "not a valid URL" in results[1].error
        assert (tmp_path / "Good").is_dir()

    def test_query_goes_to_search(self, tmp_path):
        requests: list[httpx.Request] = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"totalCount": 0, "items": []})

        config = CrawlerConfig(output_dir=tmp_path, base_url="https://store.example.com")
        results = asyncio.run(
            run_crawler(["brown"], config, transport=httpx.MockTransport(handler))
        )

        assert results[0].succeeded
        assert requests[0].url.host == "store.example.com"
        assert requests[0].url.path == "/api/search/sticker"
        assert requests[0].url.params["query"] == "brown"

    def test_search_without_total_count_fails(self, tmp_path):
        def handler(request):
            return httpx.Response(200, json={"items": []})

        config = CrawlerConfig(output_dir=tmp_path)
        results = asyncio.run(
            run_crawler(["brown"], config, transport=httpx.MockTransport(handler))
        )

        assert not results[0].succeeded
        assert "totalCount" in results[0].error


class TestMain:
    """Tests for the CLI entry point."""

    def test_invalid_url_exit_status(self, tmp_path, capsys):
        assert main(["https://", "-o", str(tmp_path)]) == 1
        assert "failed" in capsys.readouterr().out
