"""
Tests for PWA hash extraction.

Tests bundle discovery, marker parsing, and per-host degradation on fetch
failures.
"""

from unittest.mock import AsyncMock, Mock, patch

import aiohttp
import pytest

from domain_health.checkers.pwa import PWAHashExtractor


FETCH = 'domain_health.checkers.pwa.fetch_text'

BASE_URL = "https://app.example.com"

APP_SHELL = """<!doctype html>
<html>
<head>
  <script defer="defer" src="/static/js/vendor.1a2b.js"></script>
  <script defer="defer" src="/static/js/main.9f8e.js"></script>
  <script>window.inline = true</script>
</head>
<body><div id="root"></div></body>
</html>
"""

BUNDLE = 'n.p="/";console.log("HEAD VERSION: ","4f2a9c1");var e=1;'


def fake_fetch(pages):
    """Build a fetch_text replacement serving the given url -> response map."""
    async def fetch(session, url):
        response = pages[url]
        if isinstance(response, Exception):
            raise response
        return response
    return fetch


@pytest.fixture
def extractor():
    return PWAHashExtractor()


class TestFindBundleSources:
    """Tests for find_bundle_sources."""

    def test_only_main_bundles(self):
        assert PWAHashExtractor.find_bundle_sources(APP_SHELL) == ["/static/js/main.9f8e.js"]

    def test_no_scripts(self):
        assert PWAHashExtractor.find_bundle_sources("<html><head></head></html>") == []

    def test_multiple_main_bundles_in_order(self):
        html = (
            '<script src="/static/js/main.1.js"></script>'
            '<script src="/static/js/main.2.js"></script>'
        )

        assert PWAHashExtractor.find_bundle_sources(html) == [
            "/static/js/main.1.js",
            "/static/js/main.2.js",
        ]


class TestParseVersion:
    """Tests for parse_version."""

    def test_token_after_comma(self):
        assert PWAHashExtractor.parse_version(BUNDLE) == "4f2a9c1"

    def test_single_quotes_and_spaces(self):
        script = "console.info('HEAD VERSION: ', 'deadbeef')"

        assert PWAHashExtractor.parse_version(script) == "deadbeef"

    def test_marker_missing(self):
        assert PWAHashExtractor.parse_version('console.log("hello")') is None

    def test_marker_without_comma(self):
        assert PWAHashExtractor.parse_version('console.log("HEAD VERSION: abc")') is None


class TestExtract:
    """Tests for PWAHashExtractor.extract."""

    @pytest.mark.asyncio
    async def test_extract_from_main_bundle(self, extractor):
        """Test the hash is read from the main bundle."""
        pages = {
            BASE_URL: (200, APP_SHELL),
            BASE_URL + "/static/js/main.9f8e.js": (200, BUNDLE),
        }

        with patch(FETCH, fake_fetch(pages)):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == "4f2a9c1"

    @pytest.mark.asyncio
    async def test_last_bundle_with_marker_wins(self, extractor):
        """Test that later bundles override earlier markers."""
        html = (
            '<script src="/static/js/main.1.js"></script>'
            '<script src="/static/js/main.2.js"></script>'
            '<script src="/static/js/main.3.js"></script>'
        )
        pages = {
            BASE_URL: (200, html),
            BASE_URL + "/static/js/main.1.js": (200, 'log("HEAD VERSION: ","first")'),
            BASE_URL + "/static/js/main.2.js": (200, 'log("HEAD VERSION: ","second")'),
            BASE_URL + "/static/js/main.3.js": (200, 'no marker here'),
        }

        with patch(FETCH, fake_fetch(pages)):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == "second"

    @pytest.mark.asyncio
    async def test_no_matching_script(self, extractor):
        """Test empty hash when no main bundle is referenced."""
        pages = {BASE_URL: (200, '<script src="/app.js"></script>')}

        with patch(FETCH, fake_fetch(pages)):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == ""

    @pytest.mark.asyncio
    async def test_root_page_failure(self, extractor):
        """Test that a failing root page yields an empty hash."""
        pages = {BASE_URL: aiohttp.ClientConnectionError("reset")}

        with patch(FETCH, fake_fetch(pages)):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == ""

    @pytest.mark.asyncio
    async def test_root_page_non_200(self, extractor):
        """Test that a non-200 root page yields an empty hash."""
        fetch = AsyncMock(return_value=(503, "unavailable"))

        with patch(FETCH, fetch):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == ""
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_bundle_fetch_failure(self, extractor):
        """Test that a failing bundle fetch yields an empty hash."""
        pages = {
            BASE_URL: (200, APP_SHELL),
            BASE_URL + "/static/js/main.9f8e.js": aiohttp.ClientPayloadError("truncated"),
        }

        with patch(FETCH, fake_fetch(pages)):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == ""

    @pytest.mark.asyncio
    async def test_bundle_non_200(self, extractor):
        """Test that a missing bundle yields an empty hash."""
        pages = {
            BASE_URL: (200, APP_SHELL),
            BASE_URL + "/static/js/main.9f8e.js": (404, BUNDLE),
        }

        with patch(FETCH, fake_fetch(pages)):
            result = await extractor.extract(BASE_URL, Mock())

        assert result == ""


class TestBundleUrl:
    """Tests for bundle URL resolution."""

    @pytest.mark.parametrize("src,expected", [
        ("/static/js/main.js", "https://app.example.com/static/js/main.js"),
        ("static/js/main.js", "https://app.example.com/static/js/main.js"),
        ("https://cdn.example.net/static/js/main.js", "https://cdn.example.net/static/js/main.js"),
        ("//cdn.example.net/static/js/main.js", "https://cdn.example.net/static/js/main.js"),
    ])
    def test_bundle_url(self, src, expected):
        assert PWAHashExtractor._bundle_url(BASE_URL, src) == expected
