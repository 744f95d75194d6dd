"""
Version hash extraction for progressive web apps.

When the version endpoint of a single-page app returns the app shell
instead of a plain hash, the hash is recovered from the main JavaScript
bundle, which logs a ``HEAD VERSION: ...`` marker.
"""

import logging
import re
from typing import Optional

import aiohttp
from bs4 import BeautifulSoup

from .http import REQUEST_ERRORS, fetch_text

logger = logging.getLogger(__name__)


class PWAHashExtractor:
    """Extracts the version hash from the main bundle of a PWA."""

    BUNDLE_MARKER = '/static/js/main'
    VERSION_PATTERN = re.compile(r'HEAD VERSION: [^)]+')

    async def extract(self, base_url: str, session: aiohttp.ClientSession) -> str:
        """
        Recover the version hash of the app served at base_url.

        Fetches the root page, follows every main bundle script and searches
        it for the version marker. The last bundle carrying a marker wins.
        Any failure yields an empty string for this host only.

        Args:
            base_url: Scheme and host, e.g. https://example.com
            session: Shared HTTP session

        Returns:
            The extracted hash, or an empty string if none was found
        """
        page = await self._get_ok(session, base_url)
        if page is None:
            return ""

        version_hash = ""
        for src in self.find_bundle_sources(page):
            script = await self._get_ok(session, self._bundle_url(base_url, src))
            if script is None:
                continue

            found = self.parse_version(script)
            if found is not None:
                version_hash = found

        if not version_hash:
            logger.debug(f"No version marker found in bundles of {base_url}")

        return version_hash

    @classmethod
    def find_bundle_sources(cls, html: str) -> list:
        """Return src attributes of main bundle scripts in document order."""
        soup = BeautifulSoup(html, 'html.parser')
        return [
            script['src']
            for script in soup.find_all('script', src=True)
            if cls.BUNDLE_MARKER in script['src']
        ]

    @classmethod
    def parse_version(cls, script: str) -> Optional[str]:
        """
        Pull the hash out of a bundle's ``HEAD VERSION: <label>,<hash>)`` marker.

        Args:
            script: JavaScript bundle source

        Returns:
            The token after the first comma, without quotes or whitespace,
            or None if the marker is absent or carries no comma
        """
        match = cls.VERSION_PATTERN.search(script)
        if not match:
            return None

        parts = match.group(0).split(',')
        if len(parts) < 2:
            return None

        return parts[1].strip().strip('"\'` ')

    @staticmethod
    def _bundle_url(base_url: str, src: str) -> str:
        if src.startswith(('http://', 'https://')):
            return src
        if src.startswith('//'):
            return f"https:{src}"
        if not src.startswith('/'):
            src = '/' + src
        return base_url.rstrip('/') + src

    async def _get_ok(self, session: aiohttp.ClientSession, url: str) -> Optional[str]:
        """Fetch url, returning the body only for a readable 200 response."""
        try:
            status, body = await fetch_text(session, url)
        except REQUEST_ERRORS as e:
            logger.warning(f"PWA hash extraction failed fetching {url}: {str(e) or type(e).__name__}")
            return None

        if status != 200:
            logger.warning(f"PWA hash extraction got status {status} from {url}")
            return None

        return body
