"""
Version endpoint checker for domain health checks.

Probes ``https://<host>/git`` for the deployed build hash and evaluates it
against the configured git pattern.
"""

import logging
import re
import time
from typing import Optional, Pattern

import aiohttp

from ..models import VersionProbe
from .base_checker import BaseChecker
from .http import REQUEST_ERRORS, fetch_text
from .pwa import PWAHashExtractor

logger = logging.getLogger(__name__)


# App shells are recognised by their <head> element
HTML_HEAD_PATTERN = re.compile(r'<head[\s>]', re.IGNORECASE)


class VersionChecker(BaseChecker):
    """
    Checker for the build hash exposed by a host.

    A git pattern only ever matches when one is configured and the endpoint
    answered 200; without a pattern every host is reported as not matching.
    """

    def __init__(
        self,
        timeout: float = 15,
        git_pattern: Optional[Pattern] = None,
        version_path: str = '/git',
        extractor: Optional[PWAHashExtractor] = None
    ):
        super().__init__(timeout=timeout)
        self.git_pattern = git_pattern
        self.version_path = version_path
        self.extractor = extractor or PWAHashExtractor()

    async def check(self, host: str, session: aiohttp.ClientSession = None, **kwargs) -> VersionProbe:
        """
        Probe the version endpoint of the host.

        Args:
            host: The host name to check
            session: Shared HTTP session
            **kwargs: Additional parameters (unused)

        Returns:
            VersionProbe with hash, status code and match flag
        """
        base_url = f"https://{host}"
        url = base_url + self.version_path
        start_time = time.time()

        try:
            status_code, body = await fetch_text(session, url)
        except REQUEST_ERRORS as e:
            logger.warning(f"Version probe for {host} failed: {str(e) or type(e).__name__}")
            return VersionProbe.unavailable()
        except ValueError as e:
            # Host names that cannot form a valid URL, e.g. empty IDNA labels
            logger.warning(f"Version probe for {host} failed: invalid URL {url}: {str(e) or type(e).__name__}")
            return VersionProbe.unavailable()

        logger.debug(f"GET {url} returned {status_code} in {time.time() - start_time:.3f}s")

        if status_code != 200:
            return VersionProbe(hash="", status_code=status_code, matched=False)

        if body is None:
            return VersionProbe.unavailable(status_code=status_code)

        version_hash = self.parse_body(body)
        if self.looks_like_html(version_hash):
            logger.debug(f"{url} returned an HTML document, extracting hash from PWA bundle")
            version_hash = await self.extractor.extract(base_url, session)

        return VersionProbe(
            hash=version_hash,
            status_code=status_code,
            matched=self.match_hash(version_hash)
        )

    @staticmethod
    def parse_body(body: str) -> str:
        """Strip a single trailing newline from the endpoint body."""
        if body.endswith("\n"):
            return body[:-1]
        return body

    @staticmethod
    def looks_like_html(body: str) -> bool:
        return bool(HTML_HEAD_PATTERN.search(body))

    def match_hash(self, version_hash: str) -> bool:
        """Whether the hash satisfies the git pattern; False without a pattern."""
        if self.git_pattern is None:
            return False
        return bool(self.git_pattern.search(version_hash))
