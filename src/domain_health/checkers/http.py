"""
HTTP helpers shared by the version checker and PWA hash extraction.
"""

import asyncio
import logging
from typing import Optional, Tuple

import aiohttp

logger = logging.getLogger(__name__)


# Exceptions that mean a request could not be completed
REQUEST_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def create_session(timeout: float, verify_ssl: bool = True) -> aiohttp.ClientSession:
    """
    Create the HTTP session shared by all host checks.

    The session's total timeout is the only cancellation mechanism for
    requests; its connection pool is reused across hosts.

    Args:
        timeout: Per-request total timeout in seconds
        verify_ssl: Whether to verify TLS certificates

    Returns:
        Configured aiohttp.ClientSession (must be closed by the caller)
    """
    connector = aiohttp.TCPConnector(ssl=verify_ssl)
    return aiohttp.ClientSession(
        timeout=aiohttp.ClientTimeout(total=timeout),
        connector=connector
    )


async def fetch_text(session: aiohttp.ClientSession, url: str) -> Tuple[int, Optional[str]]:
    """
    Send a GET request and read the body as text.

    Redirects are followed. A failure while reading the body does not
    raise; the status code is still returned with a None body.

    Args:
        session: Shared HTTP session
        url: The URL to request

    Returns:
        Tuple of (status_code, body or None if the body could not be read)

    Raises:
        aiohttp.ClientError: If the request fails
        asyncio.TimeoutError: If the request times out
    """
    async with session.get(url, allow_redirects=True) as response:
        try:
            body = await response.text(errors='replace')
        except REQUEST_ERRORS as e:
            logger.warning(f"Failed to read response body from {url}: {str(e) or type(e).__name__}")
            body = None

        return response.status, body
